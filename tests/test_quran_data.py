"""Verse-index conversion between absolute numbers and surah:ayah keys."""
import pytest

from errors import InvalidInput, InvalidVerseKey, OutOfRange
from utils.quran_data import (
    SURAH_AYAH_COUNT,
    TOTAL_AYAHS,
    AyahKey,
    absolute_to_ayah_key,
    ayah_key_to_absolute,
    get_ayahs_in_range,
    get_surah_ayah_count,
    is_valid_verse_key,
    parse_verse_key,
    validate_hizb_number,
    validate_page_number,
    validate_rub_number,
)


def test_chapter_lengths_cover_whole_quran():
    assert len(SURAH_AYAH_COUNT) == 114
    assert sum(SURAH_AYAH_COUNT) == TOTAL_AYAHS == 6236
    assert all(n > 0 for n in SURAH_AYAH_COUNT)


@pytest.mark.parametrize("absolute, expected", [
    (1, AyahKey(1, 1)),
    (7, AyahKey(1, 7)),
    (8, AyahKey(2, 1)),
    (262, AyahKey(2, 255)),
    (293, AyahKey(2, 286)),
    (294, AyahKey(3, 1)),
    (6236, AyahKey(114, 6)),
])
def test_absolute_to_ayah_key_examples(absolute, expected):
    assert absolute_to_ayah_key(absolute) == expected
    assert ayah_key_to_absolute(expected) == absolute


def test_every_absolute_number_round_trips():
    for absolute in range(1, TOTAL_AYAHS + 1):
        assert ayah_key_to_absolute(absolute_to_ayah_key(absolute)) == absolute


def test_every_verse_key_round_trips_in_canonical_order():
    previous = 0
    for surah, count in enumerate(SURAH_AYAH_COUNT, start=1):
        for ayah in range(1, count + 1):
            key = AyahKey(surah, ayah)
            absolute = ayah_key_to_absolute(key)
            assert absolute == previous + 1
            assert absolute_to_ayah_key(absolute) == key
            previous = absolute
    assert previous == TOTAL_AYAHS


@pytest.mark.parametrize("absolute", [0, -1, 6237, 10_000])
def test_absolute_out_of_range(absolute):
    with pytest.raises(OutOfRange):
        absolute_to_ayah_key(absolute)


def test_out_of_range_is_invalid_input():
    with pytest.raises(InvalidInput):
        absolute_to_ayah_key(6237)


@pytest.mark.parametrize("key", [AyahKey(0, 1), AyahKey(115, 1), AyahKey(1, 0), AyahKey(1, 8), AyahKey(2, 287)])
def test_invalid_verse_keys_rejected(key):
    with pytest.raises(InvalidVerseKey):
        ayah_key_to_absolute(key)


def test_ayah_keys_order_lexicographically():
    assert AyahKey(1, 7) < AyahKey(2, 1) < AyahKey(2, 10) < AyahKey(10, 1)
    assert str(AyahKey(2, 255)) == "2:255"
    assert AyahKey(2, 255).to_filename() == "002255.mp3"


@pytest.mark.parametrize("text, expected", [
    ("2:255", AyahKey(2, 255)),
    ("2-255", AyahKey(2, 255)),
    (" 114:6 ", AyahKey(114, 6)),
])
def test_parse_verse_key(text, expected):
    assert parse_verse_key(text) == expected


@pytest.mark.parametrize("text", ["", "2", "2:", "a:b", "2:255:1", "1:8", "0:1", "115:1"])
def test_parse_verse_key_rejects_bad_input(text):
    with pytest.raises(InvalidVerseKey):
        parse_verse_key(text)
    assert not is_valid_verse_key(text)


def test_get_surah_ayah_count():
    assert get_surah_ayah_count(1) == 7
    assert get_surah_ayah_count(2) == 286
    assert get_surah_ayah_count(114) == 6
    with pytest.raises(InvalidVerseKey):
        get_surah_ayah_count(115)


def test_range_crosses_surah_boundary():
    keys = get_ayahs_in_range(AyahKey(1, 6), AyahKey(2, 2))
    assert keys == [AyahKey(1, 6), AyahKey(1, 7), AyahKey(2, 1), AyahKey(2, 2)]


def test_single_verse_range():
    assert get_ayahs_in_range(AyahKey(2, 255), AyahKey(2, 255)) == [AyahKey(2, 255)]


def test_reversed_range_rejected():
    with pytest.raises(InvalidInput):
        get_ayahs_in_range(AyahKey(2, 2), AyahKey(2, 1))


def test_page_numbers():
    assert validate_page_number(1) == 1
    assert validate_page_number(604) == 604
    for page in (0, 605):
        with pytest.raises(OutOfRange):
            validate_page_number(page)


def test_hizb_and_quarter_numbers():
    assert validate_hizb_number(60) == 60
    assert validate_rub_number(240) == 240
    for bad in (0, 61):
        with pytest.raises(OutOfRange):
            validate_hizb_number(bad)
    for bad in (0, 241):
        with pytest.raises(OutOfRange):
            validate_rub_number(bad)
