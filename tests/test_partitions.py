import pytest

from errors import InternalConsistencyFault, InvalidInput, InvalidUnitNumber
from utils.partitions import (
    JUZS,
    MANZILS,
    Partition,
    PartitionKind,
    get_partition,
    locate_ayah,
)
from utils.quran_data import TOTAL_AYAHS, AyahKey, absolute_to_ayah_key

MANZIL_RANGES = [
    (1, 669),
    (670, 1364),
    (1365, 2029),
    (2030, 2932),
    (2933, 3788),
    (3789, 4630),
    (4631, 6236),
]


@pytest.mark.parametrize("partition", [MANZILS, JUZS], ids=["manzil", "juz"])
def test_units_cover_index_space_exactly_once(partition):
    assert partition.units[0].start_absolute == 1
    assert partition.units[-1].end_absolute == TOTAL_AYAHS
    for prev, nxt in zip(partition.units, partition.units[1:]):
        assert nxt.start_absolute == prev.end_absolute + 1
    assert sum(u.verse_count for u in partition.units) == TOTAL_AYAHS


def test_manzil_bounds():
    assert MANZILS.size == 7
    assert [(u.start_absolute, u.end_absolute) for u in MANZILS.units] == MANZIL_RANGES
    assert str(MANZILS.get_unit(1).end_key) == "4:176"
    assert str(MANZILS.get_unit(4).start_key) == "17:1"
    assert str(MANZILS.get_unit(7).end_key) == "114:6"


def test_juz_bounds():
    assert JUZS.size == 30
    juz1, juz2 = JUZS.get_unit(1), JUZS.get_unit(2)
    assert (juz1.start_absolute, juz1.end_absolute) == (1, 148)
    assert str(juz1.end_key) == "2:141"
    assert juz2.start_key == AyahKey(2, 142)
    assert juz2.start_absolute == 149
    juz30 = JUZS.get_unit(30)
    assert juz30.start_key == AyahKey(78, 1)
    assert juz30.start_absolute == 5673
    assert juz30.verse_count == 564


def test_every_verse_belongs_to_exactly_one_unit():
    for absolute in range(1, TOTAL_AYAHS + 1):
        key = absolute_to_ayah_key(absolute)
        for partition in (MANZILS, JUZS):
            holders = [u.number for u in partition.units if u.contains(key)]
            assert holders == [partition.unit_for_ayah(key)]


@pytest.mark.parametrize("absolute, manzil", [
    (1, 1), (669, 1), (670, 2), (1364, 2), (1365, 3),
    (2029, 3), (2030, 4), (4630, 6), (4631, 7), (6236, 7),
])
def test_unit_end_is_inclusive(absolute, manzil):
    assert MANZILS.unit_for_absolute(absolute) == manzil


def test_unit_for_ayah_examples():
    assert MANZILS.unit_for_ayah(AyahKey(2, 255)) == 1
    assert JUZS.unit_for_ayah(AyahKey(2, 255)) == 3
    assert JUZS.unit_for_ayah(AyahKey(2, 141)) == 1
    assert JUZS.unit_for_ayah(AyahKey(2, 142)) == 2
    assert JUZS.unit_for_ayah(AyahKey(114, 6)) == 30


@pytest.mark.parametrize("partition", [MANZILS, JUZS], ids=["manzil", "juz"])
def test_ayah_keys_in_unit_match_verse_count(partition):
    seen = set()
    for unit in partition.units:
        keys = partition.ayah_keys_in_unit(unit.number)
        assert len(keys) == unit.verse_count == partition.verse_count(unit.number)
        assert keys[0] == unit.start_key
        assert keys[-1] == unit.end_key
        assert seen.isdisjoint(keys)
        seen.update(keys)
    assert len(seen) == TOTAL_AYAHS


@pytest.mark.parametrize("kind, number", [
    (PartitionKind.MANZIL, 0),
    (PartitionKind.MANZIL, 8),
    (PartitionKind.JUZ, 0),
    (PartitionKind.JUZ, 31),
])
def test_invalid_unit_numbers(kind, number):
    partition = get_partition(kind)
    with pytest.raises(InvalidUnitNumber):
        partition.get_unit(number)
    with pytest.raises(InvalidInput):
        partition.ayah_keys_in_unit(number)


def test_get_partition_accepts_plain_strings():
    assert get_partition("manzil") is MANZILS
    assert get_partition("juz") is JUZS


def test_locate_ayah():
    assert locate_ayah(AyahKey(2, 255)) == {"absolute": 262, "manzil": 1, "juz": 3}
    assert locate_ayah(AyahKey(17, 1)) == {"absolute": 2030, "manzil": 4, "juz": 15}


def test_locate_ayah_rejects_invalid_key():
    with pytest.raises(InvalidInput):
        locate_ayah(AyahKey(1, 8))


@pytest.mark.parametrize("starts", [
    [(1, 2), (5, 1)],                # does not start at 1:1
    [(1, 1), (10, 1), (5, 1)],       # out of order
    [(1, 1), (5, 1), (5, 1)],        # duplicate start, empty unit
    [],
])
def test_broken_tables_fail_at_build_time(starts):
    with pytest.raises(InternalConsistencyFault):
        Partition(PartitionKind.MANZIL, starts)
