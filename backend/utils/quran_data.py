import re
from bisect import bisect_left
from dataclasses import dataclass
from itertools import accumulate

from errors import InvalidInput, InvalidVerseKey, OutOfRange

TOTAL_SURAHS = 114
TOTAL_AYAHS = 6236
TOTAL_PAGES = 604
TOTAL_HIZBS = 60
TOTAL_RUBS = 240  # hizb quarters (rub el hizb)

# Quran structure: ayahs per surah (1-114)
SURAH_AYAH_COUNT = (
    7, 286, 200, 176, 120, 165, 206, 75, 129, 109,
    123, 111, 43, 52, 99, 128, 111, 110, 98, 135,
    112, 78, 118, 64, 77, 227, 93, 88, 69, 60,
    34, 30, 73, 54, 45, 83, 182, 88, 75, 85,
    54, 53, 89, 59, 37, 35, 38, 29, 18, 45,
    60, 49, 62, 55, 78, 96, 29, 22, 24, 13,
    14, 11, 11, 18, 12, 12, 30, 52, 52, 44,
    28, 28, 20, 56, 40, 31, 50, 40, 46, 42,
    29, 19, 36, 25, 22, 17, 19, 26, 30, 20,
    15, 21, 11, 8, 8, 19, 5, 8, 8, 11,
    11, 8, 3, 9, 5, 4, 7, 3, 6, 3,
    5, 4, 5, 6,
)

# _SURAH_OFFSETS[i] = number of ayahs before surah i+1; last entry is the total
_SURAH_OFFSETS = (0, *accumulate(SURAH_AYAH_COUNT))

_VERSE_KEY_RE = re.compile(r"^\s*(\d{1,3})\s*[:\-]\s*(\d{1,3})\s*$")


@dataclass(frozen=True, order=True)
class AyahKey:
    surah: int
    ayah: int

    def __str__(self) -> str:
        return f"{self.surah}:{self.ayah}"

    def to_filename(self) -> str:
        return f"{self.surah:03d}{self.ayah:03d}.mp3"


def get_surah_ayah_count(surah: int) -> int:
    if not 1 <= surah <= TOTAL_SURAHS:
        raise InvalidVerseKey(f"Invalid surah number: {surah}. Must be between 1 and {TOTAL_SURAHS}.")
    return SURAH_AYAH_COUNT[surah - 1]


def validate_ayah_key(key: AyahKey) -> AyahKey:
    count = get_surah_ayah_count(key.surah)
    if not 1 <= key.ayah <= count:
        raise InvalidVerseKey(f"Invalid ayah number: {key.ayah} for surah {key.surah} (1-{count}).")
    return key


def parse_verse_key(text: str) -> AyahKey:
    """Parse "2:255" (or "2-255") into a validated AyahKey."""
    match = _VERSE_KEY_RE.match(text or "")
    if not match:
        raise InvalidVerseKey(f"Invalid verse key format: {text!r}. Expected surah:ayah")
    return validate_ayah_key(AyahKey(surah=int(match.group(1)), ayah=int(match.group(2))))


def is_valid_verse_key(text: str) -> bool:
    try:
        parse_verse_key(text)
    except InvalidVerseKey:
        return False
    return True


def ayah_key_to_absolute(key: AyahKey) -> int:
    """Absolute ayah number (1-6236) of a verse key."""
    validate_ayah_key(key)
    return _SURAH_OFFSETS[key.surah - 1] + key.ayah


def absolute_to_ayah_key(absolute: int) -> AyahKey:
    """Verse key of an absolute ayah number (1-6236)."""
    if not 1 <= absolute <= TOTAL_AYAHS:
        raise OutOfRange(f"Invalid absolute verse number: {absolute}. Must be between 1 and {TOTAL_AYAHS}.")
    # first surah whose cumulative total reaches `absolute`
    surah = bisect_left(_SURAH_OFFSETS, absolute, lo=1)
    return AyahKey(surah=surah, ayah=absolute - _SURAH_OFFSETS[surah - 1])


def get_ayahs_in_range(start: AyahKey, end: AyahKey) -> list[AyahKey]:
    """Return all AyahKey objects from start to end inclusive."""
    validate_ayah_key(start)
    validate_ayah_key(end)
    if end < start:
        raise InvalidInput(f"Range start {start} comes after range end {end}")

    ayahs = []
    for s in range(start.surah, end.surah + 1):
        a_start = start.ayah if s == start.surah else 1
        a_end = end.ayah if s == end.surah else SURAH_AYAH_COUNT[s - 1]
        for a in range(a_start, a_end + 1):
            ayahs.append(AyahKey(surah=s, ayah=a))
    return ayahs


def validate_page_number(page: int) -> int:
    if not 1 <= page <= TOTAL_PAGES:
        raise OutOfRange(f"Invalid page number: {page}. Must be between 1 and {TOTAL_PAGES}.")
    return page


def validate_hizb_number(hizb: int) -> int:
    if not 1 <= hizb <= TOTAL_HIZBS:
        raise OutOfRange(f"Invalid hizb number: {hizb}. Must be between 1 and {TOTAL_HIZBS}.")
    return hizb


def validate_rub_number(rub: int) -> int:
    if not 1 <= rub <= TOTAL_RUBS:
        raise OutOfRange(f"Invalid hizb quarter number: {rub}. Must be between 1 and {TOTAL_RUBS}.")
    return rub
