"""
Contiguous partitions of the 6236-ayah index space.

Each partition kind (Manzil, Juz) is defined only by the verse key each unit
starts on. Unit ends and absolute numbers are derived from the next unit's
start, so the coverage invariant (units contiguous, non-overlapping, covering
1..6236 exactly once) holds by construction and is re-checked on build.
"""
import logging
from bisect import bisect_right
from dataclasses import dataclass
from enum import Enum

from errors import InternalConsistencyFault, InvalidUnitNumber, VerseNotFound
from utils.quran_data import (
    TOTAL_AYAHS,
    AyahKey,
    absolute_to_ayah_key,
    ayah_key_to_absolute,
    get_ayahs_in_range,
    validate_ayah_key,
)

logger = logging.getLogger(__name__)


class PartitionKind(str, Enum):
    MANZIL = "manzil"
    JUZ = "juz"


@dataclass(frozen=True)
class PartitionUnit:
    kind: PartitionKind
    number: int
    start_key: AyahKey
    end_key: AyahKey
    start_absolute: int
    end_absolute: int

    @property
    def verse_count(self) -> int:
        return self.end_absolute - self.start_absolute + 1

    def contains(self, key: AyahKey) -> bool:
        return self.start_key <= key <= self.end_key


class Partition:
    def __init__(self, kind: PartitionKind, starts: list[tuple[int, int]]):
        self.kind = kind
        self.units = self._build_units(kind, starts)
        self._start_absolutes = [u.start_absolute for u in self.units]
        self._check_coverage()

    @staticmethod
    def _build_units(kind: PartitionKind, starts: list[tuple[int, int]]) -> tuple[PartitionUnit, ...]:
        start_absolutes = [ayah_key_to_absolute(AyahKey(s, a)) for s, a in starts]
        units = []
        for i, start_abs in enumerate(start_absolutes):
            end_abs = start_absolutes[i + 1] - 1 if i + 1 < len(start_absolutes) else TOTAL_AYAHS
            units.append(PartitionUnit(
                kind=kind,
                number=i + 1,
                start_key=absolute_to_ayah_key(start_abs),
                end_key=absolute_to_ayah_key(end_abs),
                start_absolute=start_abs,
                end_absolute=end_abs,
            ))
        return tuple(units)

    def _check_coverage(self) -> None:
        expected_start = 1
        for unit in self.units:
            if unit.start_absolute != expected_start or unit.end_absolute < unit.start_absolute:
                raise InternalConsistencyFault(
                    f"{self.kind.value} {unit.number} breaks coverage: "
                    f"starts at {unit.start_absolute}, expected {expected_start}"
                )
            expected_start = unit.end_absolute + 1
        if expected_start != TOTAL_AYAHS + 1:
            raise InternalConsistencyFault(f"{self.kind.value} table ends at {expected_start - 1}, not {TOTAL_AYAHS}")

    @property
    def size(self) -> int:
        return len(self.units)

    def get_unit(self, number: int) -> PartitionUnit:
        if not 1 <= number <= self.size:
            raise InvalidUnitNumber(
                f"Invalid {self.kind.value} number: {number}. Must be between 1 and {self.size}."
            )
        return self.units[number - 1]

    def unit_for_absolute(self, absolute: int) -> int:
        return self.unit_for_ayah(absolute_to_ayah_key(absolute))

    def unit_for_ayah(self, key: AyahKey) -> int:
        """Number of the unit whose closed [start, end] interval holds `key`."""
        absolute = ayah_key_to_absolute(key)
        idx = bisect_right(self._start_absolutes, absolute) - 1
        if idx >= 0 and self.units[idx].contains(key):
            return self.units[idx].number
        logger.error(f"{key} passed validation but no {self.kind.value} contains it")
        raise VerseNotFound(f"Verse {key} not found in any {self.kind.value}")

    def ayah_keys_in_unit(self, number: int) -> list[AyahKey]:
        unit = self.get_unit(number)
        return get_ayahs_in_range(unit.start_key, unit.end_key)

    def verse_count(self, number: int) -> int:
        return self.get_unit(number).verse_count


# Manzils follow surah boundaries: Al-Fatihah, Al-Ma'idah, Yunus, Al-Isra,
# Ash-Shu'ara, As-Saffat, Qaf
MANZIL_STARTS = [(1, 1), (5, 1), (10, 1), (17, 1), (26, 1), (37, 1), (50, 1)]

# Madani mushaf juz starts
JUZ_STARTS = [
    (1, 1), (2, 142), (2, 253), (3, 93), (4, 24),
    (4, 148), (5, 82), (6, 111), (7, 88), (8, 41),
    (9, 93), (11, 6), (12, 53), (15, 1), (17, 1),
    (18, 75), (21, 1), (23, 1), (25, 21), (27, 56),
    (29, 46), (33, 31), (36, 28), (39, 32), (41, 47),
    (46, 1), (51, 31), (58, 1), (67, 1), (78, 1),
]

MANZILS = Partition(PartitionKind.MANZIL, MANZIL_STARTS)
JUZS = Partition(PartitionKind.JUZ, JUZ_STARTS)

_PARTITIONS = {
    PartitionKind.MANZIL: MANZILS,
    PartitionKind.JUZ: JUZS,
}


def get_partition(kind: PartitionKind) -> Partition:
    return _PARTITIONS[PartitionKind(kind)]


def locate_ayah(key: AyahKey) -> dict[str, int]:
    """Absolute number plus the Manzil and Juz a verse belongs to."""
    validate_ayah_key(key)
    return {
        "absolute": ayah_key_to_absolute(key),
        "manzil": MANZILS.unit_for_ayah(key),
        "juz": JUZS.unit_for_ayah(key),
    }
