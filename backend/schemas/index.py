from pydantic import BaseModel

from utils.partitions import PartitionUnit
from utils.quran_data import AyahKey


class VerseLocationResponse(BaseModel):
    verse_key: str
    surah: int
    ayah: int
    absolute: int
    manzil: int
    juz: int

    @classmethod
    def build(cls, key: AyahKey, location: dict[str, int]) -> "VerseLocationResponse":
        return cls(verse_key=str(key), surah=key.surah, ayah=key.ayah, **location)


class VerseRangeResponse(BaseModel):
    start: str
    end: str
    count: int
    verse_keys: list[str]


class PartitionUnitResponse(BaseModel):
    kind: str
    number: int
    start_verse_key: str
    end_verse_key: str
    start_absolute: int
    end_absolute: int
    verse_count: int

    @classmethod
    def from_unit(cls, unit: PartitionUnit, **extra) -> "PartitionUnitResponse":
        return cls(
            kind=unit.kind.value,
            number=unit.number,
            start_verse_key=str(unit.start_key),
            end_verse_key=str(unit.end_key),
            start_absolute=unit.start_absolute,
            end_absolute=unit.end_absolute,
            verse_count=unit.verse_count,
            **extra,
        )


class PartitionVersesResponse(PartitionUnitResponse):
    verse_keys: list[str]
