"""Payload shapes returned by the Quran.com v4 API.

Only the fields the services read are declared; anything else is ignored.
A payload missing a declared required field is treated as an upstream failure.
"""
from pydantic import BaseModel, field_validator

from utils.quran_data import is_valid_verse_key


class TranslatedName(BaseModel):
    name: str
    language_name: str | None = None


class Recitation(BaseModel):
    id: int
    reciter_name: str
    style: str | None = None
    translated_name: TranslatedName | None = None


class RecitationsPayload(BaseModel):
    recitations: list[Recitation]


class Chapter(BaseModel):
    id: int
    revelation_place: str
    revelation_order: int
    bismillah_pre: bool = True
    name_simple: str
    name_complex: str | None = None
    name_arabic: str
    verses_count: int
    pages: list[int] = []
    translated_name: TranslatedName


class ChaptersPayload(BaseModel):
    chapters: list[Chapter]


class ChapterPayload(BaseModel):
    chapter: Chapter


class AudioFile(BaseModel):
    verse_key: str
    url: str
    duration: float | None = None

    @field_validator("verse_key")
    @classmethod
    def validate_verse_key(cls, v: str) -> str:
        if not is_valid_verse_key(v):
            raise ValueError(f"Invalid verse key: {v}")
        return v


class AudioFilesPayload(BaseModel):
    audio_files: list[AudioFile]


class TextTranslation(BaseModel):
    text: str


class Translation(BaseModel):
    resource_id: int | None = None
    text: str


class Word(BaseModel):
    id: int | None = None
    position: int | None = None
    char_type_name: str | None = None
    text_uthmani: str | None = None
    code_v2: str | None = None
    page_number: int | None = None
    line_number: int | None = None
    translation: TextTranslation | None = None


class Verse(BaseModel):
    id: int
    verse_key: str
    verse_number: int
    text_uthmani: str | None = None
    text_indopak: str | None = None
    juz_number: int | None = None
    hizb_number: int | None = None
    rub_el_hizb_number: int | None = None
    page_number: int | None = None
    translations: list[Translation] = []
    words: list[Word] = []


class Pagination(BaseModel):
    per_page: int | None = None
    current_page: int | None = None
    next_page: int | None = None
    total_pages: int | None = None
    total_records: int | None = None


class VersesPayload(BaseModel):
    verses: list[Verse]
    pagination: Pagination | None = None
