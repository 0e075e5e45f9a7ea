from pydantic import BaseModel

from schemas.upstream import Pagination


class ChapterResponse(BaseModel):
    id: int
    name: str
    name_arabic: str
    name_translation: str
    verses_count: int
    revelation_place: str
    revelation_order: int
    pages: list[int] = []


class ChaptersResponse(BaseModel):
    chapters: list[ChapterResponse]
    cache: str


class WordResponse(BaseModel):
    text_uthmani: str | None
    code_v2: str | None
    translation: str
    char_type: str | None
    page_number: int | None
    line_number: int | None


class VerseResponse(BaseModel):
    id: int
    verse_key: str
    verse_number: int
    text_uthmani: str | None
    text_indopak: str | None
    translation: str
    juz_number: int | None
    page_number: int | None
    hizb_number: int | None = None
    rub_el_hizb_number: int | None = None
    words: list[WordResponse]


class VersesResponse(BaseModel):
    verses: list[VerseResponse]
    pagination: Pagination | None = None


class PageLine(BaseModel):
    page_number: int
    line_number: int
    words: list[WordResponse]


class PageVersesResponse(BaseModel):
    page: int
    font_face: str
    font_url: str
    verses: list[VerseResponse]
    lines: list[PageLine]
