"""
Quran.com v4 client.

Every call goes through `_get_payload`, which turns transport errors, non-200
statuses and malformed payloads into UpstreamFailure so the caches can fall
back on older values.
"""
import logging
import re
from typing import TypeVar

import httpx
from pydantic import BaseModel

from config import get_settings
from errors import UpstreamFailure
from schemas.audio import ReciterResponse
from schemas.quran import ChapterResponse, VerseResponse, WordResponse
from schemas.upstream import (
    AudioFile,
    AudioFilesPayload,
    Chapter,
    ChapterPayload,
    ChaptersPayload,
    Recitation,
    RecitationsPayload,
    Verse,
    VersesPayload,
)
from utils.quran_data import AyahKey

logger = logging.getLogger(__name__)
settings = get_settings()

M = TypeVar("M", bound=BaseModel)

API_HEADERS = {
    "Accept": "application/json",
    "User-Agent": "Mozilla/5.0 (compatible; QuranicLearn/1.0)",
}
RECITER_IMAGE_BASE = "https://static.qurancdn.com/images/reciters"
VERSE_SCOPES = ("by_chapter", "by_page", "by_juz", "by_hizb", "by_rub")
MAX_PER_PAGE = 50


async def _get_payload(client: httpx.AsyncClient, path: str, model: type[M], params: dict | None = None) -> M:
    url = f"{settings.QURAN_API_BASE}{path}"
    try:
        resp = await client.get(url, params=params, headers=API_HEADERS)
    except httpx.HTTPError as e:
        logger.error(f"Quran.com request to {url} failed: {e!r}")
        raise UpstreamFailure(f"Quran.com request failed: {e!r}") from e

    if resp.status_code != 200:
        logger.error(f"Quran.com API returned {resp.status_code} for {url}")
        raise UpstreamFailure(f"Quran.com API error: {resp.status_code}")

    try:
        return model.model_validate(resp.json())
    except ValueError as e:  # bad JSON or a failed validation
        logger.error(f"Malformed Quran.com payload from {url}: {e}")
        raise UpstreamFailure(f"Malformed Quran.com payload for {path}") from e


# ── Reciters ──────────────────────────────────────────────────────────────────

def _reciter_slug(name: str) -> str:
    return re.sub(r"\s+", "-", name.lower())


def to_reciter_response(recitation: Recitation) -> ReciterResponse:
    style = recitation.style or "Murattal"
    name = recitation.translated_name.name if recitation.translated_name else recitation.reciter_name
    return ReciterResponse(
        id=recitation.id,
        name=name,
        arabic_name=recitation.reciter_name,
        style=style,
        image_url=f"{RECITER_IMAGE_BASE}/{recitation.id}/{_reciter_slug(recitation.reciter_name)}-profile.png",
        link=f"/radio/reciter/{recitation.id}",
        full_name=f"{name} ({style})",
    )


async def fetch_reciters(client: httpx.AsyncClient) -> list[ReciterResponse]:
    payload = await _get_payload(client, "/resources/recitations", RecitationsPayload, {"language": "en"})
    reciters = [to_reciter_response(r) for r in payload.recitations]
    logger.info(f"Fetched {len(reciters)} reciters from Quran.com")
    return reciters


# ── Chapters ──────────────────────────────────────────────────────────────────

def to_chapter_response(chapter: Chapter) -> ChapterResponse:
    return ChapterResponse(
        id=chapter.id,
        name=chapter.name_simple,
        name_arabic=chapter.name_arabic,
        name_translation=chapter.translated_name.name,
        verses_count=chapter.verses_count,
        revelation_place=chapter.revelation_place,
        revelation_order=chapter.revelation_order,
        pages=chapter.pages,
    )


async def fetch_chapters(client: httpx.AsyncClient) -> list[ChapterResponse]:
    payload = await _get_payload(client, "/chapters", ChaptersPayload, {"language": "en"})
    return [to_chapter_response(c) for c in payload.chapters]


async def fetch_chapter(client: httpx.AsyncClient, chapter: int) -> Chapter:
    payload = await _get_payload(client, f"/chapters/{chapter}", ChapterPayload, {"language": "en"})
    return payload.chapter


# ── Recitation audio files ────────────────────────────────────────────────────

async def fetch_audio_files(client: httpx.AsyncClient, recitation_id: int, chapter: int) -> list[AudioFile]:
    """Per-verse audio files of one chapter; URLs are relative to the audio CDNs."""
    payload = await _get_payload(
        client,
        f"/recitations/{recitation_id}/by_chapter/{chapter}",
        AudioFilesPayload,
        {"language": "en", "per_page": 300},
    )
    return payload.audio_files


async def fetch_ayah_audio_file(client: httpx.AsyncClient, recitation_id: int, key: AyahKey) -> AudioFile | None:
    payload = await _get_payload(client, f"/recitations/{recitation_id}/by_ayah/{key}", AudioFilesPayload)
    return payload.audio_files[0] if payload.audio_files else None


# ── Verses ────────────────────────────────────────────────────────────────────

def to_verse_response(verse: Verse) -> VerseResponse:
    return VerseResponse(
        id=verse.id,
        verse_key=verse.verse_key,
        verse_number=verse.verse_number,
        text_uthmani=verse.text_uthmani,
        text_indopak=verse.text_indopak,
        translation=verse.translations[0].text if verse.translations else "",
        juz_number=verse.juz_number,
        page_number=verse.page_number,
        hizb_number=verse.hizb_number,
        rub_el_hizb_number=verse.rub_el_hizb_number,
        words=[
            WordResponse(
                text_uthmani=w.text_uthmani,
                code_v2=w.code_v2,
                translation=w.translation.text if w.translation else "",
                char_type=w.char_type_name,
                page_number=w.page_number,
                line_number=w.line_number,
            )
            for w in verse.words
        ],
    )


async def fetch_verses(
    client: httpx.AsyncClient,
    scope: str,
    number: int,
    translation_id: int,
    page: int = 1,
    per_page: int = MAX_PER_PAGE,
) -> VersesPayload:
    """One page of verses for a chapter, mushaf page, juz, hizb or hizb quarter, with word glyph data."""
    if scope not in VERSE_SCOPES:
        raise ValueError(f"Unknown verse scope: {scope}")
    params = {
        "language": "en",
        "words": "true",
        "translations": translation_id,
        "fields": "text_uthmani,text_indopak",
        "word_fields": "text_uthmani,code_v2,page_number,line_number",
        "page": page,
        "per_page": min(per_page, MAX_PER_PAGE),
    }
    return await _get_payload(client, f"/verses/{scope}/{number}", VersesPayload, params)


async def fetch_all_verses(client: httpx.AsyncClient, scope: str, number: int, translation_id: int) -> list[Verse]:
    """Follow pagination until every verse of the scope is collected."""
    verses: list[Verse] = []
    page: int | None = 1
    while page is not None:
        payload = await fetch_verses(client, scope, number, translation_id, page=page)
        verses.extend(payload.verses)
        next_page = payload.pagination.next_page if payload.pagination else None
        if next_page is not None and next_page <= page:
            raise UpstreamFailure(f"Quran.com pagination did not advance past page {page}")
        page = next_page
    return verses
