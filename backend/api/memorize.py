"""Memorize-Quran endpoint: one route, dispatched on the `action` query parameter."""
import logging

import httpx
from fastapi import APIRouter, Depends, Query

from api.deps import get_caches, get_http_client
from config import get_settings
from errors import InvalidInput, UpstreamFailure
from schemas.audio import MemorizeReciter, VerseAudioResponse
from services.cache import CacheRegistry
from services.quran_api import fetch_all_verses, fetch_ayah_audio_file, fetch_chapters, to_verse_response
from utils.quran_data import get_surah_ayah_count, parse_verse_key

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(tags=["memorize"])

VALID_ACTIONS = ["chapters", "verses", "audio", "reciters"]

# Quran.com recitation ids
MEMORIZE_RECITERS = [
    MemorizeReciter(id=7, name="Mishary Rashid Alafasy", style="Murattal"),
    MemorizeReciter(id=1, name="Abdul Basit Abdul Samad", style="Mujawwad"),
    MemorizeReciter(id=2, name="Abdul Rahman Al-Sudais", style="Murattal"),
    MemorizeReciter(id=3, name="Abu Bakr Al-Shatri", style="Murattal"),
    MemorizeReciter(id=4, name="Hani Ar-Rifai", style="Murattal"),
    MemorizeReciter(id=5, name="Mahmoud Khalil Al-Hussary", style="Murattal"),
    MemorizeReciter(id=6, name="Saad Al-Ghamdi", style="Murattal"),
    MemorizeReciter(id=9, name="Mohamed Siddiq El-Minshawi", style="Mujawwad"),
    MemorizeReciter(id=10, name="Sa'ud Ash-Shuraym", style="Murattal"),
    MemorizeReciter(id=12, name="Maher Al-Muaiqly", style="Murattal"),
]


@router.get("/memorize-quran")
async def memorize_quran(
    action: str | None = None,
    chapter: int | None = None,
    from_verse: int = Query(1, alias="from", ge=1),
    to_verse: int | None = Query(None, alias="to", ge=1),
    translation: int | None = None,
    reciter: int = 7,
    verse_key: str | None = Query(None, alias="verseKey"),
    client: httpx.AsyncClient = Depends(get_http_client),
    caches: CacheRegistry = Depends(get_caches),
):
    if action == "chapters":
        result = await caches.chapters.get(lambda: fetch_chapters(client))
        return {"chapters": [c.model_dump() for c in result.value], "cache": result.freshness.value}

    if action == "verses":
        if chapter is None:
            raise InvalidInput("Chapter ID required")
        verses_count = get_surah_ayah_count(chapter)
        last = min(to_verse or verses_count, verses_count)
        if from_verse > last:
            raise InvalidInput(f"Invalid verse range {from_verse}-{last} for chapter {chapter}")
        verses = await fetch_all_verses(client, "by_chapter", chapter, translation or settings.DEFAULT_TRANSLATION_ID)
        return {
            "verses": [
                to_verse_response(v).model_dump()
                for v in verses
                if from_verse <= v.verse_number <= last
            ],
        }

    if action == "audio":
        if not verse_key:
            raise InvalidInput("Verse key required (format: surah:ayah)")
        ayah = parse_verse_key(verse_key)
        fallback_url = f"{settings.QURAN_AUDIO_BASE}/{reciter}/{ayah.to_filename()}"
        try:
            audio_file = await fetch_ayah_audio_file(client, reciter, ayah)
        except UpstreamFailure as e:
            logger.warning(f"Audio lookup failed for {ayah}, using direct CDN URL: {e}")
            audio_url = fallback_url
        else:
            audio_url = f"{settings.QURAN_AUDIO_BASE}/{audio_file.url}" if audio_file else None
        return VerseAudioResponse(audio_url=audio_url, verse_key=str(ayah), reciter_id=reciter).model_dump()

    if action == "reciters":
        return {"reciters": [r.model_dump() for r in MEMORIZE_RECITERS]}

    raise InvalidInput(f"Invalid action: {action}. Valid actions: {', '.join(VALID_ACTIONS)}")
