import logging

import httpx
from fastapi import APIRouter, Depends, Query, Response
from fastapi.responses import JSONResponse

from api.deps import get_caches, get_http_client
from errors import InvalidInput
from schemas.audio import (
    AudioListing,
    AudioVerse,
    ReciterSummary,
    RecitersResponse,
    SurahAudioResponse,
    SurahSummary,
)
from services.audio.proxy import fetch_proxied_audio
from services.audio.sources import fetch_verse_audio, get_chapter_audio_files, get_reciter
from services.cache import CacheRegistry, Freshness
from services.quran_api import fetch_chapter, fetch_reciters
from utils.quran_data import get_surah_ayah_count, parse_verse_key

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/radio", tags=["radio"])

AUDIO_STREAM_BASE = "/radio/audio-stream"


@router.get("/reciters", response_model=RecitersResponse)
async def list_reciters(
    client: httpx.AsyncClient = Depends(get_http_client),
    caches: CacheRegistry = Depends(get_caches),
):
    result = await caches.reciters.get(lambda: fetch_reciters(client))
    body = RecitersResponse(data=result.value, cache=result.freshness.value, count=len(result.value))
    if result.freshness is Freshness.STALE:
        body.message = "Returning cached data due to API error"
        cache_control = "public, max-age=300"
    else:
        cache_control = "public, s-maxage=1800, stale-while-revalidate=3600"
    return JSONResponse(
        content=body.model_dump(),
        headers={"Cache-Control": cache_control, "X-Cache-Status": result.freshness.value.upper()},
    )


@router.get("/audio", response_model=SurahAudioResponse)
async def surah_audio(
    response: Response,
    reciter_id: int = Query(...),
    surah_number: int = Query(...),
    verse_start: int | None = Query(None, ge=1),
    verse_end: int | None = Query(None, ge=1),
    quality: str = "128k",
    client: httpx.AsyncClient = Depends(get_http_client),
    caches: CacheRegistry = Depends(get_caches),
):
    """Per-verse streaming URLs for one reciter and surah, optionally narrowed to a verse range."""
    reciter = get_reciter(reciter_id)
    verses_count = get_surah_ayah_count(surah_number)
    if quality not in reciter.qualities:
        raise InvalidInput(f"Quality {quality} not available for reciter {reciter_id}")

    start = verse_start if verse_start is not None else 1
    end = verse_end if verse_end is not None else verses_count
    if not 1 <= start <= end <= verses_count:
        raise InvalidInput(f"Invalid verse range {start}-{end} for surah {surah_number}")

    chapter = await caches.chapter_info.get(surah_number, lambda: fetch_chapter(client, surah_number))
    listing = await get_chapter_audio_files(client, caches, reciter.recitation_id, surah_number)

    verses = []
    for f in listing.value:
        key = parse_verse_key(f.verse_key)
        if start <= key.ayah <= end:
            verses.append(AudioVerse(
                verse_key=f.verse_key,
                url=f"{AUDIO_STREAM_BASE}?reciter_id={reciter_id}&verse_key={f.verse_key}",
                duration=f.duration or 0,
            ))
    logger.info(f"Prepared {len(verses)} verses of surah {surah_number} for reciter {reciter_id}")

    freshness = Freshness.STALE if Freshness.STALE in (chapter.freshness, listing.freshness) else listing.freshness
    response.headers["Cache-Control"] = "public, s-maxage=3600, stale-while-revalidate=7200"
    response.headers["X-Total-Verses"] = str(len(verses))
    response.headers["X-Reciter-ID"] = str(reciter_id)
    return SurahAudioResponse(
        surah=SurahSummary(
            number=chapter.value.id,
            name=chapter.value.name_simple,
            arabic_name=chapter.value.name_arabic,
            verses_count=chapter.value.verses_count,
            revelation_place=chapter.value.revelation_place,
            revelation_order=chapter.value.revelation_order,
        ),
        reciter=ReciterSummary(
            id=reciter.id,
            name=reciter.name,
            quality=quality,
            available_qualities=list(reciter.qualities),
        ),
        audio=AudioListing(total_verses=len(verses), verses=verses),
        cache=freshness.value,
    )


@router.get("/audio-stream")
async def audio_stream(
    reciter_id: int = Query(...),
    verse_key: str = Query(...),
    client: httpx.AsyncClient = Depends(get_http_client),
    caches: CacheRegistry = Depends(get_caches),
):
    reciter = get_reciter(reciter_id)
    ayah = parse_verse_key(verse_key)
    result = await caches.audio_stream.get(
        (reciter.id, str(ayah)),
        lambda: fetch_verse_audio(client, caches, reciter, ayah),
    )
    blob = result.value
    return Response(
        content=blob.content,
        media_type=blob.content_type,
        headers={
            "Cache-Control": "public, max-age=86400",
            "X-Source": blob.source,
            "X-Cache": result.freshness.value.upper(),
        },
    )


@router.get("/audio-proxy")
async def audio_proxy(
    url: str | None = None,
    client: httpx.AsyncClient = Depends(get_http_client),
):
    """Relay raw audio from an allow-listed CDN URL."""
    blob = await fetch_proxied_audio(client, url or "")
    return Response(
        content=blob.content,
        media_type=blob.content_type,
        headers={
            "Cache-Control": "public, max-age=31536000",
            "X-Audio-Proxy": "true",
        },
    )
