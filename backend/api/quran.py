import httpx
from fastapi import APIRouter, Depends, Query, Response

from api.deps import get_caches, get_http_client
from config import get_settings
from schemas.quran import ChaptersResponse, PageVersesResponse, VersesResponse
from services.cache import CacheRegistry
from services.quran_api import fetch_all_verses, fetch_chapters, fetch_verses, to_verse_response
from utils.page_layout import font_face_for_page, font_url_for_page, group_lines
from utils.partitions import JUZS
from utils.quran_data import (
    get_surah_ayah_count,
    validate_hizb_number,
    validate_page_number,
    validate_rub_number,
)

router = APIRouter(prefix="/quran", tags=["quran"])
settings = get_settings()

CONTENT_CACHE_CONTROL = "public, s-maxage=3600, stale-while-revalidate=7200"


@router.get("/chapters", response_model=ChaptersResponse)
async def list_chapters(
    response: Response,
    client: httpx.AsyncClient = Depends(get_http_client),
    caches: CacheRegistry = Depends(get_caches),
):
    result = await caches.chapters.get(lambda: fetch_chapters(client))
    response.headers["X-Cache-Status"] = result.freshness.value.upper()
    response.headers["Cache-Control"] = "public, s-maxage=86400"
    return ChaptersResponse(chapters=result.value, cache=result.freshness.value)


@router.get("/chapters/{chapter}/verses", response_model=VersesResponse)
async def chapter_verses(
    chapter: int,
    response: Response,
    page: int = Query(1, ge=1),
    per_page: int = Query(50, ge=1, le=50),
    translation: int | None = None,
    client: httpx.AsyncClient = Depends(get_http_client),
):
    get_surah_ayah_count(chapter)
    payload = await fetch_verses(
        client, "by_chapter", chapter, translation or settings.DEFAULT_TRANSLATION_ID, page=page, per_page=per_page
    )
    response.headers["Cache-Control"] = CONTENT_CACHE_CONTROL
    return VersesResponse(verses=[to_verse_response(v) for v in payload.verses], pagination=payload.pagination)


@router.get("/pages/{page}/verses", response_model=PageVersesResponse)
async def page_verses(
    page: int,
    response: Response,
    translation: int | None = None,
    client: httpx.AsyncClient = Depends(get_http_client),
):
    validate_page_number(page)
    verses = await fetch_all_verses(client, "by_page", page, translation or settings.DEFAULT_TRANSLATION_ID)
    items = [to_verse_response(v) for v in verses]
    response.headers["Cache-Control"] = CONTENT_CACHE_CONTROL
    return PageVersesResponse(
        page=page,
        font_face=font_face_for_page(page),
        font_url=font_url_for_page(settings.GLYPH_FONT_BASE, page),
        verses=items,
        lines=group_lines(items, default_page=page),
    )


@router.get("/juz/{juz}/verses", response_model=VersesResponse)
async def juz_verses(
    juz: int,
    response: Response,
    translation: int | None = None,
    client: httpx.AsyncClient = Depends(get_http_client),
):
    JUZS.get_unit(juz)
    verses = await fetch_all_verses(client, "by_juz", juz, translation or settings.DEFAULT_TRANSLATION_ID)
    response.headers["Cache-Control"] = CONTENT_CACHE_CONTROL
    return VersesResponse(verses=[to_verse_response(v) for v in verses])


@router.get("/hizb/{hizb}/verses", response_model=VersesResponse)
async def hizb_verses(
    hizb: int,
    response: Response,
    translation: int | None = None,
    client: httpx.AsyncClient = Depends(get_http_client),
):
    validate_hizb_number(hizb)
    verses = await fetch_all_verses(client, "by_hizb", hizb, translation or settings.DEFAULT_TRANSLATION_ID)
    response.headers["Cache-Control"] = CONTENT_CACHE_CONTROL
    return VersesResponse(verses=[to_verse_response(v) for v in verses])


@router.get("/rub/{rub}/verses", response_model=VersesResponse)
async def rub_verses(
    rub: int,
    response: Response,
    translation: int | None = None,
    client: httpx.AsyncClient = Depends(get_http_client),
):
    """Verses of one hizb quarter (rub el hizb, 1-240)."""
    validate_rub_number(rub)
    verses = await fetch_all_verses(client, "by_rub", rub, translation or settings.DEFAULT_TRANSLATION_ID)
    response.headers["Cache-Control"] = CONTENT_CACHE_CONTROL
    return VersesResponse(verses=[to_verse_response(v) for v in verses])
