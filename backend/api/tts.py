import httpx
from fastapi import APIRouter, Depends, Response

from api.deps import get_caches, get_http_client
from errors import InvalidInput
from services.cache import CacheRegistry
from services.tts import fetch_tts

router = APIRouter(tags=["tts"])


@router.get("/tts-proxy")
async def tts_proxy(
    text: str | None = None,
    client: httpx.AsyncClient = Depends(get_http_client),
    caches: CacheRegistry = Depends(get_caches),
):
    if not text or not text.strip():
        raise InvalidInput("Text is required")

    result = await caches.tts.get(text, lambda: fetch_tts(client, text))
    return Response(
        content=result.value.content,
        media_type="audio/mpeg",
        headers={
            "Cache-Control": "public, max-age=31536000, immutable",
            "X-Cache": result.freshness.value.upper(),
        },
    )
