import logging

import httpx

from config import get_settings
from errors import UpstreamFailure
from services.audio.sources import AudioBlob

logger = logging.getLogger(__name__)
settings = get_settings()

TTS_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
    ),
    "Referer": "http://translate.google.com/",
}


async def fetch_tts(client: httpx.AsyncClient, text: str, lang: str = "ar") -> AudioBlob:
    """Synthesize `text` with Google Translate TTS. Same text always yields the same audio."""
    params = {"ie": "UTF-8", "q": text, "tl": lang, "client": "tw-ob"}
    try:
        resp = await client.get(settings.TTS_BASE, params=params, headers=TTS_HEADERS)
    except httpx.HTTPError as e:
        logger.error(f"TTS request failed: {e!r}")
        raise UpstreamFailure(f"TTS request failed: {e!r}") from e

    if resp.status_code != 200 or not resp.content:
        logger.error(f"TTS upstream returned {resp.status_code}")
        raise UpstreamFailure(f"Failed to fetch audio: {resp.status_code}")
    return AudioBlob(content=resp.content, content_type="audio/mpeg", source="google-tts")
