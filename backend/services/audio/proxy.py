import logging
from urllib.parse import urlsplit

import httpx

from config import get_settings
from errors import DisallowedHost, InvalidInput, UpstreamFailure
from services.audio.sources import AUDIO_HEADERS, AudioBlob

logger = logging.getLogger(__name__)
settings = get_settings()


def is_allowed_audio_url(url: str, allowed_hosts: list[str]) -> bool:
    """True for http(s) URLs whose host is an allowed domain or one of its subdomains."""
    try:
        parts = urlsplit(url)
        host = (parts.hostname or "").lower().rstrip(".")
    except ValueError:
        return False
    if parts.scheme not in ("http", "https") or not host:
        return False
    return any(host == domain or host.endswith(f".{domain}") for domain in allowed_hosts)


def ensure_allowed_audio_url(url: str, allowed_hosts: list[str] | None = None) -> str:
    if not url:
        raise InvalidInput("Missing required parameter: url")
    if not is_allowed_audio_url(url, allowed_hosts if allowed_hosts is not None else settings.ALLOWED_AUDIO_HOSTS):
        logger.warning(f"Rejected audio proxy request for disallowed URL: {url}")
        raise DisallowedHost("Audio host is not on the allow-list")
    return url


async def fetch_proxied_audio(client: httpx.AsyncClient, url: str) -> AudioBlob:
    """Fetch raw audio from an allow-listed URL. The URL is checked before any request."""
    ensure_allowed_audio_url(url)
    try:
        resp = await client.get(url, headers=AUDIO_HEADERS, follow_redirects=False)
    except httpx.HTTPError as e:
        logger.error(f"Audio proxy request to {url} failed: {e!r}")
        raise UpstreamFailure(f"Failed to proxy audio: {e!r}") from e
    if resp.status_code != 200:
        logger.error(f"Audio proxy got {resp.status_code} from {url}")
        raise UpstreamFailure(f"Failed to fetch audio: {resp.status_code}")
    return AudioBlob(
        content=resp.content,
        content_type=resp.headers.get("content-type", "audio/mpeg"),
        source=urlsplit(url).hostname or "",
    )
