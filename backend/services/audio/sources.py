"""
Verse audio with CDN fallback.

Sources are tried in order until one returns a non-empty body:

  1. Quran.com audio CDNs (AUDIO_CDN_BASES), using the relative URL the
     recitation's audio-file listing gives for the verse
  2. MP3Quran.net, when the reciter has a code there
  3. EveryAyah, default reciter
"""
import logging
from dataclasses import dataclass

import httpx

from config import get_settings
from errors import AudioUnavailable, NotFound, UpstreamFailure
from schemas.upstream import AudioFile
from services.cache import CacheRegistry, CacheResult
from services.quran_api import fetch_audio_files
from utils.quran_data import AyahKey

logger = logging.getLogger(__name__)
settings = get_settings()

AUDIO_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
    "Referer": "https://quran.com/",
    "Accept": "audio/mpeg, audio/*, */*",
}


@dataclass(frozen=True)
class ReciterInfo:
    id: int
    recitation_id: int
    name: str
    qualities: tuple[str, ...]
    mp3quran_code: str | None = None


RECITERS: dict[int, ReciterInfo] = {r.id: r for r in [
    ReciterInfo(1, 1, "AbdulBaset AbdulSamad - Mujawwad", ("128k", "192k", "320k"), "minshawi_murattal"),
    ReciterInfo(2, 2, "AbdulBaset AbdulSamad - Murattal", ("128k", "192k", "320k"), "afs"),
    ReciterInfo(3, 3, "Abdur-Rahman as-Sudais", ("128k", "192k"), "sudais"),
    ReciterInfo(4, 4, "Abu Bakr al-Shatri", ("128k", "192k"), "shatri"),
    ReciterInfo(5, 5, "Hani ar-Rifai", ("128k", "192k"), "rifai"),
    ReciterInfo(6, 6, "Mahmoud Khalil Al-Husary", ("128k", "192k"), "husary"),
    ReciterInfo(7, 7, "Mishari Rashid al-Afasy", ("128k", "192k"), "alafasy"),
    ReciterInfo(8, 8, "Mohamed Siddiq al-Minshawi - Mujawwad", ("128k", "192k"), "minshawi_mujawwad"),
    ReciterInfo(9, 9, "Mohamed Siddiq al-Minshawi - Murattal", ("128k", "192k"), "minshawi_murattal"),
    ReciterInfo(10, 10, "Sa'ud ash-Shuraym", ("128k",), "shuraym"),
    ReciterInfo(11, 11, "Mohamed al-Tablawi", ("128k",), "tablawi"),
    ReciterInfo(12, 12, "Mahmoud Khalil Al-Husary - Muallim", ("128k",), "husary_muallim"),
    ReciterInfo(13, 13, "Saad al-Ghamdi", ("128k",), "ghamdi"),
    ReciterInfo(14, 14, "Yasser Ad Dossary", ("128k",), "dossary"),
]}


@dataclass(frozen=True)
class AudioBlob:
    content: bytes
    content_type: str
    source: str


def get_reciter(reciter_id: int) -> ReciterInfo:
    reciter = RECITERS.get(reciter_id)
    if reciter is None:
        raise NotFound(f"Reciter ID {reciter_id} not found")
    return reciter


def get_everyayah_url(reciter: str, ayah: AyahKey) -> str:
    return f"{settings.EVERYAYAH_BASE}/{reciter}/{ayah.to_filename()}"


def get_mp3quran_url(code: str, ayah: AyahKey) -> str:
    return f"{settings.MP3QURAN_BASE}/{code}/{ayah.to_filename()}"


async def get_chapter_audio_files(
    client: httpx.AsyncClient,
    caches: CacheRegistry,
    recitation_id: int,
    chapter: int,
) -> CacheResult[list[AudioFile]]:
    return await caches.audio_files.get(
        (recitation_id, chapter),
        lambda: fetch_audio_files(client, recitation_id, chapter),
    )


def candidate_urls(reciter: ReciterInfo, ayah: AyahKey, relative_url: str | None) -> list[tuple[str, str]]:
    """(source name, url) pairs in the order they should be tried."""
    candidates = []
    if relative_url:
        if relative_url.startswith("//"):
            relative_url = f"https:{relative_url}"
        if relative_url.startswith(("http://", "https://")):
            candidates.append(("Quran.com", relative_url))
        else:
            for i, base in enumerate(settings.AUDIO_CDN_BASES):
                name = "Primary CDN" if i == 0 else f"Backup CDN {i}"
                candidates.append((name, f"{base}/{relative_url.lstrip('/')}"))
    if reciter.mp3quran_code:
        candidates.append(("MP3Quran.net", get_mp3quran_url(reciter.mp3quran_code, ayah)))
    candidates.append((f"EveryAyah ({settings.DEFAULT_RECITER})", get_everyayah_url(settings.DEFAULT_RECITER, ayah)))
    return candidates


async def _try_source(client: httpx.AsyncClient, name: str, url: str) -> AudioBlob | None:
    try:
        resp = await client.get(url, headers=AUDIO_HEADERS, follow_redirects=True)
    except httpx.HTTPError as e:
        logger.warning(f"{name} failed for {url}: {e!r}")
        return None
    if resp.status_code != 200 or not resp.content:
        logger.warning(f"{name} returned {resp.status_code} for {url}")
        return None
    return AudioBlob(
        content=resp.content,
        content_type=resp.headers.get("content-type", "audio/mpeg"),
        source=name,
    )


async def fetch_verse_audio(
    client: httpx.AsyncClient,
    caches: CacheRegistry,
    reciter: ReciterInfo,
    ayah: AyahKey,
) -> AudioBlob:
    relative_url = None
    try:
        listing = await get_chapter_audio_files(client, caches, reciter.recitation_id, ayah.surah)
    except UpstreamFailure as e:
        # listing unavailable: go straight to the sources that need no lookup
        logger.warning(f"No audio listing for recitation {reciter.recitation_id}, surah {ayah.surah}: {e}")
    else:
        match = next((f for f in listing.value if f.verse_key == str(ayah)), None)
        if match is None:
            raise NotFound(f"Audio not found for verse {ayah}")
        relative_url = match.url

    for name, url in candidate_urls(reciter, ayah, relative_url):
        blob = await _try_source(client, name, url)
        if blob is not None:
            logger.info(f"Audio for {ayah} from {name} ({len(blob.content) / 1024:.2f} KB)")
            return blob

    logger.error(f"Failed to fetch audio from all sources for {ayah} (reciter {reciter.id})")
    raise AudioUnavailable(f"Failed to fetch audio from all sources for {ayah}")
