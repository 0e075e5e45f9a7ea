"""
Download ayah MP3 files from EveryAyah.com for a Manzil or Juz, so the unit
can be played back ayah by ayah without the network.
Run via: python scripts/download_audio.py
"""
import asyncio
import logging
from pathlib import Path

import httpx

from config import get_settings
from services.audio.sources import get_everyayah_url
from utils.partitions import PartitionKind, get_partition
from utils.quran_data import AyahKey

logger = logging.getLogger(__name__)
settings = get_settings()

RATE_LIMIT_DELAY = 0.5  # seconds between requests


def get_audio_path(reciter: str, ayah: AyahKey, audio_dir: str | None = None) -> Path:
    return Path(audio_dir or settings.AUDIO_DIR) / reciter / f"{ayah.surah:03d}" / f"{ayah.ayah:03d}.mp3"


async def download_ayah(client: httpx.AsyncClient, reciter: str, ayah: AyahKey, audio_dir: str | None = None) -> bool:
    path = get_audio_path(reciter, ayah, audio_dir)
    if path.exists():
        return True  # already downloaded

    url = get_everyayah_url(reciter, ayah)
    try:
        resp = await client.get(url, follow_redirects=True)
    except httpx.HTTPError as e:
        logger.error(f"Error downloading {url}: {e!r}")
        return False

    if resp.status_code != 200:
        logger.warning(f"HTTP {resp.status_code} for {url}")
        return False

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(resp.content)
    logger.info(f"Downloaded {ayah}")
    return True


async def download_unit(
    kind: PartitionKind,
    number: int,
    reciter: str,
    client: httpx.AsyncClient | None = None,
    audio_dir: str | None = None,
    delay: float = RATE_LIMIT_DELAY,
) -> int:
    """Download every ayah of a Manzil or Juz. Returns count of files on disk afterwards."""
    ayahs = get_partition(kind).ayah_keys_in_unit(number)
    logger.info(f"Downloading {kind.value} {number} ({len(ayahs)} ayahs) for {reciter}")

    owns_client = client is None
    if owns_client:
        client = httpx.AsyncClient(timeout=30.0)
    success = 0
    try:
        for ayah in ayahs:
            if await download_ayah(client, reciter, ayah, audio_dir):
                success += 1
            if delay:
                await asyncio.sleep(delay)
    finally:
        if owns_client:
            await client.aclose()

    logger.info(f"{kind.value} {number}: {success}/{len(ayahs)} files")
    return success
