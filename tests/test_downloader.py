import httpx
import pytest

from errors import InvalidUnitNumber
from services.audio.downloader import download_ayah, download_unit, get_audio_path
from utils.partitions import MANZILS, PartitionKind
from utils.quran_data import AyahKey


def test_audio_path_layout(tmp_path):
    path = get_audio_path("Alafasy_128kbps", AyahKey(2, 255), str(tmp_path))
    assert path == tmp_path / "Alafasy_128kbps" / "002" / "255.mp3"


async def test_download_ayah_writes_file(upstream, http_client, tmp_path):
    upstream.add("everyayah.com/data/Alafasy_128kbps/001001.mp3", httpx.Response(200, content=b"ID3"))

    assert await download_ayah(http_client, "Alafasy_128kbps", AyahKey(1, 1), str(tmp_path))
    assert get_audio_path("Alafasy_128kbps", AyahKey(1, 1), str(tmp_path)).read_bytes() == b"ID3"


async def test_existing_file_is_not_downloaded_again(upstream, http_client, tmp_path):
    path = get_audio_path("Alafasy_128kbps", AyahKey(1, 1), str(tmp_path))
    path.parent.mkdir(parents=True)
    path.write_bytes(b"cached")

    assert await download_ayah(http_client, "Alafasy_128kbps", AyahKey(1, 1), str(tmp_path))
    assert upstream.requests == []


async def test_download_unit_counts_successes(upstream, http_client, tmp_path):
    def everyayah(request):
        # every verse but 114:3 is available
        if request.url.path.endswith("/114003.mp3"):
            return httpx.Response(404)
        return httpx.Response(200, content=b"ID3")

    for n in range(1, 7):
        upstream.add(f"everyayah.com/data/Alafasy_128kbps/114{n:03d}.mp3", everyayah)

    # last manzil is large; narrow it by pre-seeding everything except surah 114
    for key in MANZILS.ayah_keys_in_unit(7):
        if key.surah != 114:
            path = get_audio_path("Alafasy_128kbps", key, str(tmp_path))
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(b"seed")

    count = await download_unit(
        PartitionKind.MANZIL, 7, "Alafasy_128kbps", client=http_client, audio_dir=str(tmp_path), delay=0
    )

    assert count == MANZILS.verse_count(7) - 1
    assert len(upstream.requests) == 6
    assert not get_audio_path("Alafasy_128kbps", AyahKey(114, 3), str(tmp_path)).exists()


async def test_download_unit_rejects_bad_unit(http_client, tmp_path):
    with pytest.raises(InvalidUnitNumber):
        await download_unit(PartitionKind.JUZ, 31, "Alafasy_128kbps", client=http_client, audio_dir=str(tmp_path))
