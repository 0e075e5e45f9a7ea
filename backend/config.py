from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Upstream APIs
    QURAN_API_BASE: str = "https://api.quran.com/api/v4"
    QURAN_AUDIO_BASE: str = "https://verses.quran.com"
    AUDIO_CDN_BASES: list[str] = [
        "https://audio.qurancdn.com/quran",
        "https://cdnsb.qurancdn.com/quran",
        "https://quranaudiocdn.com/quran",
        "https://media.quran.com/quran",
    ]
    MP3QURAN_BASE: str = "https://server8.mp3quran.net"
    EVERYAYAH_BASE: str = "https://everyayah.com/data"
    TTS_BASE: str = "https://translate.google.com/translate_tts"
    GLYPH_FONT_BASE: str = "https://cdn.qurancdn.com/fonts"

    # Hosts the raw audio proxy may fetch from (subdomains included)
    ALLOWED_AUDIO_HOSTS: list[str] = [
        "qurancdn.com",
        "quranaudiocdn.com",
        "everyayah.com",
        "mp3quran.net",
        "quran.alafasy.com",
        "quran.com",
    ]

    UPSTREAM_TIMEOUT_SECONDS: float = 15.0

    # Cache TTLs (seconds)
    RECITERS_CACHE_TTL: int = 1800
    CHAPTERS_CACHE_TTL: int = 86400
    AUDIO_FILES_CACHE_TTL: int = 3600
    AUDIO_STREAM_CACHE_TTL: int = 300
    TTS_CACHE_TTL: int = 86400
    CACHE_MAX_ENTRIES: int = 512

    # Content defaults
    DEFAULT_TRANSLATION_ID: int = 131  # Sahih International
    DEFAULT_RECITER: str = "Alafasy_128kbps"

    # Offline downloads
    AUDIO_DIR: str = "./audio"

    # App
    FRONTEND_URL: str = "http://localhost:3000"
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = "../.env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()
