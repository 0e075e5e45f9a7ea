"""
In-process TTL caches for upstream resources.

A TTLCache owns exactly one cache entry and moves through

    EMPTY -> FRESH -> STALE -> FRESH   (refresh succeeded)
                            -> STALE   (refresh failed, old value served)

Refreshes are single-flight: the first caller that finds the entry missing or
stale starts one refresh task. While that task is in flight, callers get the
old value back as "stale" if there is one. Otherwise they await the same task
and share its result or its UpstreamFailure, so an outage costs one upstream
call, not one per waiting request.

Caches are not shared between processes.
"""
import asyncio
import logging
import time
from collections import OrderedDict
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Generic, Hashable, TypeVar

from errors import UpstreamFailure

logger = logging.getLogger(__name__)

T = TypeVar("T")
Clock = Callable[[], float]


class CacheState(str, Enum):
    EMPTY = "empty"
    FRESH = "fresh"
    STALE = "stale"


class Freshness(str, Enum):
    MISS = "miss"      # fetched from upstream just now
    HIT = "hit"        # served from a fresh entry
    STALE = "stale"    # upstream failed or is refreshing; old entry served


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    value: T
    stored_at: float


@dataclass(frozen=True)
class CacheResult(Generic[T]):
    value: T
    freshness: Freshness


class TTLCache(Generic[T]):
    def __init__(self, name: str, ttl: float, clock: Clock = time.monotonic):
        self.name = name
        self.ttl = ttl
        self._clock = clock
        self._entry: CacheEntry[T] | None = None
        self._refresh: asyncio.Task | None = None

    @property
    def entry(self) -> CacheEntry[T] | None:
        return self._entry

    @property
    def state(self) -> CacheState:
        if self._entry is None:
            return CacheState.EMPTY
        if self._clock() - self._entry.stored_at >= self.ttl:
            return CacheState.STALE
        return CacheState.FRESH

    async def get(self, fetch: Callable[[], Awaitable[T]]) -> CacheResult[T]:
        """Return the cached value, refreshing it through `fetch` when needed.

        `fetch` signals failure by raising UpstreamFailure. The failure is only
        propagated when there is no earlier value to fall back on.
        """
        if self.state is CacheState.FRESH:
            return CacheResult(self._entry.value, Freshness.HIT)

        refresh = self._refresh
        started_here = refresh is None
        if started_here:
            refresh = self._refresh = asyncio.create_task(self._run_refresh(fetch))
        elif self._entry is not None:
            logger.info(f"[{self.name}] refresh in flight, serving previous value")
            return CacheResult(self._entry.value, Freshness.STALE)

        try:
            # shielded so a cancelled caller does not cancel the shared refresh
            value = await asyncio.shield(refresh)
        except UpstreamFailure as e:
            if self._entry is None:
                if started_here:
                    logger.error(f"[{self.name}] upstream failed with nothing cached: {e}")
                raise
            logger.warning(f"[{self.name}] upstream failed, serving stale value: {e}")
            return CacheResult(self._entry.value, Freshness.STALE)

        return CacheResult(value, Freshness.MISS if started_here else Freshness.HIT)

    async def _run_refresh(self, fetch: Callable[[], Awaitable[T]]) -> T:
        try:
            value = await fetch()
            self._entry = CacheEntry(value=value, stored_at=self._clock())
            logger.info(f"[{self.name}] refreshed from upstream")
            return value
        finally:
            self._refresh = None


class KeyedTTLCache(Generic[T]):
    """One TTLCache per key, bounded to `max_entries` keys (oldest key dropped)."""

    def __init__(self, name: str, ttl: float, max_entries: int = 512, clock: Clock = time.monotonic):
        self.name = name
        self.ttl = ttl
        self.max_entries = max_entries
        self._clock = clock
        self._caches: OrderedDict[Hashable, TTLCache[T]] = OrderedDict()

    def __len__(self) -> int:
        return len(self._caches)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._caches

    def slot(self, key: Hashable) -> TTLCache[T]:
        cache = self._caches.get(key)
        if cache is None:
            cache = TTLCache(f"{self.name}:{key}", self.ttl, clock=self._clock)
            self._caches[key] = cache
            while len(self._caches) > self.max_entries:
                evicted, _ = self._caches.popitem(last=False)
                logger.debug(f"[{self.name}] evicted {evicted}")
        return cache

    async def get(self, key: Hashable, fetch: Callable[[], Awaitable[T]]) -> CacheResult[T]:
        return await self.slot(key).get(fetch)


@dataclass
class CacheRegistry:
    """Every cache the app owns, built once at startup and handed to routes."""

    reciters: TTLCache[Any]
    chapters: TTLCache[Any]
    chapter_info: KeyedTTLCache[Any]
    audio_files: KeyedTTLCache[Any]
    audio_stream: KeyedTTLCache[Any]
    tts: KeyedTTLCache[Any]


def build_cache_registry(settings, clock: Clock = time.monotonic) -> CacheRegistry:
    max_entries = settings.CACHE_MAX_ENTRIES
    return CacheRegistry(
        reciters=TTLCache("reciters", settings.RECITERS_CACHE_TTL, clock=clock),
        chapters=TTLCache("chapters", settings.CHAPTERS_CACHE_TTL, clock=clock),
        chapter_info=KeyedTTLCache("chapter", settings.CHAPTERS_CACHE_TTL, max_entries, clock=clock),
        audio_files=KeyedTTLCache("audio-files", settings.AUDIO_FILES_CACHE_TTL, max_entries, clock=clock),
        audio_stream=KeyedTTLCache("audio-stream", settings.AUDIO_STREAM_CACHE_TTL, max_entries, clock=clock),
        tts=KeyedTTLCache("tts", settings.TTS_CACHE_TTL, max_entries, clock=clock),
    )
