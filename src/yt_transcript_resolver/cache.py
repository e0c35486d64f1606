"""In-memory caches for watch pages and resolved transcripts.

Entries remember when they were written and are checked against the current
``max_age`` lazily on read, so changing the options takes effect immediately.
"""

import time
from collections.abc import Callable, Sequence
from typing import Any, Generic, NamedTuple, TypeVar

from cachetools import LRUCache

from yt_transcript_resolver.config import CacheOptions
from yt_transcript_resolver.models import Transcript

T = TypeVar("T")


class CacheEntry(NamedTuple):
    data: Any
    timestamp: float


class TimedCache(Generic[T]):
    def __init__(
        self,
        options: CacheOptions,
        timer: Callable[[], float] = time.monotonic,
    ):
        self.options = options
        self._timer = timer
        self._cache: LRUCache = LRUCache(maxsize=options.max_size)
        self._hits = 0
        self._misses = 0

    def get(self, key: str) -> T | None:
        entry = self._cache.get(key) if self.options.enabled else None
        if entry is not None and self._timer() - entry.timestamp < self.options.max_age:
            self._hits += 1
            return entry.data
        if entry is not None:
            del self._cache[key]
        self._misses += 1
        return None

    def set(self, key: str, data: T) -> None:
        if self.options.enabled:
            self._cache[key] = CacheEntry(data, self._timer())

    def clear(self) -> None:
        self._cache.clear()

    def resize(self, options: CacheOptions) -> None:
        if options.max_size != self._cache.maxsize:
            resized: LRUCache = LRUCache(maxsize=options.max_size)
            for key, entry in list(self._cache.items()):
                resized[key] = entry
            self._cache = resized
        self.options = options

    def stats(self) -> dict:
        return {
            "size": len(self._cache),
            "max_size": self._cache.maxsize,
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": round(self._hits / max(self._hits + self._misses, 1) * 100, 1),
        }


class ResolverCache:
    """The page cache and the transcript cache, configured together."""

    def __init__(
        self,
        options: CacheOptions | None = None,
        timer: Callable[[], float] = time.monotonic,
    ):
        self.options = options or CacheOptions()
        self.pages: TimedCache[str] = TimedCache(self.options, timer)
        self.transcripts: TimedCache[Transcript] = TimedCache(self.options, timer)

    @staticmethod
    def page_key(video_id: str) -> str:
        return f"html:{video_id}"

    @staticmethod
    def transcript_key(
        video_id: str, languages: Sequence[str], preserve_formatting: bool
    ) -> str:
        return f"transcript:{video_id}:{','.join(languages)}:{preserve_formatting}"

    def update(self, **changes) -> None:
        self.options = self.options.model_copy(update=changes)
        self.pages.resize(self.options)
        self.transcripts.resize(self.options)

    def clear(self, kind: str | None = None) -> None:
        if kind not in (None, "page", "transcript"):
            raise ValueError(f"Unknown cache kind {kind!r}; expected 'page' or 'transcript'")
        if kind in (None, "page"):
            self.pages.clear()
        if kind in (None, "transcript"):
            self.transcripts.clear()
