"""
In-memory response caches for GitHub lookups.

Each cache is a size-weighted LRU with a fixed time-to-live. Lookups go
through get_or_insert(), which runs the producer once per key even when
many threads miss at the same time; the others wait for that result.
Producer failures are handed to every waiter but never stored.
"""

from __future__ import annotations
import copy
import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Hashable, Iterable, List, Optional, Tuple, TypeVar

from ..config import CacheConfig
from ..languages import LanguageStat, stats_weight
from .types import GitHubStats

log = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class _InFlight:
    def __init__(self):
        self.done = threading.Event()
        self.value: Any = None
        self.error: Optional[BaseException] = None


class TTLCache(Generic[K, V]):
    def __init__(
        self,
        max_weight: int,
        ttl: float,
        weigher: Callable[[V], int],
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_weight = max_weight
        self.ttl = ttl
        self._weigher = weigher
        self._clock = clock
        self._lock = threading.Lock()
        # key -> (value, weight, expires_at), least recently used first
        self._entries: "OrderedDict[K, Tuple[V, int, float]]" = OrderedDict()
        self._weighted_size = 0
        self._in_flight: Dict[K, _InFlight] = {}

    def get_or_insert(self, key: K, producer: Callable[[], V]) -> V:
        with self._lock:
            hit = self._lookup(key)
            if hit is not None:
                log.debug("Cache hit: %s", key)
                return hit
            pending = self._in_flight.get(key)
            owner = pending is None
            if owner:
                pending = self._in_flight[key] = _InFlight()

        if not owner:
            log.debug("Waiting on in-flight producer: %s", key)
            pending.done.wait()
            if pending.error is not None:
                # Each waiter raises its own copy so tracebacks stay per thread.
                raise copy.copy(pending.error)
            return pending.value

        log.debug("Cache miss: %s", key)
        try:
            value = producer()
        except BaseException as exc:
            pending.error = exc
            with self._lock:
                self._in_flight.pop(key, None)
            pending.done.set()
            raise

        pending.value = value
        with self._lock:
            self._store(key, value)
            self._in_flight.pop(key, None)
        pending.done.set()
        return value

    @property
    def entry_count(self) -> int:
        with self._lock:
            self._purge_expired()
            return len(self._entries)

    @property
    def weighted_size(self) -> int:
        with self._lock:
            self._purge_expired()
            return self._weighted_size

    # Callers below hold self._lock.

    def _lookup(self, key: K) -> Optional[V]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, weight, expires_at = entry
        if self._clock() >= expires_at:
            self._remove(key)
            return None
        self._entries.move_to_end(key)
        return value

    def _store(self, key: K, value: V) -> None:
        if key in self._entries:
            self._remove(key)
        weight = max(int(self._weigher(value)), 0)
        self._entries[key] = (value, weight, self._clock() + self.ttl)
        self._weighted_size += weight
        self._purge_expired()
        while self._weighted_size > self.max_weight and len(self._entries) > 1:
            oldest = next(iter(self._entries))
            log.debug("Evicting %s", oldest)
            self._remove(oldest)

    def _remove(self, key: K) -> None:
        _, weight, _ = self._entries.pop(key)
        self._weighted_size -= weight

    def _purge_expired(self) -> None:
        now = self._clock()
        expired = [k for k, (_, _, expires_at) in self._entries.items() if now >= expires_at]
        for key in expired:
            self._remove(key)


LanguagesKey = Tuple[str, frozenset]


def languages_key(username: str, excluded_repos: Iterable[str]) -> LanguagesKey:
    return (username, frozenset(excluded_repos))


@dataclass(frozen=True)
class CacheStats:
    entry_count: int
    weighted_size: int
    stats_cache_entries: int
    stats_cache_size: int
    languages_cache_entries: int
    languages_cache_size: int

    def as_dict(self) -> Dict[str, int]:
        return {
            "entry_count": self.entry_count,
            "weighted_size": self.weighted_size,
            "stats_cache_entries": self.stats_cache_entries,
            "stats_cache_size": self.stats_cache_size,
            "languages_cache_entries": self.languages_cache_entries,
            "languages_cache_size": self.languages_cache_size,
        }


class GitHubCache:
    def __init__(self, cache_config: Optional[CacheConfig] = None, clock: Callable[[], float] = time.monotonic):
        self.config = cache_config or CacheConfig()
        self.stats_cache: TTLCache[str, GitHubStats] = TTLCache(
            self.config.max_capacity_bytes,
            self.config.user_stats_ttl,
            lambda stats: stats.weight(),
            clock,
        )
        self.languages_cache: TTLCache[LanguagesKey, List[LanguageStat]] = TTLCache(
            self.config.max_capacity_bytes,
            self.config.user_languages_ttl,
            stats_weight,
            clock,
        )

    def get_or_insert_user_stats(self, username: str, fetch_fn: Callable[[], GitHubStats]) -> GitHubStats:
        return self.stats_cache.get_or_insert(username, fetch_fn)

    def get_or_insert_user_languages(
        self,
        username: str,
        excluded_repos: Iterable[str],
        fetch_fn: Callable[[], List[LanguageStat]],
    ) -> List[LanguageStat]:
        key = languages_key(username, excluded_repos)
        # Callers get their own list; the cached one stays untouched.
        return list(self.languages_cache.get_or_insert(key, fetch_fn))

    def stats(self) -> CacheStats:
        stats_entries = self.stats_cache.entry_count
        stats_size = self.stats_cache.weighted_size
        langs_entries = self.languages_cache.entry_count
        langs_size = self.languages_cache.weighted_size
        return CacheStats(
            entry_count=stats_entries + langs_entries,
            weighted_size=stats_size + langs_size,
            stats_cache_entries=stats_entries,
            stats_cache_size=stats_size,
            languages_cache_entries=langs_entries,
            languages_cache_size=langs_size,
        )


_CACHE: Optional[GitHubCache] = None
_CACHE_LOCK = threading.Lock()


def get_github_cache() -> GitHubCache:
    global _CACHE
    if _CACHE is None:
        with _CACHE_LOCK:
            if _CACHE is None:
                cache_config = CacheConfig.from_env()
                log.info(
                    "Initializing GitHub cache with capacity: %sMB, stats TTL: %ss, languages TTL: %ss",
                    cache_config.max_capacity_mb,
                    cache_config.user_stats_ttl,
                    cache_config.user_languages_ttl,
                )
                _CACHE = GitHubCache(cache_config)
    return _CACHE
