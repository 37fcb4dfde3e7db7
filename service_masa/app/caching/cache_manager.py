"""
Namespaced in-memory cache with per-region capacity and TTL.
"""

import hashlib
import json
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Optional, Type, TypeVar

from shared.logging import get_logger
from shared.metrics import MetricsCollector


DEFAULT_MAX_SIZE = 100
DEFAULT_TTL = 300.0  # 5 minutes

T = TypeVar("T")


@dataclass(frozen=True)
class CacheOptions:
    """Region bounds applied when a region is first created.

    On later writes only `ttl` is honored, and only for the entry written.
    """
    max_size: Optional[int] = None
    ttl: Optional[float] = None  # seconds


@dataclass
class CacheEntry:
    key: str
    value: Any
    inserted_at: float
    ttl: float
    region: str

    def is_expired(self, now: float) -> bool:
        return now - self.inserted_at >= self.ttl


def make_cache_key(operation: str, *args: Any) -> str:
    """Deterministic cache key for an operation and its arguments."""
    payload = json.dumps(
        [operation, *args],
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )
    return f"{operation}:{hashlib.sha256(payload.encode('utf-8')).hexdigest()[:32]}"


class _Region:
    """One LRU region. Entry order is recency of use, oldest first."""

    def __init__(self, name: str, max_size: int, ttl: float, clock: Callable[[], float]):
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        if ttl <= 0:
            raise ValueError("ttl must be positive")
        self.name = name
        self.max_size = max_size
        self.ttl = ttl
        self.hits = 0
        self.misses = 0
        self._clock = clock
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[CacheEntry]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self.misses += 1
                return None

            if entry.is_expired(self._clock()):
                del self._entries[key]
                self.misses += 1
                return None

            self._entries.move_to_end(key)
            self.hits += 1
            return entry

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> Optional[str]:
        """Store `value`; returns the evicted key, if any."""
        with self._lock:
            now = self._clock()
            evicted = None

            if key in self._entries:
                del self._entries[key]
            elif len(self._entries) >= self.max_size:
                self._purge_expired(now)
                if len(self._entries) >= self.max_size:
                    evicted, _ = self._entries.popitem(last=False)

            self._entries[key] = CacheEntry(
                key=key,
                value=value,
                inserted_at=now,
                ttl=ttl if ttl is not None else self.ttl,
                region=self.name,
            )
            return evicted

    def delete(self, key: str):
        with self._lock:
            self._entries.pop(key, None)

    def _purge_expired(self, now: float):
        expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
        for key in expired:
            del self._entries[key]

    def __len__(self) -> int:
        return len(self._entries)


class NamespacedCache:
    """Key/value cache partitioned into named regions.

    Each region has its own capacity and default TTL, fixed by the first
    `set` into that region. Reads never refresh an entry's TTL.
    """

    def __init__(self,
                 default_max_size: int = DEFAULT_MAX_SIZE,
                 default_ttl: float = DEFAULT_TTL,
                 *,
                 clock: Callable[[], float] = time.monotonic,
                 metrics: Optional[MetricsCollector] = None):
        self.default_max_size = default_max_size
        self.default_ttl = default_ttl
        self.logger = get_logger("masa.cache")
        self.metrics = metrics
        self._clock = clock
        self._regions: Dict[str, _Region] = {}
        self._lock = threading.Lock()

    def _get_region(self, name: str, options: Optional[CacheOptions] = None) -> _Region:
        with self._lock:
            region = self._regions.get(name)
            if region is None:
                max_size = options.max_size if options and options.max_size is not None else self.default_max_size
                ttl = options.ttl if options and options.ttl is not None else self.default_ttl
                region = _Region(name, max_size, ttl, self._clock)
                self._regions[name] = region
                self.logger.debug("Created cache region", region=name, max_size=max_size, ttl=ttl)
            return region

    def get(self, region: str, key: str) -> Optional[Any]:
        """Return the cached value, or None when absent or expired."""
        store = self._regions.get(region)
        entry = store.get(key) if store is not None else None

        if self.metrics:
            self.metrics.record_cache_lookup(region, hit=entry is not None)

        if entry is None:
            self.logger.debug("Cache miss", region=region, key=key)
            return None

        self.logger.debug("Cache hit", region=region, key=key)
        return entry.value

    def set(self,
            region: str,
            key: str,
            value: Any,
            options: Optional[CacheOptions] = None,
            *,
            ttl: Optional[float] = None):
        """Store `value` under (`region`, `key`).

        `options` bound the region only when this call creates it. An explicit
        `ttl` (or `options.ttl`) applies to this entry alone.
        """
        store = self._get_region(region, options)
        if ttl is None and options is not None:
            ttl = options.ttl
        evicted = store.set(key, value, ttl=ttl)
        if evicted is not None:
            self.logger.debug("Evicted cache entry", region=region, key=evicted)

    def delete(self, region: str, key: str):
        """Remove one entry. Missing regions and keys are ignored."""
        store = self._regions.get(region)
        if store is not None:
            store.delete(key)

    def clear(self, region: str):
        """Drop a region together with its configuration."""
        with self._lock:
            removed = self._regions.pop(region, None)
        if removed is not None:
            self.logger.info("Cleared cache region", region=region, entries=len(removed))

    def typed(self, region: str, value_type: Type[T], options: Optional[CacheOptions] = None) -> "TypedRegion[T]":
        """Return a typed view over `region`."""
        return TypedRegion(self, region, value_type, options)

    def get_stats(self) -> Dict[str, Dict[str, Any]]:
        """Per-region size, bounds and hit/miss counts."""
        with self._lock:
            regions = list(self._regions.values())

        stats = {}
        for region in regions:
            lookups = region.hits + region.misses
            stats[region.name] = {
                "entries": len(region),
                "max_size": region.max_size,
                "ttl": region.ttl,
                "hits": region.hits,
                "misses": region.misses,
                "hit_rate": region.hits / lookups if lookups else 0.0,
            }
        return stats


class TypedRegion(Generic[T]):
    """A region whose values are all instances of one type."""

    def __init__(self,
                 cache: NamespacedCache,
                 region: str,
                 value_type: Type[T],
                 options: Optional[CacheOptions] = None):
        self.cache = cache
        self.region = region
        self.value_type = value_type
        self.options = options

    def get(self, key: str) -> Optional[T]:
        value = self.cache.get(self.region, key)
        if value is None:
            return None
        if not isinstance(value, self.value_type):
            raise TypeError(
                f"Cache region {self.region!r} holds {type(value).__name__} under {key!r}, "
                f"expected {self.value_type.__name__}"
            )
        return value

    def set(self, key: str, value: T, ttl: Optional[float] = None):
        self.cache.set(self.region, key, value, self.options, ttl=ttl)

    def delete(self, key: str):
        self.cache.delete(self.region, key)
