"""
In-memory cache implementation for Catalog Service
"""

import threading
import time
from typing import Any, Callable, Dict, Optional

from ...utils.logging import setup_catalog_logging

logger = setup_catalog_logging("catalog_service_cache")


class CacheError(Exception):
    """Raised when the cache cannot serve or store an entry"""


class InMemoryCache:
    """Process-local cache with TTL support.

    Safe to share between concurrent operations: every access to the
    underlying map holds ``self._lock``.
    """

    def __init__(
        self,
        max_size: int = 1000,
        default_ttl: int = 1800,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.cache: Dict[str, Dict[str, Any]] = {}
        self.max_size = max_size
        self.default_ttl = default_ttl
        self._clock = clock
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    async def get(self, key: str) -> Optional[Any]:
        """Get value from cache"""
        with self._lock:
            entry = self.cache.get(key)
            if entry is not None:
                if self._clock() < entry["expires_at"]:
                    self._hits += 1
                    return entry["value"]
                # Expired, remove it
                del self.cache[key]
            self._misses += 1
            return None

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        """Set value in cache with TTL"""
        ttl = self.default_ttl if ttl is None else ttl
        with self._lock:
            if len(self.cache) >= self.max_size and key not in self.cache:
                self._cleanup_expired()
                if len(self.cache) >= self.max_size:
                    self._evict_oldest()

            now = self._clock()
            self.cache[key] = {
                "value": value,
                "expires_at": now + ttl,
                "created_at": now,
            }

    async def delete(self, key: str) -> None:
        """Delete key from cache"""
        with self._lock:
            self.cache.pop(key, None)

    async def invalidate_prefix(self, prefix: str) -> int:
        """Delete every key starting with ``prefix``; returns how many were removed"""
        with self._lock:
            keys = [key for key in self.cache if key.startswith(prefix)]
            for key in keys:
                del self.cache[key]
            return len(keys)

    def _cleanup_expired(self) -> None:
        current_time = self._clock()
        expired_keys = [
            key
            for key, entry in self.cache.items()
            if current_time >= entry["expires_at"]
        ]
        for key in expired_keys:
            del self.cache[key]

    def _evict_oldest(self) -> None:
        oldest_key = min(self.cache, key=lambda k: self.cache[k]["created_at"])
        del self.cache[oldest_key]
        logger.debug("Cache full, evicted oldest entry", extra={"cache_key": oldest_key})

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics"""
        with self._lock:
            current_time = self._clock()
            total_entries = len(self.cache)
            expired_count = sum(
                1 for entry in self.cache.values() if current_time >= entry["expires_at"]
            )
            lookups = self._hits + self._misses
            return {
                "entries": total_entries,
                "expired_entries": expired_count,
                "active_entries": total_entries - expired_count,
                "max_size": self.max_size,
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": round(self._hits / lookups, 4) if lookups else 0,
            }


# Process-wide category cache, created on first use
_category_cache: Optional[InMemoryCache] = None
_category_cache_lock = threading.Lock()


def get_category_cache() -> InMemoryCache:
    """Get the shared category cache instance"""
    global _category_cache
    with _category_cache_lock:
        if _category_cache is None:
            from ...core.setting import get_settings

            settings = get_settings()
            _category_cache = InMemoryCache(
                max_size=settings.CACHE_MAX_SIZE,
                default_ttl=settings.CATEGORY_CACHE_TTL_SECONDS,
            )
        return _category_cache
