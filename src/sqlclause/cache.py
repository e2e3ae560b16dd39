"""
Caching for described schemas.

A record type is described once and the descriptor reused for every instance.
Uses cachetools LRUCache so long-running hosts with many dynamically created
types stay bounded.
"""
import functools
import logging
import threading

import cachetools

logger = logging.getLogger(__name__)


class Cache:
    """Holds described schemas, one named LRU cache per builder.

    Entries are keyed by record type, so a type is described once per
    process. Thread-safe singleton; `clear_for_type` drops a redefined type.
    """

    _instance = None
    _caches: dict[str, cachetools.LRUCache] = {}
    _lock = threading.RLock()

    @classmethod
    def get_instance(cls) -> 'Cache':
        """Get singleton instance."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    def get_cache(self, name: str, maxsize: int = 256) -> cachetools.LRUCache:
        """Get or create an LRU cache with the given name.

        Args:
            name: Name of the cache
            maxsize: Maximum cache size

        Returns
            LRUCache instance
        """
        if name not in self._caches:
            with self._lock:
                if name not in self._caches:
                    self._caches[name] = cachetools.LRUCache(maxsize=maxsize)
        return self._caches[name]

    def clear_all(self) -> None:
        """Empty every named cache (described schemas included)."""
        with self._lock:
            for cache in self._caches.values():
                cache.clear()

    def clear_cache(self, name: str) -> None:
        """Clear a specific cache by name."""
        with self._lock:
            if name in self._caches:
                self._caches[name].clear()

    def clear_for_type(self, record_type: type) -> None:
        """Drop every cache entry keyed by a record type.
        """
        with self._lock:
            for cache in self._caches.values():
                if record_type in cache:
                    del cache[record_type]
                    logger.debug(f'Cleared cache entry for {record_type.__qualname__}')


def cacheable_schema(cache_name: str, maxsize: int = 256):
    """Decorator caching a schema builder's result per record type.

    Respects a bypass_cache parameter to rebuild without consulting or
    filling the cache.

    Args:
        cache_name: Name of the cache
        maxsize: Maximum cache size
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(record_type, *args, bypass_cache=False, **kwargs):
            if bypass_cache or args or kwargs or not isinstance(record_type, type):
                logger.debug(f'Bypassing cache for {func.__name__}({record_type!r})')
                return func(record_type, *args, **kwargs)

            cache = Cache.get_instance().get_cache(cache_name, maxsize=maxsize)
            with Cache._lock:
                if record_type in cache:
                    logger.debug(f'Cache hit for {func.__name__}({record_type!r})')
                    return cache[record_type]

            logger.debug(f'Cache miss for {func.__name__}({record_type!r})')
            result = func(record_type)
            with Cache._lock:
                cache[record_type] = result
            return result

        return wrapper
    return decorator
