"""
In-memory caching mechanism for translated texts per language pair.
"""
import asyncio
import logging
import time
from typing import Dict, List, Optional, Sequence, Tuple
from dataclasses import dataclass

from ..config import Config

logger = logging.getLogger(__name__)

CacheKey = Tuple[str, str, str]


@dataclass
class CachedTranslation:
    """
    Data class to represent a cached translation.
    """
    content: str
    source_language: str
    target_language: str
    source_text: str
    created_at: float
    expires_at: float


class TranslationCache:
    """
    In-memory caching mechanism for translated texts.
    Caches translations per (source, target, text) with TTL (time-to-live).
    """

    def __init__(self, ttl_seconds: int = Config.CACHE_TTL_SECONDS, max_size: int = Config.MAX_CACHE_SIZE):
        """
        Initialize the cache with TTL and max size settings.

        Args:
            ttl_seconds: Time-to-live for cached translations in seconds (default: 24 hours)
            max_size: Maximum number of cached translations
        """
        self.ttl_seconds = ttl_seconds
        self.max_size = max_size
        self._cache: Dict[CacheKey, CachedTranslation] = {}
        self._lock = asyncio.Lock()

    @staticmethod
    def generate_cache_key(source: str, target: str, text: str) -> CacheKey:
        """
        Generate a cache key from the language pair and the source text.

        A tuple keeps the three parts apart, so tags that contain the
        separator of a joined string (e.g. "en-US") cannot collide.
        """
        return (source, target, text)

    def _is_expired(self, cached_translation: CachedTranslation) -> bool:
        return time.time() > cached_translation.expires_at

    def _get_unlocked(self, key: CacheKey) -> Optional[str]:
        cached_translation = self._cache.get(key)

        if cached_translation and not self._is_expired(cached_translation):
            return cached_translation.content
        elif cached_translation:  # Entry exists but is expired
            del self._cache[key]

        return None

    async def get(self, key: CacheKey) -> Optional[str]:
        """
        Get a cached translation if it exists and hasn't expired.

        Args:
            key: Key built with generate_cache_key

        Returns:
            Translated text if found and not expired, None otherwise
        """
        async with self._lock:
            return self._get_unlocked(key)

    async def get_many(self, keys: Sequence[CacheKey]) -> List[Optional[str]]:
        """
        Look up several keys at once.

        Returns:
            A list parallel to keys holding the translated text for hits and None for misses
        """
        async with self._lock:
            return [self._get_unlocked(key) for key in keys]

    async def set(self, key: CacheKey, content: str) -> None:
        """
        Set a translation in the cache. An existing entry for the key is overwritten.

        Args:
            key: Key built with generate_cache_key
            content: The translated text
        """
        async with self._lock:
            self._set_unlocked(key, content)

    async def set_many(self, items: Sequence[Tuple[CacheKey, str]]) -> None:
        async with self._lock:
            for key, content in items:
                self._set_unlocked(key, content)

    def _set_unlocked(self, key: CacheKey, content: str) -> None:
        # Evict the oldest entry when a new key would exceed max size
        if key not in self._cache and len(self._cache) >= self.max_size:
            oldest_key = min(
                self._cache.keys(),
                key=lambda k: self._cache[k].created_at,
                default=None
            )
            if oldest_key is not None:
                del self._cache[oldest_key]
                logger.debug(f"Evicted oldest cache entry for {oldest_key[0]}|{oldest_key[1]}")

        now = time.time()
        source, target, text = key
        self._cache[key] = CachedTranslation(
            content=content,
            source_language=source,
            target_language=target,
            source_text=text,
            created_at=now,
            expires_at=now + self.ttl_seconds
        )

    async def evict(self, key: CacheKey) -> bool:
        """
        Remove a translation from the cache.

        Returns:
            True if the entry was found and removed, False otherwise
        """
        async with self._lock:
            if key in self._cache:
                del self._cache[key]
                return True
            return False

    async def clear_expired(self) -> int:
        """
        Clear all expired entries from the cache.

        Returns:
            Number of entries removed
        """
        async with self._lock:
            expired_keys = [
                key for key, cached_translation in self._cache.items()
                if self._is_expired(cached_translation)
            ]

            for key in expired_keys:
                del self._cache[key]

            return len(expired_keys)

    async def clear(self) -> None:
        async with self._lock:
            self._cache.clear()

    async def get_cache_stats(self) -> Dict[str, float]:
        """
        Get cache statistics.

        Returns:
            Dictionary with cache statistics
        """
        async with self._lock:
            total = len(self._cache)
            expired_count = sum(1 for ct in self._cache.values() if self._is_expired(ct))
            valid_count = total - expired_count

            return {
                "total_entries": total,
                "valid_entries": valid_count,
                "expired_entries": expired_count,
                "max_capacity": self.max_size,
                "utilization_percent": (total / self.max_size) * 100 if self.max_size > 0 else 0
            }

    async def run_expiry_sweeper(self, check_period: float = Config.CACHE_CHECK_PERIOD) -> None:
        """
        Periodically drop expired entries until cancelled.

        Args:
            check_period: Seconds between sweeps
        """
        while True:
            await asyncio.sleep(check_period)
            removed = await self.clear_expired()
            if removed:
                logger.info(f"Removed {removed} expired translations from cache")
