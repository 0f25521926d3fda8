# src/cache/redis_service.py — v1
"""Redis-based cache service (CACHE_BACKEND=redis).

Requires 'redis' package: pip install redis.
Suitable for runner fleets that share one cache server.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence

from metanorma_cache.cache.archive import create_archive, extract_archive
from metanorma_cache.cache.base_cache_service import BaseCacheService, select_restore_key
from metanorma_cache.cache.models import cache_version
from metanorma_cache.core.errors import CacheServiceError, ReserveCacheError

logger = logging.getLogger(__name__)

_KEY_PREFIX = "metanorma-cache:"


class RedisCacheService(BaseCacheService):
    """Redis-backed cache service.

    Archives live under ``<prefix><version>:entry:<key>``; a sorted set
    ``<prefix><version>:index`` scores each key by its save time.
    """

    def __init__(self, redis_url: str) -> None:
        try:
            import redis
        except ImportError as e:
            raise ImportError(
                "redis package required: pip install redis"
            ) from e

        self._redis_error = redis.RedisError
        self._client = redis.Redis.from_url(redis_url)

    async def restore(
        self,
        paths: Sequence[str],
        primary_key: str,
        restore_keys: Sequence[str] = (),
    ) -> str | None:
        """Restore from the exact key, else the newest prefix match."""
        version = cache_version(paths)
        try:
            scored = self._client.zrange(_index_key(version), 0, -1, withscores=True)
            available = {_decode(member): score for member, score in scored}
            matched = select_restore_key(available, primary_key, restore_keys)
            if matched is None:
                return None
            data = self._client.get(_entry_key(version, matched))
        except self._redis_error as e:
            raise CacheServiceError(f"Redis cache lookup failed: {e}") from e

        if data is None:
            logger.warning("Cache index lists %s but its archive is gone", matched)
            return None
        try:
            extract_archive(data, paths)
        except OSError as e:
            raise CacheServiceError(f"Failed to extract cache {matched}: {e}") from e
        return matched

    async def save(self, paths: Sequence[str], key: str) -> int:
        """Archive ``paths`` under ``key``. Existing keys are never overwritten."""
        version = cache_version(paths)
        data = create_archive(paths)
        try:
            created = self._client.set(_entry_key(version, key), data, nx=True)
            if not created:
                raise ReserveCacheError(
                    f"Unable to reserve cache with key {key}, another job may be "
                    "creating this cache."
                )
            self._client.zadd(_index_key(version), {key: time.time()})
        except self._redis_error as e:
            raise CacheServiceError(f"Redis cache save failed: {e}") from e
        return len(data)

    def close(self) -> None:
        """Close the Redis connection."""
        self._client.close()


def _index_key(version: str) -> str:
    return f"{_KEY_PREFIX}{version}:index"


def _entry_key(version: str, key: str) -> str:
    return f"{_KEY_PREFIX}{version}:entry:{key}"


def _decode(member: bytes | str) -> str:
    return member.decode("utf-8") if isinstance(member, bytes) else member
