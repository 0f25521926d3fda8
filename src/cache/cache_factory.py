# src/cache/cache_factory.py — v1
"""Factory for cache service instantiation."""

from __future__ import annotations

from metanorma_cache.cache.base_cache_service import BaseCacheService
from metanorma_cache.config.settings import Settings
from metanorma_cache.core.errors import ConfigurationError


def create_cache_service(settings: Settings | None = None) -> BaseCacheService:
    """Instantiate the configured cache backend.

    Args:
        settings: Invocation settings. Defaults to the local backend.

    Returns:
        Configured BaseCacheService implementation.
    """
    backend = "local" if settings is None else settings.cache_backend

    if backend == "local":
        from metanorma_cache.cache.local_service import LocalCacheService
        cache_root = "~/.cache/metanorma-cache" if settings is None else settings.cache_root
        return LocalCacheService(cache_root=cache_root)

    if backend == "redis":
        from metanorma_cache.cache.redis_service import RedisCacheService
        if settings is None or not settings.cache_redis_url:
            raise ConfigurationError(
                "CACHE_REDIS_URL must be set when CACHE_BACKEND=redis"
            )
        return RedisCacheService(redis_url=settings.cache_redis_url)

    raise ConfigurationError(f"Unsupported cache backend: {backend!r}")
