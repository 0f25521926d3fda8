# src/cache/base_cache_service.py — v1
"""Abstract remote cache service interface.

Backends persist opaque archives of filesystem paths under string keys.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence


class BaseCacheService(ABC):
    """Unified interface for cache service backends."""

    @abstractmethod
    async def restore(
        self,
        paths: Sequence[str],
        primary_key: str,
        restore_keys: Sequence[str] = (),
    ) -> str | None:
        """Restore ``paths`` from the best matching entry.

        Returns:
            The key of the entry actually restored, or None on a miss.

        Raises:
            CacheServiceError: On a backend failure.
        """

    @abstractmethod
    async def save(self, paths: Sequence[str], key: str) -> int:
        """Archive ``paths`` under ``key``.

        Returns:
            Size in bytes of the stored archive.

        Raises:
            ReserveCacheError: If ``key`` already holds an entry.
            CacheServiceError: On any other backend failure.
        """

    def close(self) -> None:
        """Release backend connections. Nothing to release by default."""


def select_restore_key(
    available: Mapping[str, float],
    primary_key: str,
    restore_keys: Sequence[str],
) -> str | None:
    """Pick the entry to restore from ``available`` (key -> creation timestamp).

    The exact primary key wins. Otherwise each restore key is tried in order
    as a prefix, taking the newest entry that starts with it.
    """
    if primary_key in available:
        return primary_key
    newest_first = sorted(available, key=lambda k: available[k], reverse=True)
    for prefix in restore_keys:
        for key in newest_first:
            if key.startswith(prefix):
                return key
    return None
