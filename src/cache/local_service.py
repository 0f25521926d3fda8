# src/cache/local_service.py — v1
"""Directory-backed cache service (CACHE_BACKEND=local).

Stores each entry as a tar.gz archive plus a JSON metadata file under
CACHE_ROOT/<version prefix>/. Suited to self-hosted runners with a
persistent or shared volume.
"""

from __future__ import annotations

import hashlib
import json
import logging
from collections.abc import Sequence
from datetime import datetime, timezone
from pathlib import Path

from metanorma_cache.cache.archive import create_archive, extract_archive
from metanorma_cache.cache.base_cache_service import BaseCacheService, select_restore_key
from metanorma_cache.cache.models import CacheEntry, cache_version
from metanorma_cache.core.errors import CacheServiceError, ReserveCacheError

logger = logging.getLogger(__name__)


class LocalCacheService(BaseCacheService):
    """File-based cache service keeping archives on the local filesystem."""

    def __init__(self, cache_root: Path | str) -> None:
        self._root = Path(cache_root).expanduser()

    async def restore(
        self,
        paths: Sequence[str],
        primary_key: str,
        restore_keys: Sequence[str] = (),
    ) -> str | None:
        """Restore from the exact key, else the newest prefix match."""
        version = cache_version(paths)
        entries = {e.key: e for e in self.list_entries(version)}
        available = {key: e.created_at.timestamp() for key, e in entries.items()}

        matched = select_restore_key(available, primary_key, restore_keys)
        if matched is None:
            return None

        archive_path = self._version_dir(version) / entries[matched].archive
        try:
            data = archive_path.read_bytes()
        except OSError as e:
            raise CacheServiceError(f"Failed to read cache archive {archive_path}: {e}") from e

        try:
            count = extract_archive(data, paths)
        except OSError as e:
            raise CacheServiceError(f"Failed to extract cache {matched}: {e}") from e
        logger.debug("Restored %d files from %s", count, archive_path)
        return matched

    async def save(self, paths: Sequence[str], key: str) -> int:
        """Archive ``paths`` under ``key``. Existing keys are never overwritten."""
        version = cache_version(paths)
        meta_path = self._entry_path(version, key)
        if meta_path.exists():
            raise ReserveCacheError(
                f"Unable to reserve cache with key {key}, another job may be "
                "creating this cache."
            )

        data = create_archive(paths)
        archive_name = meta_path.with_suffix(".tar.gz").name
        entry = CacheEntry(
            key=key,
            version=version,
            archive=archive_name,
            size_bytes=len(data),
            created_at=datetime.now(timezone.utc),
        )
        try:
            meta_path.parent.mkdir(parents=True, exist_ok=True)
            (meta_path.parent / archive_name).write_bytes(data)
            meta_path.write_text(entry.model_dump_json(indent=2), encoding="utf-8")
        except OSError as e:
            raise CacheServiceError(f"Failed to write cache entry {key}: {e}") from e
        return len(data)

    def list_entries(self, version: str) -> list[CacheEntry]:
        """List stored entries for one path-list version."""
        entries: list[CacheEntry] = []
        directory = self._version_dir(version)
        if not directory.is_dir():
            return entries

        for path in directory.glob("*.json"):
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
                entry = CacheEntry(**data)
            except Exception as e:
                logger.warning("Failed to read cache entry %s: %s", path, e)
                continue
            if entry.version == version:
                entries.append(entry)
        return entries

    def _version_dir(self, version: str) -> Path:
        return self._root / version[:16]

    def _entry_path(self, version: str, key: str) -> Path:
        """Return the metadata file path for a cache key."""
        digest = hashlib.sha256(key.encode("utf-8")).hexdigest()[:32]
        return self._version_dir(version) / f"{digest}.json"
