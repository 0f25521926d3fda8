# src/cache/models.py — v1
"""Cache service models: CacheEntry metadata and version helper."""

from __future__ import annotations

import hashlib
from collections.abc import Sequence
from datetime import datetime

from pydantic import BaseModel

COMPRESSION_METHOD = "gzip"
CACHE_FORMAT_VERSION = "1.0"


class CacheEntry(BaseModel):
    """Metadata of one stored cache archive."""

    key: str
    version: str
    archive: str
    size_bytes: int
    created_at: datetime


def cache_version(paths: Sequence[str]) -> str:
    """Version stamp for a path list.

    Entries saved for one set of paths are invisible to restores that ask for
    a different set, so an archive is never unpacked onto the wrong layout.
    """
    components = [*paths, COMPRESSION_METHOD, CACHE_FORMAT_VERSION]
    return hashlib.sha256("|".join(components).encode("utf-8")).hexdigest()
