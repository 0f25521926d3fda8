# src/cache/archive.py — v1
"""tar.gz packing of cached paths.

Each path is stored under its position in the path list ("0", "1/...", ...),
so an archive can be unpacked onto the same list in any checkout location.
"""

from __future__ import annotations

import io
import logging
import os
import shutil
import tarfile
from collections.abc import Sequence
from pathlib import PurePosixPath

from metanorma_cache.core.errors import CacheServiceError

logger = logging.getLogger(__name__)


def create_archive(paths: Sequence[str]) -> bytes:
    """Pack existing ``paths`` into a gzip-compressed tarball.

    Raises:
        CacheServiceError: If none of the paths exist.
    """
    existing = [(i, p) for i, p in enumerate(paths) if os.path.lexists(p)]
    if not existing:
        raise CacheServiceError(
            "Path validation error: none of the paths to cache exist: "
            + ", ".join(paths)
        )

    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as tar:
        for index, path in existing:
            tar.add(path, arcname=str(index))
    return buffer.getvalue()


def _destination(member_name: str, paths: Sequence[str]) -> str | None:
    """Map an archive member name back onto the target path list."""
    name = PurePosixPath(member_name)
    if name.is_absolute() or ".." in name.parts or not name.parts:
        return None
    head, *rest = name.parts
    if not head.isdigit() or int(head) >= len(paths):
        return None
    return os.path.join(paths[int(head)], *rest)


def extract_archive(data: bytes, paths: Sequence[str]) -> int:
    """Unpack an archive from create_archive() onto ``paths``.

    Members with absolute names, ``..`` segments or an unknown index are
    rejected; links and special files are skipped.

    Returns:
        Number of regular files written.
    """
    restored = 0
    try:
        with tarfile.open(fileobj=io.BytesIO(data), mode="r:gz") as tar:
            for member in tar:
                dest = _destination(member.name, paths)
                if dest is None:
                    logger.warning("Skipping unsafe archive member %r", member.name)
                    continue
                if member.isdir():
                    os.makedirs(dest, exist_ok=True)
                elif member.isfile():
                    parent = os.path.dirname(dest)
                    if parent:
                        os.makedirs(parent, exist_ok=True)
                    source = tar.extractfile(member)
                    if source is None:
                        continue
                    with source, open(dest, "wb") as out:
                        shutil.copyfileobj(source, out)
                    os.chmod(dest, member.mode & 0o777)
                    restored += 1
                else:
                    logger.debug("Skipping non-regular archive member %s", member.name)
    except (tarfile.TarError, EOFError) as e:
        raise CacheServiceError(f"Corrupt cache archive: {e}") from e
    return restored
