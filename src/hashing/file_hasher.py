# src/hashing/file_hasher.py — v1
"""Content hash over every file matched by a pattern set.

Files are sorted before hashing, so the digest depends only on which files
match and what they contain, never on glob or filesystem iteration order.
"""

from __future__ import annotations

import glob
import hashlib
import logging
import os
from collections.abc import Iterable

from metanorma_cache.core.errors import HashComputationError

logger = logging.getLogger(__name__)

_READ_CHUNK_SIZE = 64 * 1024


def expand_patterns(patterns: Iterable[str]) -> set[str]:
    """Expand glob patterns to absolute file paths (directories excluded).

    A pattern that fails to expand is logged and skipped.
    """
    files: set[str] = set()
    for pattern in sorted(patterns):
        try:
            matches = glob.glob(pattern, recursive=True)
        except (OSError, ValueError) as e:
            logger.warning("Failed to glob pattern %s: %s", pattern, e)
            continue
        for match in matches:
            if os.path.isfile(match):
                files.add(os.path.abspath(match))
    return files


def _update_from_file(digest, path: str) -> None:
    with open(path, "rb") as f:
        while chunk := f.read(_READ_CHUNK_SIZE):
            digest.update(chunk)


async def compute_hash(patterns: set[str], *, strict: bool = False) -> str | None:
    """Compute a SHA-256 hex digest over all files matching ``patterns``.

    Globbing and file reads run synchronously on the calling thread, so the
    event loop is blocked until the digest is complete.

    Args:
        patterns: Glob patterns from resolve_patterns().
        strict: Raise instead of skipping a matched file that cannot be read.

    Returns:
        64-character lowercase hex digest, or None when there are no patterns
        or no file matches.

    Raises:
        HashComputationError: In strict mode, if a matched file is unreadable.
    """
    if not patterns:
        logger.warning("No hash patterns generated")
        return None

    logger.info("Input directories:\n%s", "\n".join(sorted(patterns)))

    files = expand_patterns(patterns)
    if not files:
        logger.warning("No files found matching patterns")
        return None

    logger.info("Found %d files for hashing", len(files))

    digest = hashlib.sha256()
    for path in sorted(files):
        file_digest = digest.copy()
        try:
            _update_from_file(file_digest, path)
        except OSError as e:
            if strict:
                raise HashComputationError(f"Failed to read file {path}: {e}") from e
            logger.warning("Failed to read file %s: %s", path, e)
            continue
        digest = file_digest

    input_hash = digest.hexdigest()
    logger.info("Input hash: %s", input_hash)
    return input_hash
