# src/hashing/patterns.py — v1
"""Match pattern resolution for site cache keys.

Turns the manifest's declared source files and the extra-input list into a
set of glob patterns rooted at the manifest directory. Each declared file
contributes its whole containing directory (``<dir>/**``) since documents
pull in sibling includes and assets the manifest does not list.
"""

from __future__ import annotations

import logging
import posixpath
import re

from metanorma_cache.core.errors import ValidationError
from metanorma_cache.manifest.models import Manifest
from metanorma_cache.manifest.parser import get_manifest_dir, get_source_files

logger = logging.getLogger(__name__)

RECURSIVE_SUFFIX = "**"

# Degenerate patterns that would hash the whole checkout or nothing useful
INVALID_PATTERNS: frozenset[str] = frozenset({"**", ".", "", "...", "./.."})

_EXTRA_INPUT_SEPARATOR = re.compile(r"[\n,]")


def join_path(*parts: str) -> str:
    """Join path segments with "/" and normalize the result.

    Unlike posixpath.join, a later absolute segment does not discard the
    earlier ones: everything stays rooted at the first segment.
    """
    joined = "/".join(p for p in parts if p)
    return posixpath.normpath(joined) if joined else "."


def _has_parent_segment(path: str) -> bool:
    return ".." in path.split("/")


def _is_within(base_dir: str, pattern: str) -> bool:
    """True when ``pattern`` stays under ``base_dir`` after normalization."""
    base = posixpath.normpath(base_dir)
    if base == ".":
        return not _has_parent_segment(pattern)
    return pattern == base or pattern.startswith(base.rstrip("/") + "/")


def split_extra_input(extra_input: str) -> list[str]:
    """Split a comma- or newline-delimited list, dropping blank entries."""
    if not extra_input:
        return []
    entries = (e.strip() for e in _EXTRA_INPUT_SEPARATOR.split(extra_input))
    return [e for e in entries if e]


def resolve_patterns(
    manifest_path: str,
    manifest: Manifest | None,
    extra_input: str = "",
) -> set[str]:
    """Build the glob pattern set hashed into the site cache key.

    Args:
        manifest_path: Path of the metanorma.yml file.
        manifest: Parsed manifest (None for an empty manifest).
        extra_input: Extra directories/patterns relative to the manifest
            directory, comma- or newline-delimited.

    Returns:
        Set of patterns. Empty when nothing was declared.

    Raises:
        ValidationError: If an extra-input entry contains "..".
    """
    base_dir = get_manifest_dir(manifest_path)
    too_broad = join_path(base_dir, RECURSIVE_SUFFIX)

    patterns: set[str] = set()
    for source_file in get_source_files(manifest):
        source_dir = posixpath.dirname(source_file)
        # Checked before joining: normpath would fold the ".." away
        if _has_parent_segment(source_dir):
            logger.warning(
                "Skipping source file %s: paths outside the manifest directory "
                "are not allowed",
                source_file,
            )
            continue
        pattern = join_path(base_dir, source_dir, RECURSIVE_SUFFIX)
        if pattern != too_broad:
            patterns.add(pattern)

    for entry in split_extra_input(extra_input):
        if ".." in entry:
            raise ValidationError(
                f'Extra input path "{entry}" contains "..", which is not allowed.'
            )
        patterns.add(join_path(base_dir, entry))

    patterns -= INVALID_PATTERNS
    patterns = {p for p in patterns if _is_within(base_dir, p)}

    logger.debug("Resolved %d match patterns from %s", len(patterns), manifest_path)
    return patterns
