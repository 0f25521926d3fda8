# src/manifest/parser.py — v1
"""metanorma.yml manifest parser.

Thin wrapper over PyYAML: loads the document, validates its shape and exposes
the declared source files and the manifest directory.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError as PydanticValidationError

from metanorma_cache.core.errors import ManifestParseError
from metanorma_cache.manifest.models import Manifest

logger = logging.getLogger(__name__)

_BOM = "\ufeff"


def parse_manifest_content(content: str, path: str | None = None) -> Manifest | None:
    """Parse manifest YAML text.

    Args:
        content: YAML document, optionally starting with a UTF-8 BOM.
        path: Source path, only used in error messages.

    Returns:
        Parsed Manifest, or None for empty or comment-only content.

    Raises:
        ManifestParseError: On invalid YAML or a document of the wrong shape.
    """
    if content.startswith(_BOM):
        content = content[len(_BOM):]

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ManifestParseError(f"invalid YAML: {e}", path=path) from e

    if data is None:
        return None
    if not isinstance(data, dict):
        raise ManifestParseError(
            f"expected a mapping at top level, got {type(data).__name__}", path=path
        )

    try:
        return Manifest.model_validate(data)
    except PydanticValidationError as e:
        raise ManifestParseError(f"unexpected manifest structure: {e}", path=path) from e


def parse_manifest(manifest_path: str | Path) -> Manifest | None:
    """Read and parse a manifest file."""
    content = Path(manifest_path).read_text(encoding="utf-8")
    return parse_manifest_content(content, path=str(manifest_path))


def get_source_files(manifest: Manifest | None) -> list[str]:
    """Return ``metanorma.source.files``, or [] if any level is missing."""
    if manifest is None or manifest.metanorma is None:
        return []
    source = manifest.metanorma.source
    if source is None or source.files is None:
        return []
    return list(source.files)


def get_manifest_dir(manifest_path: str | Path) -> str:
    """Return the directory holding the manifest ("." for a bare file name)."""
    return os.path.dirname(str(manifest_path)) or "."
