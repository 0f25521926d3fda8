# src/manifest/models.py — v1
"""metanorma.yml manifest shape.

Only ``metanorma.source.files`` matters for cache keys; every other key is
accepted and ignored.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ManifestSource(BaseModel):
    """``metanorma.source`` section."""

    model_config = ConfigDict(extra="ignore")

    files: list[str] | None = None


class MetanormaSection(BaseModel):
    """``metanorma`` top-level section."""

    model_config = ConfigDict(extra="ignore")

    source: ManifestSource | None = None


class Manifest(BaseModel):
    """Parsed manifest document."""

    model_config = ConfigDict(extra="ignore")

    metanorma: MetanormaSection | None = None
