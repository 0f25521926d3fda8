# src/core/models.py — v1
"""Shared Pydantic domain models used across modules."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class AssetGroup(BaseModel):
    """One independently restored category of system-level cached assets."""

    model_config = ConfigDict(frozen=True)

    name: str
    key: str
    paths: tuple[str, ...]


class CacheOutcome(BaseModel):
    """Result of a single restore request.

    ``hit`` is only true for an exact match on the requested key; a match
    through a fallback (prefix) key is a partial restore.
    """

    model_config = ConfigDict(frozen=True)

    requested_key: str
    restored_key: str | None = None

    @property
    def hit(self) -> bool:
        return self.restored_key is not None and self.restored_key == self.requested_key

    @property
    def partial(self) -> bool:
        return self.restored_key is not None and not self.hit
