# src/config/settings.py — v1
"""Typed configuration loaded from action inputs and .env via pydantic-settings.

Action inputs arrive as ``INPUT_<NAME>`` environment variables (upper-cased,
hyphens kept), which is how the workflow runner passes ``with:`` values.
Plain snake_case names (``CACHE_SITE_FOR_MANIFEST``) are accepted as well.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from metanorma_cache.core.constants import DEFAULT_SITE_PATH, MANIFEST_EXTENSIONS
from metanorma_cache.core.errors import ConfigurationError, ValidationError


def _input(name: str) -> AliasChoices:
    """Accept both the field name and the action input variable."""
    return AliasChoices(name.replace("-", "_"), f"input_{name}")


class Settings(BaseSettings):
    """Validated settings for one invocation. Never mutated after load."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # === Action inputs ===
    cache_site_for_manifest: str = Field(
        default="", validation_alias=_input("cache-site-for-manifest")
    )
    extra_input: str = Field(default="", validation_alias=_input("extra-input"))
    cache_site_path: str = Field(
        default=DEFAULT_SITE_PATH, validation_alias=_input("cache-site-path")
    )

    # === Cache service ===
    cache_backend: Literal["local", "redis"] = "local"
    cache_root: Path = Path("~/.cache/metanorma-cache")
    cache_redis_url: str = ""
    cache_save_enabled: bool = False

    # === Hashing ===
    hash_strict: bool = False

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["github", "json", "text"] = "github"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 5

    # --- Validators ---

    @field_validator("cache_site_for_manifest", "extra_input", mode="before")
    @classmethod
    def strip_input(cls, v: object) -> object:
        """Inputs are trimmed before any other check."""
        return v.strip() if isinstance(v, str) else v

    @field_validator("cache_site_path", mode="before")
    @classmethod
    def default_site_path(cls, v: object) -> object:
        """A blank cache-site-path falls back to _site."""
        if v is None:
            return DEFAULT_SITE_PATH
        if isinstance(v, str):
            return v.strip() or DEFAULT_SITE_PATH
        return v

    @field_validator("cache_site_for_manifest")
    @classmethod
    def validate_manifest_path(cls, v: str) -> str:
        """The manifest must be an existing .yml/.yaml file, given without ~."""
        if not v:
            return v
        if v.startswith("~"):
            raise ValidationError(
                f'Path "{v}" starts with ~. Shell expansion is not supported '
                'for action inputs. Use "$HOME" instead.'
            )
        if not os.path.exists(v):
            raise ValidationError(f'Manifest file "{v}" does not exist.')
        if os.path.isdir(v):
            raise ValidationError(f'Path "{v}" is a directory, not a file.')
        if os.path.splitext(v)[1].lower() not in MANIFEST_EXTENSIONS:
            raise ValidationError(
                f'Manifest file "{v}" must have .yml or .yaml extension.'
            )
        return v

    @field_validator("cache_site_path")
    @classmethod
    def validate_site_path(cls, v: str) -> str:
        if v.startswith("~"):
            raise ValidationError(
                f'Path "{v}" starts with ~. Shell expansion is not supported '
                'for action inputs. Use "$HOME" instead.'
            )
        if ".." in v:
            raise ValidationError(f'Path "{v}" contains "..", which is not allowed.')
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Cross-field consistency of the ambient settings."""
        if self.cache_backend == "redis" and not self.cache_redis_url:
            raise ConfigurationError(
                "CACHE_REDIS_URL must be set when CACHE_BACKEND=redis"
            )
        return self

    # --- Helpers ---

    @property
    def site_cache_enabled(self) -> bool:
        """True when a manifest was given, i.e. not system-assets-only mode."""
        return bool(self.cache_site_for_manifest)


def load_settings(**overrides: object) -> Settings:
    """Load settings from the environment and .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing).

    Returns:
        Validated Settings instance.

    Raises:
        ValidationError: If an action input is malformed or unsafe.
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
