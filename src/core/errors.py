# src/core/errors.py — v1
"""Exception hierarchy shared by all modules.

Validation and parse errors are fatal to an invocation. Cache service
errors are caught at each restore/save call and downgraded to warnings.
"""

from __future__ import annotations


class MetanormaCacheError(Exception):
    """Base class for all errors raised by metanorma_cache."""


class ValidationError(MetanormaCacheError):
    """Raised when user-supplied input is malformed or unsafe."""


class ConfigurationError(MetanormaCacheError):
    """Raised when ambient configuration is internally inconsistent."""


class ParseError(MetanormaCacheError):
    """Raised when structured input cannot be parsed."""


class ManifestParseError(ParseError):
    """Raised when a metanorma.yml manifest is not valid YAML or has the wrong shape."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.path = path
        prefix = f"{path}: " if path else ""
        super().__init__(f"{prefix}{message}")


class HashComputationError(MetanormaCacheError):
    """Raised in strict mode when a matched input file cannot be read."""


class CacheServiceError(MetanormaCacheError):
    """Raised by a cache backend when a restore or save cannot be completed."""


class ReserveCacheError(CacheServiceError):
    """Raised when saving onto a key that already holds an entry.

    Another job may be creating the same cache; entries are immutable.
    """
