"""Restore Metanorma system asset caches and content-hashed site output caches in CI."""

from metanorma_cache.version import __version__

__all__ = ["__version__"]
