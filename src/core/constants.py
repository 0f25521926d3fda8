# src/core/constants.py — v1
"""Fixed cache key prefixes and output names."""

from __future__ import annotations

SITE_CACHE_KEY_PREFIX = "metanorma-site-cache-"

DEFAULT_SITE_PATH = "_site"

# Output names published to the workflow
OUTPUT_CACHE_SITE_CACHE_HIT = "cache-site-cache-hit"
OUTPUT_HASH = "hash"

# Manifest file extensions accepted by input validation
MANIFEST_EXTENSIONS = (".yml", ".yaml")
