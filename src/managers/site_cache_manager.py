# src/managers/site_cache_manager.py — v1
"""Site cache manager for the rendered output directory.

The cache key is SITE_CACHE_KEY_PREFIX plus a SHA-256 digest of every file
in the directories that hold the manifest's source documents, plus any
extra-input patterns. The bare prefix is the fallback key, so a changed
input still restores the most recent site as a starting point.
"""

from __future__ import annotations

import logging

from metanorma_cache.action.outputs import set_output
from metanorma_cache.cache.base_cache_service import BaseCacheService
from metanorma_cache.config.settings import Settings
from metanorma_cache.core.constants import (
    OUTPUT_CACHE_SITE_CACHE_HIT,
    OUTPUT_HASH,
    SITE_CACHE_KEY_PREFIX,
)
from metanorma_cache.core.environment import Environment
from metanorma_cache.core.errors import ReserveCacheError
from metanorma_cache.core.models import CacheOutcome
from metanorma_cache.hashing.file_hasher import compute_hash
from metanorma_cache.hashing.patterns import resolve_patterns
from metanorma_cache.logging.logger import log_group
from metanorma_cache.manifest.parser import get_manifest_dir, get_source_files, parse_manifest

logger = logging.getLogger(__name__)


def build_site_cache_key(input_hash: str) -> str:
    return f"{SITE_CACHE_KEY_PREFIX}{input_hash}"


async def compute_site_hash(settings: Settings) -> str | None:
    """Parse the manifest, resolve its match patterns and hash the matched files.

    Raises:
        ManifestParseError: If the manifest cannot be parsed.
        ValidationError: If extra-input escapes the checkout.
        HashComputationError: In strict hashing mode, on an unreadable file.
    """
    manifest_path = settings.cache_site_for_manifest
    manifest = parse_manifest(manifest_path)

    logger.info("Manifest path: %s", manifest_path)
    logger.info("Source files: %s", ", ".join(get_source_files(manifest)))
    logger.info("Manifest directory: %s", get_manifest_dir(manifest_path))

    patterns = resolve_patterns(manifest_path, manifest, settings.extra_input)
    return await compute_hash(patterns, strict=settings.hash_strict)


async def cache_site_output(
    settings: Settings,
    cache_service: BaseCacheService,
    environment: Environment | None = None,
) -> bool:
    """Restore the site output directory keyed on the input hash.

    Publishes the ``hash`` and ``cache-site-cache-hit`` outputs.

    Returns:
        True only when the exact key was restored.

    Raises:
        ManifestParseError, ValidationError, HashComputationError: After
            logging them; these are actionable and abort the run.
    """
    with log_group("Cache site output", logger):
        try:
            input_hash = await compute_site_hash(settings)
        except Exception as e:
            logger.error("Site cache failed: %s", e)
            raise

        if not input_hash:
            logger.warning("No hash generated, skipping site cache")
            return False

        set_output(OUTPUT_HASH, input_hash, environment)

        cache_key = build_site_cache_key(input_hash)
        try:
            restored_key = await cache_service.restore(
                [settings.cache_site_path], cache_key, [SITE_CACHE_KEY_PREFIX]
            )
        except Exception as e:
            logger.warning("Site cache restore failed: %s", e)
            restored_key = None

        outcome = CacheOutcome(requested_key=cache_key, restored_key=restored_key)
        if outcome.restored_key:
            logger.info("Site cache restored from key: %s", outcome.restored_key)
        else:
            logger.info("Site cache not found")

        set_output(OUTPUT_CACHE_SITE_CACHE_HIT, outcome.hit, environment)
        return outcome.hit


async def save_site_output(
    settings: Settings,
    cache_service: BaseCacheService,
) -> bool:
    """Save the site output directory under its input-hash key.

    Returns:
        True if an entry was written.
    """
    with log_group("Save site output", logger):
        input_hash = await compute_site_hash(settings)
        if not input_hash:
            logger.warning("No hash generated, skipping site cache save")
            return False

        cache_key = build_site_cache_key(input_hash)
        try:
            size = await cache_service.save([settings.cache_site_path], cache_key)
        except ReserveCacheError as e:
            logger.info("Site cache not saved: %s", e)
            return False
        except Exception as e:
            logger.warning("Site cache save failed: %s", e)
            return False

        logger.info("Site cache saved with key: %s (%d bytes)", cache_key, size)
        return True
