# src/managers/system_cache_manager.py — v1
"""System cache manager for Metanorma-related assets.

Restores the Metanorma home, Relaton, Fontist and IETF workgroup caches.
Each group is handled on its own: a group with no existing paths is skipped
and a failing restore is logged without affecting the other groups.

Saving is left to the workflow's own cache step at the end of the job,
since this runs before the build has produced anything worth saving.
save_system_assets() covers deployments without such a step.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Mapping

from metanorma_cache.cache.base_cache_service import BaseCacheService
from metanorma_cache.config.asset_groups import SYSTEM_CACHE_GROUPS
from metanorma_cache.core.environment import Environment
from metanorma_cache.core.errors import ReserveCacheError
from metanorma_cache.core.models import AssetGroup, CacheOutcome
from metanorma_cache.logging.context import set_group_context
from metanorma_cache.logging.logger import log_group

logger = logging.getLogger(__name__)


def _path_exists(path: str) -> bool:
    """Existence check that treats permission errors as missing."""
    try:
        os.stat(path)
    except (OSError, ValueError):
        return False
    return True


def filter_existing_paths(
    paths: Iterable[str], environment: Environment | None = None
) -> list[str]:
    """Expand ``~`` in each path and keep those that exist."""
    env = environment or Environment()
    existing: list[str] = []
    for cache_path in paths:
        expanded = env.expand_home(cache_path)
        if _path_exists(expanded):
            existing.append(expanded)
        else:
            logger.debug("Path does not exist, skipping: %s", cache_path)
    return existing


async def restore_cache_group(
    group: AssetGroup,
    cache_service: BaseCacheService,
    environment: Environment | None = None,
) -> CacheOutcome | None:
    """Restore one asset group.

    Returns:
        The outcome, or None when the group was skipped or the restore failed.
    """
    with log_group(f"Restore {group.name} cache", logger):
        set_group_context(group.name)
        try:
            existing = filter_existing_paths(group.paths, environment)
            if not existing:
                logger.info("No existing %s directories found to restore into", group.name)
                return None

            logger.debug(
                "Attempting to restore %s cache to paths: %s",
                group.name, ", ".join(existing),
            )
            restored_key = await cache_service.restore(existing, group.key, [group.key])
        except Exception as e:
            logger.warning("%s cache restore failed: %s", group.name, e)
            return None
        finally:
            set_group_context(None)

        if restored_key:
            logger.info("%s cache restored from key: %s", group.name, restored_key)
        else:
            logger.info("%s cache not found (first run or cache expired)", group.name)
        return CacheOutcome(requested_key=group.key, restored_key=restored_key)


async def restore_system_assets(
    cache_service: BaseCacheService,
    environment: Environment | None = None,
    groups: Mapping[str, AssetGroup] = SYSTEM_CACHE_GROUPS,
) -> dict[str, CacheOutcome | None]:
    """Restore every system asset group, one after the other. Never raises."""
    outcomes: dict[str, CacheOutcome | None] = {}
    with log_group("Cache system assets", logger):
        for name, group in groups.items():
            outcomes[name] = await restore_cache_group(group, cache_service, environment)
        logger.info("System cache restore operations completed")
    return outcomes


async def save_system_assets(
    cache_service: BaseCacheService,
    environment: Environment | None = None,
    groups: Mapping[str, AssetGroup] = SYSTEM_CACHE_GROUPS,
) -> dict[str, bool]:
    """Save every asset group that has existing paths. Never raises.

    Returns:
        Group name -> whether an entry was written.
    """
    saved: dict[str, bool] = {}
    with log_group("Save system assets", logger):
        for name, group in groups.items():
            saved[name] = False
            existing = filter_existing_paths(group.paths, environment)
            if not existing:
                logger.info("No existing %s directories found to save", group.name)
                continue
            try:
                size = await cache_service.save(existing, group.key)
            except ReserveCacheError as e:
                logger.info("%s cache not saved: %s", group.name, e)
                continue
            except Exception as e:
                logger.warning("%s cache save failed: %s", group.name, e)
                continue
            saved[name] = True
            logger.info("%s cache saved with key: %s (%d bytes)", group.name, group.key, size)
    return saved
