# src/main.py — v1
"""CLI entry point: restore and save commands.

Usage:
    metanorma-cache [restore]
    metanorma-cache save

Action inputs are read from the environment (INPUT_CACHE-SITE-FOR-MANIFEST,
INPUT_EXTRA-INPUT, INPUT_CACHE-SITE-PATH) and may be overridden by flags.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import TYPE_CHECKING

from metanorma_cache.core.errors import ValidationError
from metanorma_cache.version import __version__

if TYPE_CHECKING:
    from metanorma_cache.config.settings import Settings

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    if not getattr(args, "func", None):
        args.func = _cmd_restore

    try:
        return asyncio.run(args.func(args))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except ValidationError as exc:
        logger.error("Input validation failed: %s", exc)
        return 1
    except Exception as exc:
        logger.error("%s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="metanorma-cache",
        description=f"metanorma-cache v{__version__} - Metanorma CI cache helper",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--manifest", dest="cache_site_for_manifest", default=None,
        help="metanorma.yml to key the site cache on (default: system assets only)",
    )
    parser.add_argument(
        "--extra-input", dest="extra_input", default=None,
        help="Comma-separated extra directories relative to the manifest",
    )
    parser.add_argument(
        "--site-path", dest="cache_site_path", default=None,
        help="Site output directory (default: _site)",
    )

    subparsers = parser.add_subparsers(dest="command")

    p_restore = subparsers.add_parser(
        "restore", help="Restore system asset caches and the site cache (default)",
    )
    p_restore.set_defaults(func=_cmd_restore)

    p_save = subparsers.add_parser(
        "save", help="Save caches (requires CACHE_SAVE_ENABLED=true)",
    )
    p_save.set_defaults(func=_cmd_save)

    return parser


def _load(args: argparse.Namespace) -> Settings:
    """Load settings with CLI overrides, then configure logging from them."""
    from metanorma_cache.config.settings import load_settings
    from metanorma_cache.logging.logger import setup_logging

    overrides = {
        name: getattr(args, name)
        for name in ("cache_site_for_manifest", "extra_input", "cache_site_path")
        if getattr(args, name, None) is not None
    }
    # Logging must work even when settings validation fails
    setup_logging(level="DEBUG" if args.verbose else "INFO")
    settings = load_settings(**overrides)
    setup_logging(
        level="DEBUG" if args.verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )
    return settings


async def _cmd_restore(args: argparse.Namespace) -> int:
    """Restore system assets, then the site cache when a manifest is given."""
    from metanorma_cache.cache.cache_factory import create_cache_service
    from metanorma_cache.managers.site_cache_manager import cache_site_output
    from metanorma_cache.managers.system_cache_manager import restore_system_assets

    settings = _load(args)
    cache_service = create_cache_service(settings)

    try:
        await restore_system_assets(cache_service)

        if settings.site_cache_enabled:
            await cache_site_output(settings, cache_service)
        else:
            logger.info("No manifest specified, skipping site cache")
    finally:
        cache_service.close()
    return 0


async def _cmd_save(args: argparse.Namespace) -> int:
    """Save system assets and the site output (self-managed cache mode)."""
    from metanorma_cache.cache.cache_factory import create_cache_service
    from metanorma_cache.managers.site_cache_manager import save_site_output
    from metanorma_cache.managers.system_cache_manager import save_system_assets

    settings = _load(args)
    if not settings.cache_save_enabled:
        logger.info("Cache saving is delegated to the workflow, nothing to do")
        return 0

    cache_service = create_cache_service(settings)
    try:
        await save_system_assets(cache_service)

        if settings.site_cache_enabled:
            await save_site_output(settings, cache_service)
    finally:
        cache_service.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
