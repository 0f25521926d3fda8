# tests/unit/managers/test_system_cache_manager.py — v1
"""Tests for managers/system_cache_manager.py — per-group restore isolation."""

from __future__ import annotations

import logging
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from metanorma_cache.core.errors import CacheServiceError, ReserveCacheError
from metanorma_cache.core.models import AssetGroup
from metanorma_cache.managers.system_cache_manager import (
    filter_existing_paths,
    restore_system_assets,
    save_system_assets,
)


@pytest.fixture
def groups(tmp_path: Path) -> dict[str, AssetGroup]:
    """Four groups shaped like the real registry, rooted in tmp_path."""
    root = tmp_path / "root"
    return {
        "metanorma": AssetGroup(
            name="metanorma", key="metanorma-home",
            paths=("~/.metanorma", f"{root}/.metanorma"),
        ),
        "relaton": AssetGroup(
            name="relaton", key="metanorma-relaton",
            paths=("~/.relaton", f"{root}/.relaton"),
        ),
        "fontist": AssetGroup(
            name="fontist", key="metanorma-fontist",
            paths=("~/.fontist", f"{root}/config/fonts", f"{root}/.fontist"),
        ),
        "ietf-workgroup": AssetGroup(
            name="ietf-workgroup", key="metanorma-ietf-workgroup-cache",
            paths=(
                "~/.metanorma-ietf-workgroup-cache.json",
                f"{root}/.metanorma-ietf-workgroup-cache.json",
            ),
        ),
    }


def _create_all(groups: dict[str, AssetGroup], home: Path) -> None:
    for group in groups.values():
        for path in group.paths:
            target = Path(path.replace("~", str(home), 1))
            if target.suffix == ".json":
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text("{}")
            else:
                target.mkdir(parents=True, exist_ok=True)


class TestFilterExistingPaths:
    def test_expands_and_filters(self, environment, home_dir, tmp_path):
        (home_dir / ".fontist").mkdir()
        result = filter_existing_paths(
            ["~/.fontist", str(tmp_path / "missing")], environment
        )
        assert result == [str(home_dir / ".fontist")]

    def test_keeps_order(self, environment, home_dir, tmp_path):
        (home_dir / ".relaton").mkdir()
        other = tmp_path / "other"
        other.mkdir()
        result = filter_existing_paths([str(other), "~/.relaton"], environment)
        assert result == [str(other), str(home_dir / ".relaton")]

    def test_permission_error_is_missing(self, environment, monkeypatch):
        from metanorma_cache.managers import system_cache_manager

        real_stat = system_cache_manager.os.stat

        def denied(path, *args, **kwargs):
            if path == "/root/.metanorma":
                raise PermissionError(13, "Permission denied", path)
            return real_stat(path, *args, **kwargs)

        monkeypatch.setattr(system_cache_manager.os, "stat", denied)
        assert filter_existing_paths(["/root/.metanorma"], environment) == []


class TestRestoreSystemAssets:
    @pytest.mark.asyncio
    async def test_all_groups_restored(self, groups, environment, home_dir, mock_cache_service):
        _create_all(groups, home_dir)
        outcomes = await restore_system_assets(mock_cache_service, environment, groups)

        assert mock_cache_service.restore.await_count == 4
        for call, group in zip(mock_cache_service.restore.await_args_list, groups.values()):
            paths, key, restore_keys = call.args
            assert key == group.key
            assert restore_keys == [group.key]
            assert paths == [p.replace("~", str(home_dir), 1) for p in group.paths]
        assert set(outcomes) == set(groups)
        assert all(o is not None and o.restored_key is None for o in outcomes.values())

    @pytest.mark.asyncio
    async def test_only_existing_paths_passed(self, groups, environment, home_dir, mock_cache_service):
        (home_dir / ".fontist").mkdir()
        await restore_system_assets(mock_cache_service, environment, groups)

        mock_cache_service.restore.assert_awaited_once_with(
            [str(home_dir / ".fontist")], "metanorma-fontist", ["metanorma-fontist"]
        )

    @pytest.mark.asyncio
    async def test_group_without_paths_skipped(self, groups, environment, home_dir, mock_cache_service, caplog):
        (home_dir / ".metanorma").mkdir()
        with caplog.at_level(logging.INFO):
            outcomes = await restore_system_assets(mock_cache_service, environment, groups)

        assert mock_cache_service.restore.await_count == 1
        assert outcomes["relaton"] is None
        assert "No existing relaton directories found to restore into" in caplog.text

    @pytest.mark.asyncio
    async def test_cache_hit_logged(self, groups, environment, home_dir, mock_cache_service, caplog):
        (home_dir / ".relaton").mkdir()
        mock_cache_service.restore = AsyncMock(return_value="metanorma-relaton")
        with caplog.at_level(logging.INFO):
            outcomes = await restore_system_assets(mock_cache_service, environment, groups)

        assert outcomes["relaton"].hit is True
        assert "relaton cache restored from key: metanorma-relaton" in caplog.text

    @pytest.mark.asyncio
    async def test_cache_miss_logged(self, groups, environment, home_dir, mock_cache_service, caplog):
        (home_dir / ".relaton").mkdir()
        with caplog.at_level(logging.INFO):
            await restore_system_assets(mock_cache_service, environment, groups)
        assert "relaton cache not found" in caplog.text

    @pytest.mark.asyncio
    async def test_restore_error_isolated(self, groups, environment, home_dir, caplog):
        _create_all(groups, home_dir)
        service = AsyncMock()
        service.restore = AsyncMock(side_effect=[
            CacheServiceError("service unavailable"),
            "metanorma-relaton",
            RuntimeError("timeout"),
            None,
        ])
        with caplog.at_level(logging.WARNING):
            outcomes = await restore_system_assets(service, environment, groups)

        assert service.restore.await_count == 4
        assert outcomes["metanorma"] is None
        assert outcomes["relaton"].hit is True
        assert outcomes["fontist"] is None
        assert outcomes["ietf-workgroup"] is not None
        assert "metanorma cache restore failed: service unavailable" in caplog.text
        assert "fontist cache restore failed: timeout" in caplog.text

    @pytest.mark.asyncio
    async def test_never_saves(self, groups, environment, home_dir, mock_cache_service):
        _create_all(groups, home_dir)
        await restore_system_assets(mock_cache_service, environment, groups)
        mock_cache_service.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_default_registry(self, environment, home_dir, mock_cache_service):
        (home_dir / ".metanorma").mkdir()
        outcomes = await restore_system_assets(mock_cache_service, environment)

        assert list(outcomes) == ["metanorma", "relaton", "fontist", "ietf-workgroup"]
        metanorma_call = next(
            c for c in mock_cache_service.restore.await_args_list
            if c.args[1] == "metanorma-home"
        )
        assert str(home_dir / ".metanorma") in metanorma_call.args[0]


class TestSaveSystemAssets:
    @pytest.mark.asyncio
    async def test_saves_existing_groups(self, groups, environment, home_dir, mock_cache_service):
        (home_dir / ".fontist").mkdir()
        saved = await save_system_assets(mock_cache_service, environment, groups)

        mock_cache_service.save.assert_awaited_once_with(
            [str(home_dir / ".fontist")], "metanorma-fontist"
        )
        assert saved == {
            "metanorma": False, "relaton": False, "fontist": True, "ietf-workgroup": False,
        }

    @pytest.mark.asyncio
    async def test_reserve_error_not_fatal(self, groups, environment, home_dir, caplog):
        _create_all(groups, home_dir)
        service = AsyncMock()
        service.save = AsyncMock(side_effect=[
            ReserveCacheError("exists"), CacheServiceError("down"), 10, 10,
        ])
        with caplog.at_level(logging.INFO):
            saved = await save_system_assets(service, environment, groups)

        assert saved == {
            "metanorma": False, "relaton": False, "fontist": True, "ietf-workgroup": True,
        }
        assert "relaton cache save failed: down" in caplog.text
