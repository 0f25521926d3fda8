# tests/unit/config/test_asset_groups.py — v1
"""Tests for config/asset_groups.py — the system cache group registry."""

from __future__ import annotations

import pytest

from metanorma_cache.config.asset_groups import SYSTEM_CACHE_GROUPS


class TestSystemCacheGroups:
    def test_group_order(self):
        assert list(SYSTEM_CACHE_GROUPS) == [
            "metanorma", "relaton", "fontist", "ietf-workgroup",
        ]

    def test_cache_keys(self):
        assert {name: g.key for name, g in SYSTEM_CACHE_GROUPS.items()} == {
            "metanorma": "metanorma-home",
            "relaton": "metanorma-relaton",
            "fontist": "metanorma-fontist",
            "ietf-workgroup": "metanorma-ietf-workgroup-cache",
        }

    def test_paths(self):
        assert SYSTEM_CACHE_GROUPS["fontist"].paths == (
            "~/.fontist", "/config/fonts", "/root/.fontist",
        )
        assert SYSTEM_CACHE_GROUPS["ietf-workgroup"].paths == (
            "~/.metanorma-ietf-workgroup-cache.json",
            "/root/.metanorma-ietf-workgroup-cache.json",
        )

    def test_registry_is_read_only(self):
        with pytest.raises(TypeError):
            SYSTEM_CACHE_GROUPS["extra"] = SYSTEM_CACHE_GROUPS["metanorma"]  # type: ignore[index]

    def test_groups_are_frozen(self):
        with pytest.raises(Exception):
            SYSTEM_CACHE_GROUPS["metanorma"].key = "changed"  # type: ignore[misc]
