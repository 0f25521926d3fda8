# src/config/asset_groups.py — v1
"""Declarative registry of system asset cache groups.

Each group is restored independently so one failing cache never blocks the
others. Adding a group only needs a new entry here.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from metanorma_cache.core.models import AssetGroup

SYSTEM_CACHE_GROUPS: Mapping[str, AssetGroup] = MappingProxyType({
    "metanorma": AssetGroup(
        name="metanorma",
        key="metanorma-home",
        paths=("~/.metanorma", "/root/.metanorma"),
    ),
    "relaton": AssetGroup(
        name="relaton",
        key="metanorma-relaton",
        paths=("~/.relaton", "/root/.relaton"),
    ),
    "fontist": AssetGroup(
        name="fontist",
        key="metanorma-fontist",
        paths=("~/.fontist", "/config/fonts", "/root/.fontist"),
    ),
    "ietf-workgroup": AssetGroup(
        name="ietf-workgroup",
        key="metanorma-ietf-workgroup-cache",
        paths=(
            "~/.metanorma-ietf-workgroup-cache.json",
            "/root/.metanorma-ietf-workgroup-cache.json",
        ),
    ),
})
