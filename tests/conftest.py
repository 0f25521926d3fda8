# tests/conftest.py — v1
"""Shared test fixtures for unit and integration tests.

Provides a sample Metanorma project on disk, a mocked cache service and an
isolated environment accessor. No network or real home directory is touched.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from metanorma_cache.core.environment import Environment
from metanorma_cache.logging.context import clear_context

SAMPLE_MANIFEST = """\
metanorma:
  source:
    files:
      - documents/index.adoc
      - documents/section1.adoc
  collection:
    name: sample
"""


# === FIXTURES: Sample project ===


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Metanorma project with a manifest, two documents and an image."""
    root = tmp_path / "project"
    docs = root / "documents"
    (docs / "images").mkdir(parents=True)
    (docs / "index.adoc").write_text("= Index\n\ninclude::section1.adoc[]\n")
    (docs / "section1.adoc").write_text("== Section 1\n\nBody.\n")
    (docs / "images" / "logo.svg").write_text("<svg/>")
    (root / "metanorma.yml").write_text(SAMPLE_MANIFEST)
    return root


@pytest.fixture
def manifest_path(project_dir: Path) -> Path:
    return project_dir / "metanorma.yml"


# === FIXTURES: Collaborators ===


@pytest.fixture
def mock_cache_service() -> AsyncMock:
    """Mock BaseCacheService that misses on every restore."""
    service = AsyncMock()
    service.restore = AsyncMock(return_value=None)
    service.save = AsyncMock(return_value=1024)
    return service


@pytest.fixture
def home_dir(tmp_path: Path) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    return home


@pytest.fixture
def environment(home_dir: Path, tmp_path: Path) -> Environment:
    """Environment with HOME pointing at a temp dir and a GITHUB_OUTPUT file."""
    return Environment({
        "HOME": str(home_dir),
        "GITHUB_OUTPUT": str(tmp_path / "github_output"),
    })


@pytest.fixture(autouse=True)
def _reset_log_context():
    clear_context()
    yield
    clear_context()
