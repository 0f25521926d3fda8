# src/core/environment.py — v1
"""Read-only access to process environment variables.

Coordinators receive an Environment instead of reading os.environ so tests
can supply their own variables without touching the real process state.
"""

from __future__ import annotations

import os
from collections.abc import Mapping


class Environment:
    """Environment variable accessor backed by a mapping (os.environ by default)."""

    def __init__(self, variables: Mapping[str, str] | None = None) -> None:
        self._variables = os.environ if variables is None else variables

    def get(self, name: str) -> str | None:
        value = self._variables.get(name)
        return value or None

    def home_directory(self) -> str:
        """Return HOME, then USERPROFILE, else an empty string."""
        return self.get("HOME") or self.get("USERPROFILE") or ""

    def expand_home(self, path: str) -> str:
        """Replace a leading ``~`` with the home directory.

        An unset home expands to "", turning ``~/.fontist`` into ``/.fontist``.
        """
        if path.startswith("~"):
            return self.home_directory() + path[1:]
        return path
