# src/logging/context.py — v1
"""Contextual logging support: attach the current cache group and step to log records."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

# Set while a cache group or the site cache is being processed.
_group: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "group", default=None
)
_step: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "step", default=None
)


@dataclass(frozen=True)
class LogContext:
    """Immutable snapshot of current logging context."""

    group: str | None = None
    step: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(group=_group.get(), step=_step.get())


def set_group_context(group: str | None, step: str | None = None) -> None:
    """Set the cache group (and optionally step) being processed."""
    _group.set(group)
    _step.set(step)


def set_step_context(step: str | None) -> None:
    _step.set(step)


def clear_context() -> None:
    """Reset all context variables."""
    _group.set(None)
    _step.set(None)
