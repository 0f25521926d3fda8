# src/logging/logger.py — v1
"""Logger factory with GitHub workflow-command, JSON and text formatters."""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from metanorma_cache.logging.context import get_context, set_step_context

ROOT_LOGGER_NAME = "metanorma_cache"

# Level -> workflow command; INFO is printed as plain text.
_WORKFLOW_COMMANDS = {
    logging.DEBUG: "debug",
    logging.WARNING: "warning",
    logging.ERROR: "error",
    logging.CRITICAL: "error",
}


def _escape_command_data(message: str) -> str:
    """Escape a message so it stays one workflow command line."""
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class GithubFormatter(logging.Formatter):
    """Formatter emitting workflow commands understood by the Actions runner."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        command = getattr(record, "workflow_command", None)
        if command == "group":
            return f"::group::{_escape_command_data(message)}"
        if command == "endgroup":
            return "::endgroup::"

        if record.exc_info and record.exc_info[1] is not None:
            message = f"{message}\n{self.formatException(record.exc_info)}"

        ctx = get_context()
        if ctx.group:
            message = f"[{ctx.group}] {message}"

        level_command = _WORKFLOW_COMMANDS.get(record.levelno)
        if level_command is None:
            return message
        return f"::{level_command}::{_escape_command_data(message)}"


class JsonFormatter(logging.Formatter):
    """Structured JSON log formatter, one object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context_dict = get_context().as_dict()
        if context_dict:
            log_entry["context"] = context_dict

        command = getattr(record, "workflow_command", None)
        if command:
            log_entry["workflow_command"] = command

        if record.exc_info and record.exc_info[1] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable text formatter for local runs."""

    def format(self, record: logging.LogRecord) -> str:
        ctx = get_context()
        parts = [
            datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S"),
            f"[{record.levelname:8s}]",
            record.name,
        ]
        if ctx.group:
            parts.append(f"[{ctx.group}]")
        command = getattr(record, "workflow_command", None)
        if command:
            parts.append(f"({command})")
        parts.append(f"- {record.getMessage()}")
        return " ".join(parts)


@contextmanager
def log_group(title: str, logger: logging.Logger | None = None) -> Iterator[None]:
    """Fold the enclosed log lines into one collapsible group."""
    log = logger or logging.getLogger(ROOT_LOGGER_NAME)
    previous_step = get_context().step
    log.info(title, extra={"workflow_command": "group"})
    set_step_context(title)
    try:
        yield
    finally:
        set_step_context(previous_step)
        log.info(title, extra={"workflow_command": "endgroup"})


def setup_logging(
    level: str = "INFO",
    log_format: str = "github",
    log_file: str | Path | None = None,
    rotation: str = "10MB",
    retention: int = 5,
) -> None:
    """Configure the root metanorma_cache logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
        log_format: Output format ("github", "json" or "text").
        log_file: Path to log file (None = stdout only).
        rotation: Max file size before rotation (e.g. "10MB").
        retention: Number of rotated files to keep.
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Remove existing handlers to avoid duplicates on re-init
    root_logger.handlers.clear()

    formatter: logging.Formatter
    if log_format == "github":
        formatter = GithubFormatter()
    elif log_format == "json":
        formatter = JsonFormatter()
    else:
        formatter = TextFormatter()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        from metanorma_cache.logging.handlers import create_rotating_handler

        file_handler = create_rotating_handler(
            log_file, rotation=rotation, retention=retention
        )
        # Workflow commands mean nothing in a file
        file_handler.setFormatter(
            TextFormatter() if log_format == "github" else formatter
        )
        root_logger.addHandler(file_handler)
