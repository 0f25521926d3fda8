# src/action/outputs.py — v1
"""Workflow step outputs.

The runner names a file in GITHUB_OUTPUT; each output is appended to it as a
``name=value`` line, or as a heredoc block when the value spans lines.
"""

from __future__ import annotations

import logging
import uuid
from pathlib import Path

from metanorma_cache.core.environment import Environment

logger = logging.getLogger(__name__)

GITHUB_OUTPUT_VAR = "GITHUB_OUTPUT"


def format_output(name: str, value: str) -> str:
    """Render one output entry in the runner's file-command syntax."""
    if "\n" not in value and "\r" not in value:
        return f"{name}={value}\n"
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    return f"{name}<<{delimiter}\n{value}\n{delimiter}\n"


def set_output(name: str, value: object, environment: Environment | None = None) -> None:
    """Publish a step output.

    Booleans are written as "true"/"false". Without GITHUB_OUTPUT the value
    is only logged, which is what happens outside a workflow run.
    """
    env = environment or Environment()
    text = str(value).lower() if isinstance(value, bool) else str(value)

    output_file = env.get(GITHUB_OUTPUT_VAR)
    if not output_file:
        logger.info("Output %s=%s", name, text)
        return

    with Path(output_file).open("a", encoding="utf-8") as f:
        f.write(format_output(name, text))
    logger.debug("Set output %s", name)
