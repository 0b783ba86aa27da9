"""Structured run logging utilities.

Responsibilities:
- Emit concise, deterministic phase-level pipeline logs through `loguru`.
- Keep log lines free of processed text; only stage names and counters appear.
"""

from __future__ import annotations

import sys
from typing import TextIO

from loguru import logger as _loguru_logger


def _sanitize_context_value(value: object) -> str:
    """Convert context values into stable, shell-safe tokens."""

    raw = str(value).strip()
    if not raw:
        return "none"
    return "".join(
        character if character.isalnum() or character in {"-", "_", ".", ":", "/"} else "_"
        for character in raw
    )


def _format_context(context: dict[str, object]) -> str:
    """Serialize context key/value pairs in deterministic key order."""

    if not context:
        return ""
    tokens = [
        f"{key}={_sanitize_context_value(context[key])}"
        for key in sorted(context.keys())
    ]
    return " " + " ".join(tokens)


class RunLogger:
    """Emit deterministic phase logs for pipeline activity."""

    def __init__(self, sink: TextIO | None = None) -> None:
        """Initialize logger sink and configure deterministic formatting."""

        self._sink = sink or sys.stderr
        _loguru_logger.remove()
        _loguru_logger.add(self._sink, format="{message}", level="INFO", colorize=False)

    def _emit(self, level: str, event: str, stage: str, **context: object) -> None:
        """Emit one structured runtime log line."""

        line = f"[phase] level={level} stage={stage} event={event}{_format_context(context)}"
        _loguru_logger.log(level, line)

    def log_stage_start(self, stage: str) -> None:
        """Emit a stage-start runtime event."""

        self._emit("INFO", "start", stage)

    def log_stage_complete(self, stage: str) -> None:
        """Emit a stage-complete runtime event."""

        self._emit("INFO", "complete", stage)

    def log_stage_skipped(self, stage: str) -> None:
        """Emit an event for a stage disabled by configuration."""

        self._emit("INFO", "skipped", stage)

    def log_stage_failure(self, stage: str, error_type: str) -> None:
        """Emit a stage-failure runtime event without text payload details."""

        self._emit("ERROR", "failure", stage, error_type=error_type)

    def log_run_summary(
        self, *, stages_run: int, protected_regions: int, delimiters_inserted: int
    ) -> None:
        """Emit the end-of-run counters."""

        self._emit(
            "INFO",
            "summary",
            "pipeline",
            delimiters_inserted=delimiters_inserted,
            protected_regions=protected_regions,
            stages_run=stages_run,
        )
