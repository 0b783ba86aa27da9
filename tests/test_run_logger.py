"""Structured run logger tests."""

from __future__ import annotations

import io

from deslopify.telemetry import RunLogger
from deslopify.telemetry.logger import _format_context


def test_stage_events_are_single_deterministic_lines() -> None:
    """Stage events render as one fixed-format line each."""

    sink = io.StringIO()
    logger = RunLogger(sink)

    logger.log_stage_start("layout")
    logger.log_stage_complete("layout")
    logger.log_stage_skipped("emoji")

    assert sink.getvalue().splitlines() == [
        "[phase] level=INFO stage=layout event=start",
        "[phase] level=INFO stage=layout event=complete",
        "[phase] level=INFO stage=emoji event=skipped",
    ]


def test_failure_event_carries_only_the_error_type() -> None:
    """Failure events name the error type only."""

    sink = io.StringIO()
    RunLogger(sink).log_stage_failure("punctuation", "ValueError")

    assert sink.getvalue() == (
        "[phase] level=ERROR stage=punctuation event=failure error_type=ValueError\n"
    )


def test_run_summary_context_is_key_sorted() -> None:
    """Summary context keys are sorted."""

    sink = io.StringIO()
    RunLogger(sink).log_run_summary(stages_run=7, protected_regions=1, delimiters_inserted=2)

    assert sink.getvalue().strip() == (
        "[phase] level=INFO stage=pipeline event=summary "
        "delimiters_inserted=2 protected_regions=1 stages_run=7"
    )


def test_context_values_are_sanitized() -> None:
    """Empty values become `none` and spaces become underscores."""

    assert _format_context({"b": "x y", "a": ""}) == " a=none b=x_y"
    assert _format_context({}) == ""
