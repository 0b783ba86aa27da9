"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics
and the stage listing.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import NoReturn

import typer

from .errors import PipelineStageError


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, PipelineStageError):
        typer.secho(
            f"{command_name} failed at stage `{exc.stage}`: {exc.detail}",
            fg=typer.colors.RED,
            err=True,
        )
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def echo_stage_list(stage_names: Iterable[str], skipped: Iterable[str] = ()) -> None:
    """Print 1-based stage rows in pipeline order, marking skipped stages."""

    skipped_names = set(skipped)
    for index, name in enumerate(stage_names, start=1):
        suffix = " (skipped)" if name in skipped_names else ""
        typer.echo(f"{index}. {name}{suffix}")
