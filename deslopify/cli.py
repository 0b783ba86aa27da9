"""Command-line interface for Deslopify.

Responsibilities:
- Expose user-facing commands for text normalization.
- Merge YAML config values and explicit CLI flags into `DeslopifyConfig`.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Annotated

import typer

from .cli_rendering import echo_stage_list, exit_with_command_error
from .config import (
    HEADING_STYLE_CHOICES,
    PARAGRAPH_SPACING_CHOICES,
    STAGE_ORDER,
    ConfigLoader,
    DeslopifyConfig,
)
from .errors import PipelineStageError
from .parsing import parse_choice
from .pipeline import Deslopifier
from .telemetry.logger import RunLogger

app = typer.Typer(
    name="deslopify",
    no_args_is_help=True,
    help="Deslopify CLI: normalize noisy generated text.",
)


def _load_yaml_config(config_path: Path | None) -> DeslopifyConfig:
    """Load a YAML config file when requested and map failures to stage errors."""

    if config_path is None:
        return DeslopifyConfig()

    try:
        return ConfigLoader.from_yaml(config_path)
    except FileNotFoundError as exc:
        raise PipelineStageError(
            stage="config",
            detail=f"Config file not found: `{config_path}`.",
            hint="Provide an existing path via `--config <path.yaml>`.",
        ) from exc
    except ValueError as exc:
        raise PipelineStageError(
            stage="config",
            detail=f"Invalid config file `{config_path}`: {exc}",
            hint="Fix config schema/values and rerun.",
        ) from exc
    except Exception as exc:
        raise PipelineStageError(
            stage="config",
            detail=f"Failed to load config file `{config_path}`: {exc}",
            hint="Verify YAML syntax and file permissions.",
        ) from exc


def _cli_choice(value: str | None, option_name: str, choices: tuple[str, ...]) -> str | None:
    """Validate an enumerated CLI option, mapping bad values to a config error."""

    if value is None:
        return None
    try:
        return parse_choice(value, option_name, choices)
    except ValueError as exc:
        raise PipelineStageError(
            stage="config",
            detail=f"Invalid option value: {exc}",
            hint=f"Use `deslopify clean --help` to see accepted `{option_name}` values.",
        ) from exc


def _resolve_command_config(
    config_file: Path | None,
    skipped: dict[str, bool],
    fix_unbalanced: bool | None,
    remove_all_emoji: bool,
    remove_overused_emoji: bool,
    paragraph_spacing: str | None,
    heading_style: str | None,
    preserve_code: bool | None,
) -> DeslopifyConfig:
    """Resolve effective config from YAML defaults and explicit CLI overrides."""

    config = _load_yaml_config(config_file)

    for name, skip in skipped.items():
        if skip:
            setattr(config, f"skip_{name}", True)
    if fix_unbalanced is not None:
        config.fix_unbalanced_delimiters = fix_unbalanced

    layout_changes: dict[str, object] = {}
    resolved_spacing = _cli_choice(paragraph_spacing, "--paragraph-spacing", PARAGRAPH_SPACING_CHOICES)
    if resolved_spacing is not None:
        layout_changes["paragraph_spacing"] = resolved_spacing
    resolved_heading = _cli_choice(heading_style, "--heading-style", HEADING_STYLE_CHOICES)
    if resolved_heading is not None:
        layout_changes["heading_style"] = resolved_heading
    if preserve_code is not None:
        layout_changes["preserve_code_blocks"] = preserve_code
    config.layout = replace(config.layout, **layout_changes)

    if remove_all_emoji:
        config.emoji = replace(config.emoji, remove_all=True)
    if remove_overused_emoji:
        config.emoji = replace(config.emoji, remove_overused=True)

    config.validate()
    return config


def _read_input_text(input_path: Path | None) -> str:
    """Read text from a file, or from stdin when no path is given."""

    if input_path is None:
        return typer.get_text_stream("stdin").read()
    try:
        return input_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise PipelineStageError(
            stage="input",
            detail=f"Input file not found: `{input_path}`.",
            hint="Pass an existing text file or pipe text through stdin.",
        ) from exc
    except UnicodeDecodeError as exc:
        raise PipelineStageError(
            stage="input",
            detail=f"Input file `{input_path}` is not valid UTF-8.",
            hint="Convert the file to UTF-8 and rerun.",
        ) from exc


@app.command("clean")
def clean_command(
    input_path: Annotated[
        Path | None,
        typer.Argument(help="Text file to normalize. Reads stdin when omitted."),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write normalized text here instead of stdout."),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to YAML config file with pipeline defaults."),
    ] = None,
    skip_chars: Annotated[
        bool, typer.Option("--skip-chars", help="Skip character replacement.")
    ] = False,
    skip_phrases: Annotated[
        bool, typer.Option("--skip-phrases", help="Skip phrase removal.")
    ] = False,
    skip_datetime: Annotated[
        bool, typer.Option("--skip-datetime", help="Skip date/time formatting.")
    ] = False,
    skip_abbreviations: Annotated[
        bool, typer.Option("--skip-abbreviations", help="Skip abbreviation casing.")
    ] = False,
    skip_punctuation: Annotated[
        bool, typer.Option("--skip-punctuation", help="Skip punctuation normalization.")
    ] = False,
    skip_layout: Annotated[
        bool, typer.Option("--skip-layout", help="Skip layout standardization.")
    ] = False,
    skip_emoji: Annotated[
        bool, typer.Option("--skip-emoji", help="Skip emoji handling.")
    ] = False,
    fix_unbalanced: Annotated[
        bool | None,
        typer.Option(
            "--fix-unbalanced/--no-fix-unbalanced",
            help="Close unmatched brackets and quotes (overrides config file value).",
        ),
    ] = None,
    remove_all_emoji: Annotated[
        bool, typer.Option("--remove-all-emoji", help="Remove every emoji.")
    ] = False,
    remove_overused_emoji: Annotated[
        bool,
        typer.Option(
            "--remove-overused-emoji",
            help="Remove commonly overused emoji and emoji clusters.",
        ),
    ] = False,
    paragraph_spacing: Annotated[
        str | None,
        typer.Option("--paragraph-spacing", help="Paragraph spacing: `single` or `double`."),
    ] = None,
    heading_style: Annotated[
        str | None,
        typer.Option("--heading-style", help="Heading style: `atx` or `setext`."),
    ] = None,
    preserve_code: Annotated[
        bool | None,
        typer.Option(
            "--preserve-code/--no-preserve-code",
            help="Keep code blocks byte-identical (overrides config file value).",
        ),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", help="Log stage events to stderr.")
    ] = False,
) -> None:
    """Normalize text from a file or stdin."""

    try:
        config = _resolve_command_config(
            config_file,
            skipped={
                "characters": skip_chars,
                "phrases": skip_phrases,
                "datetime": skip_datetime,
                "abbreviations": skip_abbreviations,
                "punctuation": skip_punctuation,
                "layout": skip_layout,
                "emoji": skip_emoji,
            },
            fix_unbalanced=fix_unbalanced,
            remove_all_emoji=remove_all_emoji,
            remove_overused_emoji=remove_overused_emoji,
            paragraph_spacing=paragraph_spacing,
            heading_style=heading_style,
            preserve_code=preserve_code,
        )
        text = _read_input_text(input_path)
        run_logger = RunLogger() if verbose else None
        result = Deslopifier(config, run_logger=run_logger).process(text)
        if output is not None:
            output.write_text(result + "\n", encoding="utf-8")
    except Exception as exc:
        exit_with_command_error("clean", exc)

    if output is None:
        typer.echo(result)


@app.command("stages")
def stages_command(
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Mark stages skipped by this YAML config file."),
    ] = None,
) -> None:
    """List pipeline stages in execution order."""

    try:
        config = _load_yaml_config(config_file)
    except Exception as exc:
        exit_with_command_error("stages", exc)

    active = config.active_stages()
    echo_stage_list(STAGE_ORDER, skipped=[name for name in STAGE_ORDER if name not in active])


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
