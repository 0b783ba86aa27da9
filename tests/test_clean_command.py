"""CLI tests for the `clean` and `stages` commands."""

from __future__ import annotations

from pathlib import Path

from pytest import MonkeyPatch
from typer.testing import CliRunner

from deslopify.cli import app
from deslopify.errors import PipelineStageError


def test_clean_reads_stdin_and_writes_stdout(cli_runner: CliRunner) -> None:
    """Without paths, `clean` filters stdin to stdout."""

    result = cli_runner.invoke(app, ["clean"], input="Wow!!! Really???")

    assert result.exit_code == 0, result.output
    assert result.output == "Wow! Really?\n"


def test_clean_reads_and_writes_files(cli_runner: CliRunner, tmp_path: Path) -> None:
    """Input and output paths replace stdin and stdout."""

    input_path = tmp_path / "in.md"
    output_path = tmp_path / "out.md"
    input_path.write_text("Certainly! Done\u2014finally!!!\n", encoding="utf-8")

    result = cli_runner.invoke(app, ["clean", str(input_path), "--output", str(output_path)])

    assert result.exit_code == 0, result.output
    assert output_path.read_text(encoding="utf-8") == "Done - finally!\n"
    assert result.output == ""


def test_clean_flags_toggle_stages(cli_runner: CliRunner) -> None:
    """Stage flags skip stages, disable balancing, and remove emoji."""

    skipped = cli_runner.invoke(app, ["clean", "--skip-punctuation"], input="Wow!!!")
    unbalanced = cli_runner.invoke(app, ["clean", "--no-fix-unbalanced"], input="(open")
    emoji = cli_runner.invoke(app, ["clean", "--remove-all-emoji"], input="Hi \U0001F44B there")

    assert skipped.output == "Wow!!!\n"
    assert unbalanced.output == "(open\n"
    assert emoji.output == "Hi  there\n"


def test_clean_layout_options(cli_runner: CliRunner) -> None:
    """Layout options reach the layout stage."""

    setext = cli_runner.invoke(app, ["clean", "--heading-style", "setext"], input="# Title")
    double = cli_runner.invoke(app, ["clean", "--paragraph-spacing", "double"], input="a\n\nb")

    assert setext.output == "Title\n=====\n"
    assert double.output == "a\n\n\nb\n"


def test_clean_rejects_invalid_choice(cli_runner: CliRunner) -> None:
    """An unknown option value fails at the config stage with a hint."""

    result = cli_runner.invoke(app, ["clean", "--paragraph-spacing", "triple"], input="x")

    assert result.exit_code == 1
    assert "clean failed at stage `config`" in result.output
    assert "Hint:" in result.output


def test_cli_flags_override_yaml_values(cli_runner: CliRunner, tmp_path: Path) -> None:
    """An explicit flag wins over the YAML value it names."""

    config_path = tmp_path / "deslopify.yaml"
    config_path.write_text("fix_unbalanced_delimiters: false\n", encoding="utf-8")

    from_yaml = cli_runner.invoke(app, ["clean", "--config", str(config_path)], input="(open")
    overridden = cli_runner.invoke(
        app,
        ["clean", "--config", str(config_path), "--fix-unbalanced"],
        input="(open",
    )

    assert from_yaml.output == "(open\n"
    assert overridden.output == "(open)\n"


def test_missing_config_file_is_reported(cli_runner: CliRunner, tmp_path: Path) -> None:
    """A missing config path is a command error."""

    missing = tmp_path / "missing.yaml"
    result = cli_runner.invoke(app, ["clean", "--config", str(missing)], input="x")

    assert result.exit_code == 1
    assert "Config file not found" in result.output


def test_missing_input_file_is_reported(cli_runner: CliRunner, tmp_path: Path) -> None:
    """A missing input path fails at the input stage."""

    result = cli_runner.invoke(app, ["clean", str(tmp_path / "nope.txt")])

    assert result.exit_code == 1
    assert "clean failed at stage `input`" in result.output


def test_pipeline_failure_maps_to_exit_code(
    cli_runner: CliRunner, monkeypatch: MonkeyPatch
) -> None:
    """Pipeline stage errors render with their hint and exit code 1."""

    def _fail(self: object, text: str, config: object = None) -> str:
        raise PipelineStageError(stage="layout", detail="boom", hint="check rules")

    monkeypatch.setattr("deslopify.cli.Deslopifier.process", _fail)

    result = cli_runner.invoke(app, ["clean"], input="x")

    assert result.exit_code == 1
    assert "clean failed at stage `layout`: boom" in result.output
    assert "Hint: check rules" in result.output


def test_verbose_logs_stage_events(cli_runner: CliRunner) -> None:
    """`--verbose` writes phase events next to the output."""

    result = cli_runner.invoke(app, ["clean", "--verbose"], input="text")

    assert result.exit_code == 0, result.output
    assert "[phase] level=INFO stage=characters event=start" in result.output
    assert "event=summary" in result.output


def test_stages_command_lists_fixed_order(cli_runner: CliRunner, tmp_path: Path) -> None:
    """`stages` prints the fixed order and marks configured skips."""

    config_path = tmp_path / "deslopify.yaml"
    config_path.write_text("skip_emoji: true\n", encoding="utf-8")

    plain = cli_runner.invoke(app, ["stages"])
    configured = cli_runner.invoke(app, ["stages", "--config", str(config_path)])

    assert plain.exit_code == 0, plain.output
    assert plain.output.splitlines() == [
        "1. characters",
        "2. phrases",
        "3. datetime",
        "4. abbreviations",
        "5. punctuation",
        "6. layout",
        "7. emoji",
    ]
    assert configured.output.splitlines()[-1] == "7. emoji (skipped)"
