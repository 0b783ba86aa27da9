"""Configuration model and YAML loader tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from deslopify.config import ConfigLoader, DeslopifyConfig, LayoutOptions
from deslopify.parsing import parse_choice, parse_permissive_boolean, parse_required_boolean


def test_skip_flags_remove_stages_from_active_order() -> None:
    """Skipped stages drop out while the rest keep their order."""

    config = DeslopifyConfig(skip_phrases=True, skip_emoji=True)
    assert config.active_stages() == (
        "characters",
        "datetime",
        "abbreviations",
        "punctuation",
        "layout",
    )


def test_validate_rejects_unknown_layout_choices() -> None:
    """Validation names the layout option holding an unknown value."""

    with pytest.raises(ValueError, match="paragraph_spacing"):
        DeslopifyConfig(layout=LayoutOptions(paragraph_spacing="triple")).validate()
    with pytest.raises(ValueError, match="heading_style"):
        DeslopifyConfig(layout=LayoutOptions(heading_style="fancy")).validate()


def test_validate_rejects_non_boolean_flags() -> None:
    """Skip flags must hold real booleans."""

    with pytest.raises(ValueError, match="skip_layout"):
        DeslopifyConfig(skip_layout="yes").validate()  # type: ignore[arg-type]


def test_from_yaml_reads_nested_sections(tmp_path: Path) -> None:
    """YAML top-level flags and nested sections map onto the config."""

    config_path = tmp_path / "deslopify.yaml"
    config_path.write_text(
        "skip_emoji: true\n"
        'fix_unbalanced_delimiters: "no"\n'
        "layout:\n"
        "  paragraph_spacing: Double\n"
        "  heading_style: setext\n"
        "emoji:\n"
        "  remove_overused: yes\n",
        encoding="utf-8",
    )

    config = ConfigLoader.from_yaml(config_path)

    assert config.skip_emoji is True
    assert config.fix_unbalanced_delimiters is False
    assert config.layout.paragraph_spacing == "double"
    assert config.layout.heading_style == "setext"
    assert config.layout.preserve_code_blocks is True
    assert config.emoji.remove_overused is True
    assert config.emoji.remove_all is False


def test_empty_yaml_file_yields_defaults(tmp_path: Path) -> None:
    """An empty YAML file produces the default config."""

    config_path = tmp_path / "empty.yaml"
    config_path.write_text("", encoding="utf-8")

    assert ConfigLoader.from_yaml(config_path) == DeslopifyConfig()


def test_unknown_top_level_key_is_rejected(tmp_path: Path) -> None:
    """Unsupported top-level keys are listed in the error."""

    config_path = tmp_path / "bad.yaml"
    config_path.write_text("colour: blue\n", encoding="utf-8")

    with pytest.raises(ValueError, match="unsupported key\\(s\\): colour"):
        ConfigLoader.from_yaml(config_path)


def test_unknown_section_key_is_rejected() -> None:
    """Unsupported section keys name their section."""

    with pytest.raises(ValueError, match="section `layout` includes unsupported key"):
        ConfigLoader.from_mapping({"layout": {"indent": 4}})


def test_non_boolean_value_is_rejected() -> None:
    """Boolean fields reject unrecognized tokens."""

    with pytest.raises(ValueError, match="`skip_layout` must be a boolean"):
        ConfigLoader.from_mapping({"skip_layout": "maybe"})


def test_invalid_choice_is_rejected() -> None:
    """Enumerated fields list their allowed values."""

    with pytest.raises(ValueError, match="`heading_style` must be one of"):
        ConfigLoader.from_mapping({"layout": {"heading_style": "fancy"}})


def test_non_mapping_root_is_rejected(tmp_path: Path) -> None:
    """A YAML document must be a mapping."""

    config_path = tmp_path / "list.yaml"
    config_path.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ValueError, match="top-level mapping"):
        ConfigLoader.from_yaml(config_path)


def test_yaml_syntax_error_is_reported(tmp_path: Path) -> None:
    """Malformed YAML surfaces as a `ValueError`."""

    config_path = tmp_path / "broken.yaml"
    config_path.write_text("layout: [unclosed\n", encoding="utf-8")

    with pytest.raises(ValueError, match="could not be parsed"):
        ConfigLoader.from_yaml(config_path)


def test_parsing_helpers_normalize_tokens() -> None:
    """Boolean and choice helpers trim and lower-case their input."""

    assert parse_permissive_boolean(" On ") is True
    assert parse_permissive_boolean("0") is False
    assert parse_permissive_boolean("maybe") is None
    assert parse_choice(" Double ", "paragraph_spacing", ("single", "double")) == "double"


def test_required_boolean_names_the_field() -> None:
    """Required boolean parsing accepts tokens and names the field on failure."""

    assert parse_required_boolean("Yes", "skip_emoji") is True
    with pytest.raises(ValueError, match="`skip_emoji` must be a boolean"):
        parse_required_boolean("sometimes", "skip_emoji")
