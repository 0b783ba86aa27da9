"""Configuration model and loaders for Deslopify.

Responsibilities:
- Define pipeline configuration as typed dataclasses.
- Validate option values at the boundary with actionable messages.
- Provide loader entry points for YAML files and plain mappings.

Key types:
- `LayoutOptions`: layout stage options.
- `EmojiOptions`: emoji stage options.
- `DeslopifyConfig`: per-stage skip flags plus stage options.
- `ConfigLoader`: static construction helpers for `DeslopifyConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml

from .parsing import parse_choice, parse_required_boolean


STAGE_ORDER = (
    "characters",
    "phrases",
    "datetime",
    "abbreviations",
    "punctuation",
    "layout",
    "emoji",
)
PARAGRAPH_SPACING_CHOICES = ("single", "double")
HEADING_STYLE_CHOICES = ("atx", "setext")


@dataclass(slots=True)
class LayoutOptions:
    """Options for the layout stage.

    Attributes:
        paragraph_spacing: `single` keeps one blank line between paragraphs,
            `double` keeps two.
        preserve_code_blocks: Whether fenced and indented code blocks are kept
            byte-identical.
        heading_style: `atx` (`# Title`) or `setext` (`Title` underlined).
    """

    paragraph_spacing: str = "single"
    preserve_code_blocks: bool = True
    heading_style: str = "atx"

    def validate(self) -> None:
        """Validate enumerated layout option values."""

        parse_choice(self.paragraph_spacing, "paragraph_spacing", PARAGRAPH_SPACING_CHOICES)
        parse_choice(self.heading_style, "heading_style", HEADING_STYLE_CHOICES)


@dataclass(slots=True)
class EmojiOptions:
    """Options for the emoji stage; with both flags off emoji are left untouched."""

    remove_all: bool = False
    remove_overused: bool = False


@dataclass(slots=True)
class DeslopifyConfig:
    """Configuration for one normalization pipeline.

    Attributes:
        skip_characters: Omit the character replacement stage.
        skip_phrases: Omit the phrase removal stage.
        skip_datetime: Omit the date/time formatting stage.
        skip_abbreviations: Omit the abbreviation casing stage.
        skip_punctuation: Omit the punctuation stage, including delimiter balancing.
        skip_layout: Omit the layout stage.
        skip_emoji: Omit the emoji stage.
        fix_unbalanced_delimiters: Run delimiter balancing inside the punctuation stage.
        layout: Layout stage options.
        emoji: Emoji stage options.
    """

    skip_characters: bool = False
    skip_phrases: bool = False
    skip_datetime: bool = False
    skip_abbreviations: bool = False
    skip_punctuation: bool = False
    skip_layout: bool = False
    skip_emoji: bool = False
    fix_unbalanced_delimiters: bool = True
    layout: LayoutOptions = field(default_factory=LayoutOptions)
    emoji: EmojiOptions = field(default_factory=EmojiOptions)

    def validate(self) -> None:
        """Validate configuration values before pipeline execution."""

        for name in STAGE_ORDER:
            self._require_boolean(getattr(self, f"skip_{name}"), f"skip_{name}")
        self._require_boolean(self.fix_unbalanced_delimiters, "fix_unbalanced_delimiters")
        self._require_boolean(self.layout.preserve_code_blocks, "layout.preserve_code_blocks")
        self._require_boolean(self.emoji.remove_all, "emoji.remove_all")
        self._require_boolean(self.emoji.remove_overused, "emoji.remove_overused")
        self.layout.validate()

    def active_stages(self) -> tuple[str, ...]:
        """Return stage names that run, in fixed pipeline order."""

        return tuple(name for name in STAGE_ORDER if not getattr(self, f"skip_{name}"))

    @staticmethod
    def _require_boolean(value: object, field_name: str) -> None:
        """Ensure a flag holds a real boolean."""

        if not isinstance(value, bool):
            raise ValueError(f"`{field_name}` must be a boolean value.")


class ConfigLoader:
    """Factory methods for creating `DeslopifyConfig` from external sources."""

    _SUPPORTED_YAML_KEYS = frozenset(
        {f"skip_{name}" for name in STAGE_ORDER}
        | {"fix_unbalanced_delimiters", "layout", "emoji"}
    )
    _SUPPORTED_LAYOUT_KEYS = frozenset({"paragraph_spacing", "preserve_code_blocks", "heading_style"})
    _SUPPORTED_EMOJI_KEYS = frozenset({"remove_all", "remove_overused"})

    @staticmethod
    def from_yaml(path: Path) -> DeslopifyConfig:
        """Create a validated config from a YAML file."""

        path_text = path.read_text(encoding="utf-8")
        payload = ConfigLoader._parse_yaml_payload(path_text, path)

        return ConfigLoader._build_config_from_mapping(payload, source_label=f"YAML `{path}`")

    @staticmethod
    def from_mapping(payload: Mapping[str, Any], source_label: str = "Config mapping") -> DeslopifyConfig:
        """Create a validated config from an in-memory mapping."""

        return ConfigLoader._build_config_from_mapping(payload, source_label=source_label)

    @staticmethod
    def _parse_yaml_payload(raw_text: str, path: Path) -> Mapping[str, Any]:
        """Parse YAML text and enforce a mapping root payload."""

        try:
            payload = yaml.safe_load(raw_text)
        except yaml.YAMLError as exc:
            raise ValueError(f"YAML config `{path}` could not be parsed: {exc}") from exc

        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"YAML config `{path}` must contain a top-level mapping/object.")
        return payload

    @staticmethod
    def _build_config_from_mapping(payload: Mapping[str, Any], source_label: str) -> DeslopifyConfig:
        """Build a validated config from a normalized mapping payload."""

        ConfigLoader._validate_keys(payload, ConfigLoader._SUPPORTED_YAML_KEYS, source_label)

        skips = {
            f"skip_{name}": ConfigLoader._optional_boolean(
                payload, f"skip_{name}", source_label, default=False
            )
            for name in STAGE_ORDER
        }
        fix_unbalanced = ConfigLoader._optional_boolean(
            payload, "fix_unbalanced_delimiters", source_label, default=True
        )
        layout = ConfigLoader._layout_options(payload, source_label)
        emoji = ConfigLoader._emoji_options(payload, source_label)

        config = DeslopifyConfig(
            **skips,
            fix_unbalanced_delimiters=fix_unbalanced,
            layout=layout,
            emoji=emoji,
        )
        config.validate()
        return config

    @staticmethod
    def _layout_options(payload: Mapping[str, Any], source_label: str) -> LayoutOptions:
        """Read the optional `layout` section."""

        section = ConfigLoader._optional_section(payload, "layout", source_label)
        label = f"{source_label} section `layout`"
        ConfigLoader._validate_keys(section, ConfigLoader._SUPPORTED_LAYOUT_KEYS, label)

        defaults = LayoutOptions()
        return LayoutOptions(
            paragraph_spacing=ConfigLoader._optional_choice(
                section,
                "paragraph_spacing",
                label,
                PARAGRAPH_SPACING_CHOICES,
                default=defaults.paragraph_spacing,
            ),
            preserve_code_blocks=ConfigLoader._optional_boolean(
                section,
                "preserve_code_blocks",
                label,
                default=defaults.preserve_code_blocks,
            ),
            heading_style=ConfigLoader._optional_choice(
                section,
                "heading_style",
                label,
                HEADING_STYLE_CHOICES,
                default=defaults.heading_style,
            ),
        )

    @staticmethod
    def _emoji_options(payload: Mapping[str, Any], source_label: str) -> EmojiOptions:
        """Read the optional `emoji` section."""

        section = ConfigLoader._optional_section(payload, "emoji", source_label)
        label = f"{source_label} section `emoji`"
        ConfigLoader._validate_keys(section, ConfigLoader._SUPPORTED_EMOJI_KEYS, label)

        return EmojiOptions(
            remove_all=ConfigLoader._optional_boolean(section, "remove_all", label, default=False),
            remove_overused=ConfigLoader._optional_boolean(
                section, "remove_overused", label, default=False
            ),
        )

    @staticmethod
    def _validate_keys(
        payload: Mapping[str, Any], supported: frozenset[str], source_label: str
    ) -> None:
        """Reject keys outside the supported set."""

        unknown = sorted(str(key) for key in set(payload).difference(supported))
        if unknown:
            key_list = ", ".join(unknown)
            raise ValueError(f"{source_label} includes unsupported key(s): {key_list}.")

    @staticmethod
    def _optional_section(
        payload: Mapping[str, Any], key: str, source_label: str
    ) -> Mapping[str, Any]:
        """Read an optional nested mapping, treating `null` as empty."""

        raw = payload.get(key)
        if raw is None:
            return {}
        if not isinstance(raw, Mapping):
            raise ValueError(f"{source_label} field `{key}` must be a mapping/object.")
        return raw

    @staticmethod
    def _optional_boolean(
        payload: Mapping[str, Any], key: str, source_label: str, default: bool
    ) -> bool:
        """Read and validate a boolean field from a payload."""

        if key not in payload:
            return default

        try:
            return parse_required_boolean(payload[key], key)
        except ValueError as exc:
            raise ValueError(f"{source_label} field {exc}") from exc

    @staticmethod
    def _optional_choice(
        payload: Mapping[str, Any],
        key: str,
        source_label: str,
        choices: tuple[str, ...],
        default: str,
    ) -> str:
        """Read and validate an enumerated string field from a payload."""

        if key not in payload:
            return default
        try:
            return parse_choice(payload[key], key, choices)
        except ValueError as exc:
            raise ValueError(f"{source_label} field {exc}") from exc
