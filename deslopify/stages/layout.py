"""Markdown layout standardization stage.

Responsibilities:
- Normalize line endings and paragraph spacing.
- Normalize ATX and setext headings to one configured style.
- Collapse horizontal whitespace around list markers, quotes, and punctuation.
- Keep fenced and indented code blocks byte-identical when configured.

Layout rules only collapse horizontal whitespace; newline runs are changed by
the paragraph-spacing rule alone.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace
import re

from ..config import LayoutOptions
from ..text.protection import PLACEHOLDER_ESCAPE, PLACEHOLDER_OPEN, RegionProtector
from ..text.rules import Rule, RuleInput
from .base import RuleStage

_BLANK_RUN_RE = re.compile(r"\n{2,}")
_SETEXT_HEADING_RE = re.compile(
    r"^(?P<title>[^\n]+)\n(?P<underline>={2,}|-{2,})[ \t]*$",
    re.MULTILINE,
)
_ATX_TOP_HEADING_RE = re.compile(r"^(?P<marks>#{1,2})[ \t]+(?P<title>[^\n]+)$", re.MULTILINE)
_CLOSING_HASHES_RE = re.compile(r"[ \t]+#+[ \t]*$")
# Lines that are never setext heading text: blank, rules, ATX headings, list items, quotes.
_NOT_HEADING_TEXT_RE = re.compile(r"^\s*(?:$|[-=*_ \t]+$|#|[-*+>][ \t]|\d+[.)][ \t])")
# Placeholder tokens, raw or escaped by a nested extraction.
_MARKER_PREFIXES = (PLACEHOLDER_OPEN, PLACEHOLDER_ESCAPE)


class LayoutStage(RuleStage):
    """Standardize markdown layout under `LayoutOptions`.

    Rules that depend on options read them at apply time, so `set_options`
    takes effect for later `process` calls without rebuilding rules.
    """

    name = "layout"

    def __init__(
        self,
        rules: Iterable[RuleInput] | None = None,
        options: LayoutOptions | None = None,
        protector: RegionProtector | None = None,
    ) -> None:
        """Initialize rules, options, and the region protector."""

        self._options = replace(options) if options is not None else LayoutOptions()
        self._protector = protector or RegionProtector()
        self.last_protected_count = 0
        super().__init__(rules)

    @property
    def options(self) -> LayoutOptions:
        """Return the current layout options."""

        return self._options

    def set_options(self, options: LayoutOptions | None = None, **changes: object) -> None:
        """Replace options, optionally overriding single fields; rules are retained."""

        base = options if options is not None else self._options
        self._options = replace(base, **changes)

    def paragraph_spacing(self) -> str:
        """Return the effective paragraph spacing; unknown values mean `single`."""

        return "double" if str(self._options.paragraph_spacing).lower() == "double" else "single"

    def heading_style(self) -> str:
        """Return the effective heading style; unknown values mean `atx`."""

        return "setext" if str(self._options.heading_style).lower() == "setext" else "atx"

    def default_rules(self) -> list[Rule]:
        """Return line-ending, spacing, heading, list, quote, and whitespace rules."""

        return [
            Rule.create(re.compile(r"\r\n?"), "\n"),
            Rule.create(_BLANK_RUN_RE, self._paragraph_break),
            Rule.create(re.compile(r"^(#{1,6})[ \t]*(?=[^#\s])", re.MULTILINE), r"\1 "),
            Rule.create(_SETEXT_HEADING_RE, self._setext_heading),
            Rule.create(_ATX_TOP_HEADING_RE, self._atx_heading),
            Rule.create(re.compile(r"^([ \t]*)([-*+])[ \t]{2,}(?=\S)", re.MULTILINE), r"\1\2 "),
            Rule.create(re.compile(r"^([ \t]*)>[ \t]{2,}(?=\S)", re.MULTILINE), r"\1> "),
            Rule.create(re.compile(r"([.,:;!?])[ \t]{2,}(?=\S)"), r"\1 "),
            Rule.create(re.compile(r"(?<=\S)[ \t]{2,}(?=\S)"), " "),
            Rule.create(re.compile(r"([.,:;!?])[ \t]+$", re.MULTILINE), r"\1"),
        ]

    def _paragraph_break(self, _match: re.Match[str]) -> str:
        return "\n\n\n" if self.paragraph_spacing() == "double" else "\n\n"

    def _setext_heading(self, match: re.Match[str]) -> str:
        """Rewrite a setext heading in the configured style."""

        title = match.group("title").strip()
        if _NOT_HEADING_TEXT_RE.match(title) or title.startswith(_MARKER_PREFIXES):
            return match.group(0)

        underline_char = match.group("underline")[0]
        if self.heading_style() == "atx":
            return f"{'#' if underline_char == '=' else '##'} {title}"
        return f"{title}\n{underline_char * max(len(title), 2)}"

    def _atx_heading(self, match: re.Match[str]) -> str:
        """Rewrite a level 1-2 ATX heading as setext when that style is configured."""

        if self.heading_style() != "setext":
            return match.group(0)
        title = _CLOSING_HASHES_RE.sub("", match.group("title")).strip()
        if not title:
            return match.group(0)
        underline_char = "=" if len(match.group("marks")) == 1 else "-"
        return f"{title}\n{underline_char * max(len(title), 2)}"

    def enforce_paragraph_spacing(self, text: str) -> str:
        """Collapse every blank-line run to the configured paragraph break."""

        return _BLANK_RUN_RE.sub(self._paragraph_break, text)

    def process(self, text: str) -> str:
        """Apply layout rules around protected code regions."""

        if not self._options.preserve_code_blocks:
            self.last_protected_count = 0
            return self.enforce_paragraph_spacing(self._rules.apply(text))

        masked, regions = self._protector.extract(text)
        self.last_protected_count = len(regions)
        result = self.enforce_paragraph_spacing(self._rules.apply(masked))
        return self._protector.restore(result, regions)
