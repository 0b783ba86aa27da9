"""Literal character and Unicode cleanup stage.

Responsibilities:
- Replace typographic dashes, curly quotes, and exotic spaces with plain ASCII.
- Convert decorative bullet glyphs into markdown hyphen list markers.
- Collapse repeated inner spaces without touching line indentation.
"""

from __future__ import annotations

import re

from ..text.rules import Rule
from .base import RuleStage

EM_DASH = "\u2014"
EN_DASH = "\u2013"
DECORATIVE_EMOJI = "\U0001F31F\U0001F680\u2728\U0001F4A1\U0001F64C\U0001F4C8"
BULLET_GLYPHS = (
    "•·○▪▫➢➤★✓✔"
    "◦◆◇►❖⦿⁃"
)
# NBSP, en/em/thin/hair spaces and the ideographic space.
WIDE_SPACES = "\u00a0\u2002-\u200a\u3000"
ZERO_WIDTH_SPACE = "\u200b"


class CharacterStage(RuleStage):
    """Normalize literal characters before any phrase or layout work."""

    name = "characters"

    def default_rules(self) -> list[Rule]:
        """Return character rules; dash rules run before space collapsing."""

        return [
            Rule.create(re.compile(f"[{DECORATIVE_EMOJI}]"), ""),
            Rule.create(re.compile(r"(?<=\d) %"), "%"),
            Rule.create(re.compile(f"(?<=\\S){EM_DASH}(?=\\S)"), " - "),
            Rule.create(re.compile(f"(?<=\\S){EN_DASH}(?=\\S)"), " - "),
            Rule.create(f" {EM_DASH} ", " - "),
            Rule.create(re.compile(f"{EM_DASH}(?=\\S)"), "- "),
            Rule.create(re.compile(f"(?<=\\S){EM_DASH}"), " -"),
            Rule.create(f" {EN_DASH} ", " - "),
            Rule.create(EN_DASH, " - "),
            Rule.create(re.compile("[“”]"), '"'),
            Rule.create(re.compile("[‘’]"), "'"),
            Rule.create(
                re.compile(f"^([ \\t]*)[{BULLET_GLYPHS}][ \\t]+", re.MULTILINE),
                r"\1- ",
            ),
            Rule.create(re.compile(f"[{WIDE_SPACES}]"), " "),
            Rule.create(ZERO_WIDTH_SPACE, ""),
            # Leading indentation is never matched: both rules need a non-space before the run.
            Rule.create(re.compile(r"(?<=\S) {2,}(?=\S)"), " "),
            Rule.create(re.compile(r"(?<=\S) {2,}$", re.MULTILINE), " "),
        ]
