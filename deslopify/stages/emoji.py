"""Emoji removal stage.

Responsibilities:
- Remove every emoji sequence when `remove_all` is set.
- Remove overused emoji and emoji clusters when `remove_overused` is set.

Emoji matching relies on Unicode properties from the `regex` package. A
sequence is a presentation emoji or a pictograph followed by VS16, with any
skin-tone modifiers and zero-width-joiner continuations, a regional-indicator
flag pair, or a keycap. Digits and `#`/`*` only count inside keycaps.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace

import regex

from ..config import EmojiOptions
from ..text.rules import PatternLike, ReplacementLike, Rule, RuleInput
from .base import RuleStage

_EMOJI_ATOM = (
    r"(?:[0-9#*]\uFE0F?\u20E3"
    r"|[\U0001F1E6-\U0001F1FF]{2}"
    r"|[\p{Emoji_Presentation}\U0001F300-\U0001FAFF]"
    r"|\p{Extended_Pictographic}(?=\uFE0F))"
)
_EMOJI_MODIFIERS = r"(?:\uFE0F|[\U0001F3FB-\U0001F3FF])*"
EMOJI_SEQUENCE = rf"{_EMOJI_ATOM}{_EMOJI_MODIFIERS}(?:\u200D{_EMOJI_ATOM}{_EMOJI_MODIFIERS})*"

_ALL_EMOJI_RE = regex.compile(EMOJI_SEQUENCE)
_EMOJI_CLUSTER_RE = regex.compile(rf"(?:{EMOJI_SEQUENCE}){{3,}}")

# Thumbs up, clapping, party popper, rocket, light bulb, sparkles, glowing star,
# laptop, robot, birthday cake, confetti, and the common smiling faces.
_OVERUSED_CODEPOINTS = (
    0x1F44D, 0x1F44F, 0x1F389, 0x1F38A, 0x1F680, 0x1F4A1, 0x2728, 0x1F31F,
    0x1F4BB, 0x1F916, 0x1F382, 0x1F600, 0x1F601, 0x1F602, 0x1F603, 0x1F604,
    0x1F606, 0x1F609, 0x1F60A, 0x1F60B, 0x1F60C, 0x1F60D, 0x1F617, 0x1F618,
    0x1F619, 0x1F61A, 0x1F61B, 0x1F61C, 0x1F61D, 0x1F642, 0x1F643, 0x1F911,
    0x1F921, 0x1F923, 0x1F92A, 0x1F970,
)
DEFAULT_OVERUSED_PATTERN = regex.compile(
    "[" + "".join(chr(codepoint) for codepoint in _OVERUSED_CODEPOINTS) + "]"
    + _EMOJI_MODIFIERS
)


class EmojiStage(RuleStage):
    """Remove emoji according to `EmojiOptions`; a no-op with both flags off.

    The stage's rules are the overused-emoji patterns; each removes its matches.
    """

    name = "emoji"

    def __init__(
        self,
        rules: Iterable[RuleInput] | None = None,
        options: EmojiOptions | None = None,
    ) -> None:
        """Initialize overused patterns and options."""

        self._options = replace(options) if options is not None else EmojiOptions()
        super().__init__(rules)

    @property
    def options(self) -> EmojiOptions:
        """Return the current emoji options."""

        return self._options

    def set_options(self, options: EmojiOptions | None = None, **changes: object) -> None:
        """Replace options, optionally overriding single fields; patterns are retained."""

        base = options if options is not None else self._options
        self._options = replace(base, **changes)

    def default_rules(self) -> list[Rule]:
        """Return the default overused-emoji pattern."""

        return [Rule.create(DEFAULT_OVERUSED_PATTERN, "")]

    def add_overused_pattern(self, pattern: PatternLike) -> None:
        """Append one pattern to the overused-emoji list."""

        self._rules.add(Rule.create(pattern, ""))

    def add_rule(
        self, pattern: PatternLike, replacement: ReplacementLike = "", count: int = 0
    ) -> None:
        """Append an overused-emoji pattern; its matches are always removed."""

        if replacement != "":
            raise ValueError("Emoji rules remove their matches; `replacement` must be empty.")
        self._rules.add(Rule.create(pattern, "", count=count))

    def process(self, text: str) -> str:
        """Remove all emoji, or overused emoji plus clusters, per the options."""

        if self._options.remove_all:
            return _ALL_EMOJI_RE.sub("", text)
        if self._options.remove_overused:
            return _EMOJI_CLUSTER_RE.sub("", self._rules.apply(text))
        return text
