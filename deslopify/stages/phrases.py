"""Position-anchored slop phrase removal stage.

Responsibilities:
- Remove filler phrases at the start, end, or anywhere in the text.
- Synthesize anchored patterns so `start`/`end` phrases only match at the
  boundaries of the current, already rewritten text.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
import re
from typing import Literal, Union

import regex

from ..text.rules import PatternLike, ReplacementLike, Rule
from .base import RuleStage

PhrasePosition = Literal["start", "end", "anywhere"]
_POSITIONS = ("start", "end", "anywhere")
# Leading global inline flags such as `(?i)`; compiled flags already carry them.
_LEADING_INLINE_FLAGS_RE = re.compile(r"\A(?:\(\?[aiLmsux]+\))+")


@dataclass(frozen=True, slots=True)
class PhrasePattern:
    """A phrase to remove and where it may appear.

    Attributes:
        pattern: Literal substring or compiled regular expression.
        position: `start`, `end`, or `anywhere`.
        count: Maximum removals for `anywhere` patterns; `0` removes all.
    """

    pattern: PatternLike
    position: PhrasePosition = "anywhere"
    count: int = 0


PhraseInput = Union[PhrasePattern, tuple[PatternLike, str]]

DEFAULT_PHRASE_PATTERNS = (
    PhrasePattern(re.compile(r"Certainly! ", re.IGNORECASE), "start"),
    PhrasePattern(re.compile(r"I'd be happy to ", re.IGNORECASE), "start"),
    PhrasePattern(re.compile(r"I'll help you ", re.IGNORECASE), "start"),
    PhrasePattern(re.compile(r"Honestly[;,] ", re.IGNORECASE), "start"),
)


def anchored_pattern(pattern: PatternLike, position: str) -> PatternLike:
    """Return `pattern` anchored to the text start or end for that position.

    Anchoring wraps the original source in a non-capturing group and keeps the
    original flags, so alternations stay anchored as a whole. Leading inline
    flag groups are dropped from the source because they may only open a
    pattern.
    """

    if position not in _POSITIONS:
        raise ValueError(f"Phrase position must be one of {_POSITIONS}, got {position!r}.")
    if position == "anywhere":
        return pattern

    if isinstance(pattern, str):
        source, flags, compile_pattern = re.escape(pattern), 0, re.compile
    elif isinstance(pattern, re.Pattern):
        source, flags, compile_pattern = pattern.pattern, pattern.flags, re.compile
    else:
        source, flags, compile_pattern = pattern.pattern, pattern.flags, regex.compile
    source = _LEADING_INLINE_FLAGS_RE.sub("", source)

    if position == "start":
        return compile_pattern(rf"\A(?:{source})", flags)
    return compile_pattern(rf"(?:{source})\Z", flags)


def _coerce_phrase(value: PhraseInput) -> PhrasePattern:
    """Return `value` as a `PhrasePattern`, accepting `(pattern, position)` tuples."""

    if isinstance(value, PhrasePattern):
        return value
    pattern, position = value
    return PhrasePattern(pattern, position)  # type: ignore[arg-type]


class PhraseStage(RuleStage):
    """Remove slop phrases; matches are deleted, never replaced."""

    name = "phrases"

    def __init__(self, patterns: Iterable[PhraseInput] | None = None) -> None:
        """Initialize with custom phrase patterns or the default phrase list."""

        phrases = DEFAULT_PHRASE_PATTERNS if patterns is None else patterns
        super().__init__([self._removal_rule(_coerce_phrase(phrase)) for phrase in phrases])

    @staticmethod
    def _removal_rule(phrase: PhrasePattern) -> Rule:
        """Build the empty-replacement rule for one phrase pattern."""

        return Rule.create(
            anchored_pattern(phrase.pattern, phrase.position),
            "",
            count=phrase.count,
        )

    def add_pattern(
        self, pattern: PatternLike, position: PhrasePosition = "anywhere", count: int = 0
    ) -> None:
        """Append a phrase to remove at the given position."""

        self._rules.add(self._removal_rule(PhrasePattern(pattern, position, count)))

    def add_patterns(self, patterns: Iterable[PhraseInput]) -> None:
        """Append several phrases, keeping their order."""

        self._rules.extend(self._removal_rule(_coerce_phrase(phrase)) for phrase in patterns)

    def add_rule(
        self,
        pattern: PatternLike,
        replacement: ReplacementLike = "",
        count: int = 0,
        *,
        position: PhrasePosition = "anywhere",
    ) -> None:
        """Append a removal rule; phrase rules cannot substitute replacement text."""

        if replacement != "":
            raise ValueError("Phrase rules only remove matches; `replacement` must be empty.")
        self.add_pattern(pattern, position, count)

    def add_rules(self, rules: Iterable[PhraseInput]) -> None:  # type: ignore[override]
        """Append `PhrasePattern` entries or `(pattern, position)` tuples."""

        self.add_patterns(rules)
