"""Abbreviation, time-zone, and calendar-term casing stage.

Responsibilities:
- Upper-case time-zone abbreviations.
- Canonicalize month abbreviations and calendar terms.
- Apply case-preserving rules through an explicit always-capitalized table.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
import re
from typing import Union

from ..text.rules import PatternLike, Rule
from .base import RuleStage

# Terms title-cased regardless of the matched text's case. This is an explicit
# enumerated table, not a general proper-noun rule.
ALWAYS_CAPITALIZED = frozenset({"vernal", "equinox", "january", "february", "spring"})

_TIME_ZONES = ("utc", "gmt", "cst", "mst", "pst", "cet", "cest", "eet", "jst", "aest")
# Time zones that are also ordinary words; only upper-cased right after a time.
_WORDLIKE_TIME_ZONES = ("est", "ist", "wet", "west")
_MONTH_ABBREVIATIONS = (
    ("jan", "Jan"),
    ("feb", "Feb"),
    ("mar", "Mar"),
    ("apr", "Apr"),
    ("jun", "Jun"),
    ("jul", "Jul"),
    ("aug", "Aug"),
    ("sep|sept|Sept", "Sep"),
    ("oct", "Oct"),
    ("nov", "Nov"),
    ("dec", "Dec"),
)
_CASE_PRESERVING_TERMS = (
    "celsius",
    "fahrenheit",
    "kelvin",
    "january",
    "february",
    "march",
    "april",
    "may",
    "june",
    "july",
    "august",
    "september",
    "october",
    "november",
    "december",
    "spring",
    "summer",
    "autumn",
    "fall",
    "winter",
    "equinox",
    "solstice",
    "vernal",
)


@dataclass(frozen=True, slots=True)
class AbbreviationMapping:
    """Canonical spelling for a matched term.

    Attributes:
        pattern: Literal substring or compiled regular expression.
        replacement: Canonical spelling.
        preserve_case: Keep the match's first-letter case instead of forcing
            `replacement` verbatim.
    """

    pattern: PatternLike
    replacement: str
    preserve_case: bool = False


AbbreviationInput = Union[AbbreviationMapping, tuple[PatternLike, str], tuple[PatternLike, str, bool]]


def _word_pattern(alternatives: str) -> re.Pattern[str]:
    """Compile a whole-word pattern matching lower-case or capitalized forms."""

    forms: list[str] = []
    for word in alternatives.split("|"):
        forms.extend((word, word[:1].upper() + word[1:]))
    unique_forms = "|".join(dict.fromkeys(forms))
    return re.compile(rf"\b(?:{unique_forms})\b")


def _case_preserving(replacement: str) -> Callable[[re.Match[str]], str]:
    """Return a replacement that mirrors the first-letter case of the match."""

    def _replace(match: re.Match[str]) -> str:
        matched = match.group(0)
        if matched[:1].isupper():
            return replacement[:1].upper() + replacement[1:]
        return replacement[:1].lower() + replacement[1:]

    return _replace


def _upper_wordlike_zone(match: re.Match[str]) -> str:
    """Upper-case a word-like time zone while keeping the time prefix."""

    return match.group("prefix") + match.group("zone").upper()


class AbbreviationStage(RuleStage):
    """Normalize casing of abbreviations and calendar terms."""

    name = "abbreviations"

    def __init__(
        self,
        mappings: Iterable[AbbreviationInput] | None = None,
        always_capitalized: Iterable[str] | None = None,
    ) -> None:
        """Initialize with custom mappings and an optional always-capitalized table."""

        self._always_capitalized = frozenset(
            term.lower()
            for term in (ALWAYS_CAPITALIZED if always_capitalized is None else always_capitalized)
        )
        if mappings is None:
            super().__init__()
        else:
            super().__init__([self._mapping_rule(self._coerce(mapping)) for mapping in mappings])

    @property
    def always_capitalized(self) -> frozenset[str]:
        """Return the table of terms title-cased regardless of input case."""

        return self._always_capitalized

    def default_rules(self) -> list[Rule]:
        """Return time-zone, month, and calendar-term casing rules."""

        mappings = [AbbreviationMapping(_word_pattern(zone), zone.upper()) for zone in _TIME_ZONES]
        mappings.extend(
            AbbreviationMapping(_word_pattern(forms), canonical)
            for forms, canonical in _MONTH_ABBREVIATIONS
        )
        mappings.extend(
            AbbreviationMapping(_word_pattern(term), term.capitalize(), preserve_case=True)
            for term in _CASE_PRESERVING_TERMS
        )
        wordlike_zones = "|".join(
            f"{zone}|{zone.capitalize()}" for zone in _WORDLIKE_TIME_ZONES
        )
        rules = [self._mapping_rule(mapping) for mapping in mappings]
        rules.append(
            Rule.create(
                re.compile(
                    r"(?<=\d)(?P<prefix>[ \t]*(?i:[ap]\.?m\.?)?[ \t]+)"
                    rf"(?P<zone>{wordlike_zones})\b"
                ),
                _upper_wordlike_zone,
            )
        )
        return rules

    @staticmethod
    def _coerce(value: AbbreviationInput) -> AbbreviationMapping:
        """Return `value` as an `AbbreviationMapping`, accepting tuples."""

        if isinstance(value, AbbreviationMapping):
            return value
        return AbbreviationMapping(*value)

    def _mapping_rule(self, mapping: AbbreviationMapping) -> Rule:
        """Build the rule for one mapping, honoring the always-capitalized table."""

        replacement = mapping.replacement
        if not mapping.preserve_case or replacement.lower() in self._always_capitalized:
            return Rule.create(mapping.pattern, lambda _match: replacement)
        return Rule.create(mapping.pattern, _case_preserving(replacement))

    def add_mapping(self, pattern: PatternLike, replacement: str, preserve_case: bool = False) -> None:
        """Append one abbreviation mapping."""

        self._rules.add(self._mapping_rule(AbbreviationMapping(pattern, replacement, preserve_case)))

    def add_mappings(self, mappings: Iterable[AbbreviationInput]) -> None:
        """Append several abbreviation mappings, keeping their order."""

        self._rules.extend(self._mapping_rule(self._coerce(mapping)) for mapping in mappings)

    def add_rule(  # type: ignore[override]
        self,
        pattern: PatternLike,
        replacement: str,
        count: int = 0,
        *,
        preserve_case: bool = False,
    ) -> None:
        """Append a casing rule; `preserve_case` mirrors the match's first letter."""

        rule = self._mapping_rule(AbbreviationMapping(pattern, replacement, preserve_case))
        self._rules.add(Rule.create(rule.pattern, rule.replacement, count=count))

    def add_rules(self, rules: Iterable[AbbreviationInput]) -> None:  # type: ignore[override]
        """Append `AbbreviationMapping` entries or tuples."""

        self.add_mappings(rules)
