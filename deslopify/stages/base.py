"""Shared stage contract for the normalization pipeline.

Responsibilities:
- Define the uniform `process(text) -> text` contract every stage follows.
- Own an append-only rule list per stage instance.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import ClassVar, Protocol

from ..text.rules import PatternLike, ReplacementLike, Rule, RuleInput, RuleSet


class TextStage(Protocol):
    """Protocol for named pipeline stages."""

    name: ClassVar[str]

    def process(self, text: str) -> str:
        """Apply the stage to one complete text."""


class RuleStage:
    """Stage backed by an ordered rule list.

    Passing `rules=None` installs the stage defaults; passing a sequence
    (including an empty one) replaces them.
    """

    name: ClassVar[str] = "rules"

    def __init__(self, rules: Iterable[RuleInput] | None = None) -> None:
        """Initialize with custom rules or the stage's default rule sequence."""

        self._rules = RuleSet(self.default_rules() if rules is None else rules)

    def default_rules(self) -> list[Rule]:
        """Return the default rule sequence for this stage."""

        return []

    @property
    def rules(self) -> tuple[Rule, ...]:
        """Return a snapshot of the current rule list."""

        return tuple(self._rules)

    def add_rule(
        self, pattern: PatternLike, replacement: ReplacementLike = "", count: int = 0
    ) -> None:
        """Append one rule after all existing rules."""

        self._rules.add(Rule.create(pattern, replacement, count=count))

    def add_rules(self, rules: Iterable[RuleInput]) -> None:
        """Append several rules, keeping their order."""

        self._rules.extend(rules)

    def process(self, text: str) -> str:
        """Apply every rule in insertion order."""

        return self._rules.apply(text)
