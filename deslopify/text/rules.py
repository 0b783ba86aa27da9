"""Deterministic pattern-to-replacement rewrite rules.

Responsibilities:
- Represent one rewrite as an immutable `(pattern, replacement)` rule.
- Keep replacement dispatch explicit through tagged replacement variants.
- Fold an ordered, append-only rule list over text.

Key types:
- `Rule`: one pure rewrite.
- `TemplateReplacement` / `CallableReplacement`: replacement variants.
- `RuleSet`: ordered rule collection applied left to right.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
import re
from typing import Any, Protocol, Union


class CompiledPattern(Protocol):
    """Protocol shared by `re.Pattern` and `regex.Pattern` objects."""

    pattern: Any
    flags: int

    def sub(self, repl: Any, string: str, count: int = 0) -> str:
        """Return `string` with pattern occurrences replaced."""


@dataclass(frozen=True, slots=True)
class TemplateReplacement:
    """Replacement text; regex backreferences (`\\1`, `\\g<name>`) are expanded."""

    template: str


@dataclass(frozen=True, slots=True)
class CallableReplacement:
    """Replacement computed from the match object."""

    func: Callable[[re.Match[str]], str]


Replacement = Union[TemplateReplacement, CallableReplacement]
PatternLike = Union[str, CompiledPattern]
ReplacementLike = Union[str, Callable[[re.Match[str]], str], TemplateReplacement, CallableReplacement]


def as_replacement(value: ReplacementLike) -> Replacement:
    """Wrap a plain string or callable into its replacement variant."""

    if isinstance(value, (TemplateReplacement, CallableReplacement)):
        return value
    if isinstance(value, str):
        return TemplateReplacement(value)
    if callable(value):
        return CallableReplacement(value)
    raise TypeError(f"Unsupported replacement type: {type(value).__name__}")


@dataclass(frozen=True, slots=True)
class Rule:
    """One pure rewrite applied to the whole text.

    Attributes:
        pattern: Literal substring or compiled regular expression.
        replacement: Template or callable replacement variant.
        count: Maximum replacements per application; `0` replaces every match.
    """

    pattern: PatternLike
    replacement: Replacement
    count: int = 0
    _compiled: Any = field(init=False, repr=False, compare=False)
    _is_literal: bool = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Compile literal patterns once and validate the replacement variant."""

        object.__setattr__(self, "replacement", as_replacement(self.replacement))
        if self.count < 0:
            raise ValueError("`count` must be zero or a positive integer.")
        if isinstance(self.pattern, str):
            object.__setattr__(self, "_compiled", re.compile(re.escape(self.pattern)))
            object.__setattr__(self, "_is_literal", True)
        else:
            object.__setattr__(self, "_compiled", self.pattern)
            object.__setattr__(self, "_is_literal", False)

    @classmethod
    def create(
        cls, pattern: PatternLike, replacement: ReplacementLike = "", count: int = 0
    ) -> Rule:
        """Build a rule from a plain string or callable replacement."""

        return cls(pattern=pattern, replacement=as_replacement(replacement), count=count)

    @property
    def compiled(self) -> CompiledPattern:
        """Return the compiled pattern this rule matches with."""

        return self._compiled

    @property
    def is_literal(self) -> bool:
        """Return whether the rule was built from a literal substring."""

        return self._is_literal

    def apply(self, text: str) -> str:
        """Apply this rule to `text` and return the rewritten text."""

        if self._is_literal and not self.pattern:
            return text
        replacement = self.replacement
        if isinstance(replacement, CallableReplacement):
            return self._compiled.sub(replacement.func, text, count=self.count)
        if self._is_literal:
            template = replacement.template
            return self._compiled.sub(lambda _match: template, text, count=self.count)
        return self._compiled.sub(replacement.template, text, count=self.count)


RuleInput = Union[Rule, tuple[PatternLike, ReplacementLike]]


def coerce_rule(value: RuleInput) -> Rule:
    """Return `value` as a `Rule`, accepting `(pattern, replacement)` tuples."""

    if isinstance(value, Rule):
        return value
    pattern, replacement = value
    return Rule.create(pattern, replacement)


class RuleSet:
    """Ordered, append-only list of rules applied left to right."""

    def __init__(self, rules: Iterable[RuleInput] | None = None) -> None:
        """Initialize with an optional initial rule sequence."""

        self._rules: list[Rule] = [coerce_rule(rule) for rule in rules or ()]

    def add(self, rule: RuleInput) -> None:
        """Append one rule."""

        self._rules.append(coerce_rule(rule))

    def extend(self, rules: Iterable[RuleInput]) -> None:
        """Append rules in the given order."""

        self._rules.extend(coerce_rule(rule) for rule in rules)

    def apply(self, text: str) -> str:
        """Fold every rule over `text`, each output feeding the next rule."""

        current = text
        for rule in self._rules:
            current = rule.apply(current)
        return current

    def __iter__(self) -> Iterator[Rule]:
        return iter(tuple(self._rules))

    def __len__(self) -> int:
        return len(self._rules)
