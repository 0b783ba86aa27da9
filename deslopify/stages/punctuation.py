"""Punctuation normalization stage with delimiter balancing.

Responsibilities:
- Collapse repeated `!`, `?`, dots, and dashes.
- Repair unmatched brackets and quotes after all punctuation rules ran.
"""

from __future__ import annotations

from collections.abc import Iterable
import re

from ..text.balancing import DelimiterBalancer
from ..text.rules import Rule, RuleInput
from .base import RuleStage

# A line made only of dashes is a markdown rule or setext underline, not a run to collapse.
_DASH_RUN_RE = re.compile(r"(?P<line>^-{2,}[ \t]*$)|-{2,}", re.MULTILINE)


def _mixed_marks(match: re.Match[str]) -> str:
    """Collapse a mixed `!`/`?` run to `?!`, leaving single-kind runs as-is."""

    marks = match.group(0)
    return "?!" if "?" in marks and "!" in marks else marks


def _collapse_dash_run(match: re.Match[str]) -> str:
    """Collapse an inline dash run to one hyphen, keeping dash-only lines."""

    return match.group("line") or "-"


class PunctuationStage(RuleStage):
    """Normalize repeated punctuation and optionally balance delimiters."""

    name = "punctuation"

    def __init__(
        self,
        rules: Iterable[RuleInput] | None = None,
        fix_unbalanced: bool = True,
        balancer: DelimiterBalancer | None = None,
    ) -> None:
        """Initialize rules, the balancing toggle, and the balancer."""

        super().__init__(rules)
        self.fix_unbalanced = fix_unbalanced
        self._balancer = balancer or DelimiterBalancer()
        self.last_inserted_count = 0

    def default_rules(self) -> list[Rule]:
        """Return repeat-collapsing rules; single-kind runs collapse before mixed runs."""

        return [
            Rule.create(re.compile(r"!{2,}"), "!"),
            Rule.create(re.compile(r"\?{2,}"), "?"),
            Rule.create(re.compile(r"[!?]{2,}"), _mixed_marks),
            Rule.create(re.compile(r"\.{4,}"), "..."),
            Rule.create(_DASH_RUN_RE, _collapse_dash_run),
        ]

    def set_options(self, fix_unbalanced: bool) -> None:
        """Replace the balancing toggle; rules are retained."""

        self.fix_unbalanced = fix_unbalanced

    def process(self, text: str) -> str:
        """Apply punctuation rules, then balance delimiters when enabled."""

        result = super().process(text)
        self.last_inserted_count = 0
        if not self.fix_unbalanced:
            return result
        report = self._balancer.balance_with_report(result)
        self.last_inserted_count = report.inserted_count
        return report.balanced_text
