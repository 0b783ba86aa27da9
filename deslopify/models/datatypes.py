"""Core datatypes shared across Deslopify modules.

Responsibilities:
- Represent immutable records exchanged between stages and the pipeline.
- Provide explicit typing for region protection and delimiter balancing.

Key types:
- `ProtectedRegion`, `DelimiterSpan`, `DelimiterBalanceReport`,
  and `NormalizationReport`.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class ProtectedRegion:
    """A verbatim text range moved out of the working text.

    Attributes:
        placeholder_id: 0-based id embedded in the substituted placeholder.
        verbatim: Original region text, restored byte-for-byte.
    """

    placeholder_id: int
    verbatim: str


@dataclass(frozen=True, slots=True)
class DelimiterSpan:
    """Position pair produced while scanning one bracket type.

    Attributes:
        open_index: Offset of the opening character.
        close_index: Offset of the matching closing character, or `None`
            when the opener was never closed.
    """

    open_index: int
    close_index: int | None = None

    @property
    def is_unmatched(self) -> bool:
        """Return whether the opener has no matching closer."""

        return self.close_index is None


@dataclass(frozen=True, slots=True)
class DelimiterBalanceReport:
    """Structured output of one delimiter-balancing pass."""

    balanced_text: str
    inserted_count: int


@dataclass(frozen=True, slots=True)
class NormalizationReport:
    """Structured output of one pipeline run.

    Attributes:
        text: Final normalized and trimmed text.
        stages_run: Names of stages executed, in execution order.
        protected_region_count: Number of code regions held out of rewriting.
        delimiters_inserted: Synthetic closing delimiters added by balancing.
    """

    text: str
    stages_run: tuple[str, ...] = field(default_factory=tuple)
    protected_region_count: int = 0
    delimiters_inserted: int = 0
