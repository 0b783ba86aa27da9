"""Delimiter balancing for brackets and quotes.

Responsibilities:
- Pair brackets with a last-in-first-out scan and close any opener left open.
- Close an odd trailing double quote.
- Close a dangling single quote without touching apostrophes.

The single-quote rule is a heuristic with no grammar behind it: a line ending
in `'90s` gets a false closing quote, and a quote opened on an earlier line is
never closed.
"""

from __future__ import annotations

import re

from ..models.datatypes import DelimiterBalanceReport, DelimiterSpan
from .protection import PLACEHOLDER_RE

BRACKET_PAIRS = (("(", ")"), ("[", "]"), ("{", "}"))
_DANGLING_SINGLE_QUOTE_RE = re.compile(r"(?<!\w)'[^'\n]*?(?=\s*\Z)")
_TRAILING_NON_CONTENT_RE = re.compile(rf"(?:\s|{PLACEHOLDER_RE.pattern})*\Z")


def _content_end(text: str) -> int:
    """Return the offset just past the last prose character.

    Trailing whitespace and protected-region placeholders are not content, so
    a closer never lands after a code block that ends the text.
    """

    match = _TRAILING_NON_CONTENT_RE.search(text)
    return match.start() if match is not None else len(text)


class DelimiterBalancer:
    """Repair unmatched brackets and quotes; never raises, no-op when balanced.

    Args:
        quote_targets: Characters that an unclosed bracket is closed in front of
            when one of them follows the opener, instead of closing at the end.
    """

    def __init__(self, quote_targets: str = '"') -> None:
        """Initialize with the characters used as early-close targets."""

        self._quote_targets = quote_targets

    def scan(self, text: str, open_char: str, close_char: str) -> list[DelimiterSpan]:
        """Pair one bracket type and return spans ordered by opener offset.

        A closer pairs with the most recent unclosed opener. Closers with no
        opener are ignored.
        """

        pattern = re.compile(f"[{re.escape(open_char)}{re.escape(close_char)}]")
        closes: dict[int, int] = {}
        stack: list[int] = []
        opens: list[int] = []
        for match in pattern.finditer(text):
            index = match.start()
            if match.group(0) == open_char:
                stack.append(index)
                opens.append(index)
            elif stack:
                closes[stack.pop()] = index
        return [DelimiterSpan(open_index=index, close_index=closes.get(index)) for index in opens]

    def _insert_position(self, text: str, span: DelimiterSpan) -> int:
        """Choose where the synthetic closer for an unmatched opener goes."""

        candidates = [
            position
            for position in (text.find(target, span.open_index + 1) for target in self._quote_targets)
            if position != -1
        ]
        if not candidates:
            return _content_end(text)
        position = min(candidates)
        while position > span.open_index + 1 and text[position - 1].isspace():
            position -= 1
        return position

    def balance_brackets(self, text: str, open_char: str, close_char: str) -> tuple[str, int]:
        """Close unmatched openers of one bracket type; return text and insert count."""

        unmatched = [span for span in self.scan(text, open_char, close_char) if span.is_unmatched]
        if not unmatched:
            return text, 0

        positions = sorted((self._insert_position(text, span) for span in unmatched), reverse=True)
        result = text
        for position in positions:
            result = result[:position] + close_char + result[position:]
        return result, len(positions)

    def balance_double_quotes(self, text: str) -> tuple[str, int]:
        """Close an odd double quote at the end of the content."""

        if text.count('"') % 2 == 0:
            return text, 0
        end = _content_end(text)
        return text[:end] + '"' + text[end:], 1

    def balance_single_quotes(self, text: str) -> tuple[str, int]:
        """Close a dangling `'word` or `word '` at the end of the content."""

        match = _DANGLING_SINGLE_QUOTE_RE.search(text, 0, _content_end(text))
        if match is None:
            return text, 0
        end = match.end()
        return text[:end] + "'" + text[end:], 1

    def balance_with_report(self, text: str) -> DelimiterBalanceReport:
        """Balance brackets, then double quotes, then single quotes."""

        current = text
        inserted = 0
        for open_char, close_char in BRACKET_PAIRS:
            current, added = self.balance_brackets(current, open_char, close_char)
            inserted += added
        current, added = self.balance_double_quotes(current)
        inserted += added
        current, added = self.balance_single_quotes(current)
        inserted += added
        return DelimiterBalanceReport(balanced_text=current, inserted_count=inserted)

    def balance(self, text: str) -> str:
        """Return `text` with unmatched delimiters closed."""

        return self.balance_with_report(text).balanced_text
