"""Placeholder-based protection of verbatim regions.

Responsibilities:
- Move fenced and indented code blocks out of the working text.
- Substitute placeholders that no default rewrite rule can match.
- Restore every region byte-for-byte and detect placeholder interference.

Placeholders are built only from private-use code points: an opening marker,
the region id spelled with one private-use digit per decimal digit, and a
closing marker. They contain no whitespace, word characters, quotes, or
brackets, and count as one visual line.

Marker characters that already occur in the input are escaped before
extraction and unescaped after restoration, so input text never forms a
token.
"""

from __future__ import annotations

import re

from ..errors import ProtectedRegionError
from ..models.datatypes import ProtectedRegion

PLACEHOLDER_OPEN = chr(0xE000)
PLACEHOLDER_CLOSE = chr(0xE001)
PLACEHOLDER_ESCAPE = chr(0xE002)
_ESCAPED_OPEN = chr(0xE003)
_DIGIT_BASE = 0xE010
PLACEHOLDER_RE = re.compile(
    f"{PLACEHOLDER_OPEN}[{chr(_DIGIT_BASE)}-{chr(_DIGIT_BASE + 9)}]+{PLACEHOLDER_CLOSE}"
)
_ESCAPE_SEQUENCE_RE = re.compile(f"{PLACEHOLDER_ESCAPE}([{PLACEHOLDER_ESCAPE}{_ESCAPED_OPEN}])")

_FENCED_BLOCK_RE = re.compile(r"```.*?```", re.DOTALL)
# Runs of lines indented by 4+ spaces; blank lines inside a run stay in the run.
_INDENTED_BLOCK_RE = re.compile(
    r"^ {4,}\S[^\n]*(?:(?:\n[ \t]*)*\n {4,}\S[^\n]*)*",
    re.MULTILINE,
)


def placeholder_for(placeholder_id: int) -> str:
    """Return the placeholder token for a region id."""

    digits = "".join(chr(_DIGIT_BASE + int(digit)) for digit in str(placeholder_id))
    return f"{PLACEHOLDER_OPEN}{digits}{PLACEHOLDER_CLOSE}"


def contains_placeholder(text: str) -> bool:
    """Return whether `text` still holds any placeholder token."""

    return PLACEHOLDER_RE.search(text) is not None


def escape_markers(text: str) -> str:
    """Rewrite marker characters already in `text` so no token can form from them."""

    return text.replace(PLACEHOLDER_ESCAPE, PLACEHOLDER_ESCAPE * 2).replace(
        PLACEHOLDER_OPEN, PLACEHOLDER_ESCAPE + _ESCAPED_OPEN
    )


def unescape_markers(text: str) -> str:
    """Reverse `escape_markers`."""

    return _ESCAPE_SEQUENCE_RE.sub(
        lambda match: PLACEHOLDER_OPEN if match.group(1) == _ESCAPED_OPEN else PLACEHOLDER_ESCAPE,
        text,
    )


class RegionProtector:
    """Extract code regions before rewriting and restore them afterwards.

    The protector keeps no per-call state: `extract` returns the side table
    that `restore` consumes.
    """

    def __init__(self, fenced: bool = True, indented: bool = True) -> None:
        """Initialize which region kinds are recognized."""

        self._patterns = [
            pattern
            for pattern, enabled in ((_FENCED_BLOCK_RE, fenced), (_INDENTED_BLOCK_RE, indented))
            if enabled
        ]

    def extract(self, text: str) -> tuple[str, list[ProtectedRegion]]:
        """Replace regions with placeholders, fenced blocks first.

        Ids are assigned from 0 in order of appearance within each region kind.
        The masked text and region bodies hold escaped marker characters until
        `restore` unescapes the final text.
        """

        regions: list[ProtectedRegion] = []

        def _stash(match: re.Match[str]) -> str:
            region = ProtectedRegion(placeholder_id=len(regions), verbatim=match.group(0))
            regions.append(region)
            return placeholder_for(region.placeholder_id)

        masked = escape_markers(text)
        for pattern in self._patterns:
            masked = pattern.sub(_stash, masked)
        return masked, regions

    def restore(self, text: str, regions: list[ProtectedRegion]) -> str:
        """Put every region back and verify no placeholder survives.

        Regions are restored newest first, so an indented region that swallowed
        a fenced placeholder is expanded before that placeholder is replaced.

        Raises:
            ProtectedRegionError: If a placeholder is missing, duplicated, or
                still present after restoration.
        """

        result = text
        for region in reversed(regions):
            token = placeholder_for(region.placeholder_id)
            occurrences = result.count(token)
            if occurrences != 1:
                raise ProtectedRegionError(
                    f"Placeholder for protected region {region.placeholder_id} "
                    f"found {occurrences} times; a rewrite rule altered it."
                )
            result = result.replace(token, region.verbatim)
        if contains_placeholder(result):
            raise ProtectedRegionError("Unrestored placeholder left in output text.")
        return unescape_markers(result)
