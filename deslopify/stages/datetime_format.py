"""Date and time format normalization stage."""

from __future__ import annotations

import re

from ..text.rules import Rule
from .base import RuleStage

_US_DATE_RE = re.compile(r"\b(\d{1,2})/(\d{1,2})/(\d{4})\b")


def _us_date_to_iso(match: re.Match[str]) -> str:
    """Rewrite `M/D/YYYY` as zero-padded `YYYY-MM-DD`."""

    month, day, year = match.groups()
    return f"{year}-{month.zfill(2)}-{day.zfill(2)}"


class DateTimeStage(RuleStage):
    """Standardize numeric dates and glued time suffixes.

    Dates written with month names are already readable and are left alone.
    """

    name = "datetime"

    def default_rules(self) -> list[Rule]:
        """Return date rules first, then meridiem and time-zone spacing rules."""

        return [
            Rule.create(_US_DATE_RE, _us_date_to_iso),
            Rule.create(re.compile(r"(\d{1,2}:\d{2})([AP]M)\b", re.IGNORECASE), r"\1 \2"),
            Rule.create(re.compile(r"(\d{1,2}:\d{2})([A-Z]{3,4})\b"), r"\1 \2"),
        ]
