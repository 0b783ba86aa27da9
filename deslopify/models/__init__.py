"""Shared typed data models for Deslopify.

This package contains dataclasses used across stage modules to avoid
cross-module coupling and circular imports.
"""

from .datatypes import (
    DelimiterBalanceReport,
    DelimiterSpan,
    NormalizationReport,
    ProtectedRegion,
)

__all__ = [
    "DelimiterBalanceReport",
    "DelimiterSpan",
    "NormalizationReport",
    "ProtectedRegion",
]
