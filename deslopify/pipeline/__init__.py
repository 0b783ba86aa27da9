"""Deslopify pipeline package.

This package contains stage orchestration and telemetry helpers for
normalization runs.
"""

from .orchestrator import Deslopifier, deslopify

__all__ = ["Deslopifier", "deslopify"]
