"""Telemetry for pipeline runs.

This package emits deterministic stage events for auditing normalization runs.
"""

from .logger import RunLogger

__all__ = ["RunLogger"]
