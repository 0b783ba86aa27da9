"""Shared pytest fixtures for the Deslopify test suite."""

from __future__ import annotations

import pytest
from typer.testing import CliRunner

from deslopify.pipeline import Deslopifier


@pytest.fixture
def pipeline() -> Deslopifier:
    """Provide a fresh pipeline with default rules and configuration."""

    return Deslopifier()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Typer CLI runner."""

    return CliRunner()
