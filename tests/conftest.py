"""Test-wide fixtures."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    """Undo logging configuration done by CLI tests (it binds captured streams)."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR
