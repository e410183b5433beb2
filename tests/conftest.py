"""Shared pytest configuration for blenodoc tests."""

from pathlib import Path

import pytest

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES


@pytest.fixture
def handlers_js() -> Path:
    return FIXTURES / "handlers.js"
