"""Shared test fixtures and helpers."""

from __future__ import annotations

import os

import pytest

from cdlhistory.cropscape.mock import MockCDLSource


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch):
    """Keep developer CDLHISTORY_* settings out of the tests."""
    for key in list(os.environ):
        if key.startswith("CDLHISTORY_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def mock_source() -> MockCDLSource:
    return MockCDLSource()
