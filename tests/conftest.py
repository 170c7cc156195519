"""Shared pytest fixtures for validated_method tests."""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

import pytest
from structlog.testing import capture_logs

from validated_method.config.settings import reset_settings


@pytest.fixture(autouse=True)
def _reset_global_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Start every test from the code defaults, with no quiet override."""
    monkeypatch.delenv("VALIDATED_METHOD_QUIET", raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def captured_logs() -> Generator[list[dict[str, Any]]]:
    """structlog events emitted during the test."""
    with capture_logs() as logs:
        yield logs

