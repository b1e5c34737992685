"""
Shared pytest fixtures for resultkit tests.

- Settings cache and RESULTKIT_* environment are reset around every test
- structlog configuration and bound context are restored after every test
- ``spy`` builds call-counting wrappers for "never invoked" assertions
"""

from __future__ import annotations

import os
from typing import Any, Callable

import pytest
import structlog

from resultkit.core.logging import clear_context
from resultkit.core.settings import reset_settings


class CallSpy:
    """Callable that records its arguments and delegates to ``fn``."""

    def __init__(self, fn: Callable[..., Any] = lambda *args: None):
        self._fn = fn
        self.calls: list[tuple[Any, ...]] = []

    def __call__(self, *args: Any) -> Any:
        self.calls.append(args)
        return self._fn(*args)

    @property
    def count(self) -> int:
        return len(self.calls)


@pytest.fixture
def spy() -> type[CallSpy]:
    """Factory: ``spy(lambda x: x + 1)``."""
    return CallSpy


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch, tmp_path):
    for key in list(os.environ):
        if key.startswith("RESULTKIT_"):
            monkeypatch.delenv(key)
    # Keep a developer's .env out of the tests.
    monkeypatch.chdir(tmp_path)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    clear_context()
    structlog.reset_defaults()
