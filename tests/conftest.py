# tests/conftest.py
"""Shared test fixtures."""

from __future__ import annotations

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

from utf8codec import registration, strategies

# Add scripts/ to sys.path so we can import generate_tables
sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))


@pytest.fixture
def no_strategy_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Unset UTF8CODEC_STRATEGY and forget any cached automatic choice."""
    monkeypatch.delenv(strategies.STRATEGY_ENV_VAR, raising=False)
    strategies._auto_select.cache_clear()
    yield
    strategies._auto_select.cache_clear()


@pytest.fixture
def registered_codec() -> Iterator[str]:
    """Register the pure-utf-8 codec for the duration of one test."""
    registration.register()
    yield registration.CODEC_NAME
    registration.unregister()
