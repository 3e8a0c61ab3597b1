"""Shared fixtures for the Snapchat adapter tests."""

from __future__ import annotations
import os
from collections.abc import Callable, Iterator
from pathlib import Path
import pytest
from snapchat_auth import config


FIXTURES = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Ensure SNAPCHAT_* variables from the host never leak into tests."""
    for key in list(os.environ):
        if key.startswith("SNAPCHAT_"):
            monkeypatch.delenv(key, raising=False)
    config.get_settings(refresh=True)
    yield
    config._load_settings.cache_clear()


@pytest.fixture
def load_fixture() -> Callable[[str], str]:
    """Return a reader for the JSON fixtures directory."""

    def _read(name: str) -> str:
        return (FIXTURES / name).read_text(encoding="utf-8")

    return _read
