"""Shared fixtures: keep tests away from the user's real macro files."""

from typing import Generator
import pytest
from ddocmac.config.settings import appsettings


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Disable user-level and configured macro files for every test."""
    monkeypatch.setattr(appsettings, "userMacros", False)
    monkeypatch.setattr(appsettings, "macroFiles", [])
    monkeypatch.setattr(appsettings, "beQuiet", False)
    monkeypatch.setattr(appsettings, "maxDepth", None)
    yield
