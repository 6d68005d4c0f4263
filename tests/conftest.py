"""
tests/conftest.py -- Shared fixtures for glvdctl tests.

Every test starts from default settings and auto-detected color: GLVD_*
variables from the developer's shell are removed, the get_settings()
singleton is cleared, and the process-wide color override is reset.
"""

from __future__ import annotations

import os
from collections.abc import Generator

import pytest

from glvd.config import get_settings
from glvd.styles import reset_color


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Generator[None, None, None]:
    for name in list(os.environ):
        if name.startswith("GLVD_") or name in ("NO_COLOR", "FORCE_COLOR"):
            monkeypatch.delenv(name, raising=False)
    # Keep a stray .env in the working directory out of Settings().
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    reset_color()
    yield
    get_settings.cache_clear()
    reset_color()
