"""Pytest configuration for repository test runs."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture(autouse=True)
def _clear_sink_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep JSONSINK_* variables from the host shell out of tests."""
    for variable_name in list(os.environ):
        if variable_name.startswith("JSONSINK_"):
            monkeypatch.delenv(variable_name)
