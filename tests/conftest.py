"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from tests.fixture_paths import copy_fixture


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove TABSTORE_* overrides so defaults apply."""
    for name in (
        "TABSTORE_DELIMITER",
        "TABSTORE_HEADER_INDEX",
        "TABSTORE_ORIENTATION",
        "TABSTORE_ENCODING",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def people_file(tmp_path: Path) -> Path:
    """Copy the ``id;name`` fixture into a writable location."""
    return copy_fixture("people.csv", tmp_path)
