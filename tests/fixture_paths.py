"""Shared fixture path helpers for tests."""

from __future__ import annotations

import shutil
from pathlib import Path

FIXTURES_ROOT = Path(__file__).resolve().parent / "fixtures"


def fixture_path(relative_path: str) -> Path:
    """Resolve a fixture path relative to tests/fixtures.

    Args:
        relative_path: Path under fixtures root.

    Returns:
        Absolute fixture path.
    """
    return FIXTURES_ROOT / relative_path


def copy_fixture(relative_path: str, target_dir: Path) -> Path:
    """Copy a fixture file into a writable directory.

    Containers write through to their backing file, so tests that mutate
    must never point at the checked-in fixture.

    Args:
        relative_path: Path under fixtures root.
        target_dir: Destination directory, usually ``tmp_path``.

    Returns:
        Path of the copy.
    """
    target = target_dir / Path(relative_path).name
    shutil.copyfile(fixture_path(relative_path), target)
    return target
