"""Unit tests for core config parsing."""

from __future__ import annotations

import pytest

from core.config import TabstoreConfig
from core.errors import TabstoreConfigError
from core.types import Orientation


def test_from_env_uses_defaults(clean_env: None) -> None:
    """Config should fall back to semicolon, row layout, header line 0."""
    config = TabstoreConfig.from_env()

    assert (config.delimiter, config.orientation, config.header_index) == (
        ";",
        Orientation.ROW,
        0,
    )


def test_from_env_reads_orientation_case_insensitively(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should accept orientation names in any case."""
    monkeypatch.setenv("TABSTORE_ORIENTATION", "COLUMN")

    config = TabstoreConfig.from_env()

    assert config.orientation is Orientation.COLUMN


def test_from_env_raises_for_invalid_header_index(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fail for a non-numeric header index."""
    monkeypatch.setenv("TABSTORE_HEADER_INDEX", "first")

    with pytest.raises(TabstoreConfigError):
        TabstoreConfig.from_env()


def test_from_env_raises_for_negative_header_index(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should reject header indexes below zero."""
    monkeypatch.setenv("TABSTORE_HEADER_INDEX", "-1")

    with pytest.raises(TabstoreConfigError):
        TabstoreConfig.from_env()


def test_from_env_raises_for_unknown_orientation(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should reject orientation names it does not know."""
    monkeypatch.setenv("TABSTORE_ORIENTATION", "diagonal")

    with pytest.raises(TabstoreConfigError):
        TabstoreConfig.from_env()
