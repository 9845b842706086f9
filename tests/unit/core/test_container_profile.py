"""Unit tests for YAML container profiles."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.config import TabstoreConfig
from core.container_profile import load_container_profile
from core.errors import TabstoreConfigError
from core.types import FilterOperator, FilterRule, Orientation
from tests.fixture_paths import fixture_path


def _base_config() -> TabstoreConfig:
    return TabstoreConfig(
        delimiter=";",
        header_index=0,
        orientation=Orientation.ROW,
        encoding="utf-8",
    )


def test_load_container_profile_reads_fixture() -> None:
    """Profile should expose delimiter, metadata, and filter rules."""
    profile = load_container_profile(str(fixture_path("profile.yaml")), _base_config())

    assert profile.delimiter == ","
    assert dict(profile.metadata) == {"source": "cities_comma.csv"}
    assert profile.row_filter.rules == (
        FilterRule(header_name="city", operator=FilterOperator.EQUALS, value="Munich"),
    )


def test_load_container_profile_falls_back_to_config(tmp_path: Path) -> None:
    """Settings missing from the profile should come from the base config."""
    profile_file = tmp_path / "minimal.yaml"
    profile_file.write_text("version: 1\norientation: column\n", encoding="utf-8")

    profile = load_container_profile(str(profile_file), _base_config())

    assert (profile.delimiter, profile.orientation, profile.row_filter.is_empty) == (
        ";",
        Orientation.COLUMN,
        True,
    )


def test_load_container_profile_stringifies_numeric_rule_values(tmp_path: Path) -> None:
    """YAML numbers in rule values should be compared as text."""
    profile_file = tmp_path / "numeric.yaml"
    profile_file.write_text(
        "version: 1\nfilter:\n  - header: age\n    operator: '>='\n    value: 30\n",
        encoding="utf-8",
    )

    profile = load_container_profile(str(profile_file), _base_config())

    assert profile.row_filter.rules[0].value == "30"


@pytest.mark.parametrize(
    "payload",
    [
        "version: 2\n",
        "delimiter: ','\n",
        "version: 1\nunknown: true\n",
        "version: 1\nfilter:\n  - operator: '='\n",
        "version: 1\nfilter:\n  - header: a\n    operator: between\n",
        "version: 1\nmetadata: [a, b]\n",
        "",
    ],
)
def test_load_container_profile_rejects_invalid_payloads(tmp_path: Path, payload: str) -> None:
    """Schema violations should raise config errors."""
    profile_file = tmp_path / "invalid.yaml"
    profile_file.write_text(payload, encoding="utf-8")

    with pytest.raises(TabstoreConfigError):
        load_container_profile(str(profile_file), _base_config())


def test_load_container_profile_raises_for_missing_file(tmp_path: Path) -> None:
    """Missing profile files should raise config errors."""
    with pytest.raises(TabstoreConfigError):
        load_container_profile(str(tmp_path / "missing.yaml"), _base_config())
