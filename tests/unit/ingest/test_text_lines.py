"""Unit tests for line-level file primitives."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.errors import TabstoreIOError
from ingest.text_lines import (
    create_empty_file,
    read_lines,
    remove_enclosing_quotes,
    split_fields,
    write_field_rows,
)
from tests.fixture_paths import fixture_path


def test_read_lines_strips_terminators() -> None:
    """Reader should return physical lines without newline characters."""
    lines = read_lines(fixture_path("people.csv"))

    assert lines == ["id;name", "1;Alice", "2;Bob"]


def test_read_lines_raises_for_undecodable_file(tmp_path: Path) -> None:
    """Reader should wrap decode failures into an IO error."""
    source = tmp_path / "latin.csv"
    source.write_bytes("name\nJos\xe9\n".encode("latin-1"))

    with pytest.raises(TabstoreIOError):
        read_lines(source, "utf-8")


def test_write_field_rows_creates_parent_directories(tmp_path: Path) -> None:
    """Writer should create missing directories and end with a newline."""
    target = tmp_path / "nested" / "out.csv"

    write_field_rows(target, [["id", "name"], ["1", "Alice"]], ";")

    assert target.read_text(encoding="utf-8") == "id;name\n1;Alice\n"


def test_write_field_rows_writes_empty_file_without_rows(tmp_path: Path) -> None:
    """Writer should truncate the target when no rows are given."""
    target = tmp_path / "out.csv"
    target.write_text("stale\n", encoding="utf-8")

    write_field_rows(target, [], ";")

    assert target.read_text(encoding="utf-8") == ""


def test_create_empty_file_keeps_existing_content(tmp_path: Path) -> None:
    """Creating an existing file should not truncate it."""
    target = tmp_path / "kept.csv"
    target.write_text("id\n", encoding="utf-8")

    create_empty_file(target)

    assert target.read_text(encoding="utf-8") == "id\n"


def test_split_fields_keeps_trailing_empty_fields() -> None:
    """Trailing delimiters should produce empty fields."""
    assert split_fields("1;;", ";") == ["1", "", ""]


@pytest.mark.parametrize(
    ("raw_value", "expected"),
    [
        ('"Alice"', "Alice"),
        ("'Bob'", "Bob"),
        ("\"Carol'", "\"Carol'"),
        ('"', '"'),
        ("plain", "plain"),
    ],
)
def test_remove_enclosing_quotes(raw_value: str, expected: str) -> None:
    """Only one matching pair of enclosing quotes should be removed."""
    assert remove_enclosing_quotes(raw_value) == expected
