"""Integration tests for read, mutate and export round trips."""

from __future__ import annotations

from pathlib import Path

from core.config import TabstoreConfig
from core.types import FilterOperator, Orientation, RowFilter
from store.container_sdk import TabstoreClient
from tests.fixture_paths import copy_fixture, fixture_path


def _client(orientation: Orientation = Orientation.ROW, delimiter: str = ";") -> TabstoreClient:
    return TabstoreClient(
        TabstoreConfig(
            delimiter=delimiter,
            header_index=0,
            orientation=orientation,
            encoding="utf-8",
        )
    )


def test_row_round_trip_preserves_records(tmp_path: Path) -> None:
    """A row file read and written back should yield the same records."""
    source = copy_fixture("cities_comma.csv", tmp_path)
    client = _client(delimiter=",")
    original = client.open(source)
    target = tmp_path / "copy.csv"

    original.write_data(target)
    reread = client.open(target)

    assert reread.headers == original.headers
    assert reread.get_rows() == original.get_rows()


def test_column_round_trip_preserves_records(tmp_path: Path) -> None:
    """A column file read and written back should yield the same records."""
    source = copy_fixture("settings_columns.csv", tmp_path)
    client = _client(Orientation.COLUMN)
    original = client.open(source)
    target = tmp_path / "copy.csv"

    original.write_data(target)
    reread = client.open(target)

    assert reread.header_names == original.header_names
    assert reread.get_rows() == original.get_rows()


def test_mutations_persist_across_reopen(people_file: Path) -> None:
    """Write-through mutations should be visible to a fresh container."""
    client = _client()
    container = client.open(people_file)

    container.add_row(["3", "Carol"])
    container.set_values("city", "Munich", all_occurrences=True)
    container.delete_rows(RowFilter().with_rule("id", "2"))
    reopened = client.open(people_file)

    assert reopened.header_names == ["id", "name", "city"]
    assert reopened.get_rows() == [["1", "Alice", "Munich"], ["3", "Carol", "Munich"]]


def test_row_to_column_conversion_and_back(tmp_path: Path) -> None:
    """Converting to column layout and back should keep every record."""
    row_client = _client(delimiter=",")
    column_client = row_client.with_orientation(Orientation.COLUMN)
    source = row_client.open(fixture_path("cities_comma.csv"))
    columns_file = tmp_path / "cities_columns.csv"

    as_columns = column_client.new_container()
    as_columns.append_data_container(source)
    as_columns.export_container(columns_file)
    back = column_client.open(columns_file)

    assert columns_file.read_text(encoding="utf-8").splitlines()[0] == "id,1,2,3"
    assert back.get_rows() == source.get_rows()


def test_combined_sources_query(tmp_path: Path) -> None:
    """Queries should work across files combined with reordered headers."""
    client = _client()
    combined = client.combine([fixture_path("people.csv"), fixture_path("people_permuted.csv")])
    target = tmp_path / "combined.csv"

    combined.write_data(target)
    reread = client.open(target)
    late_rows = RowFilter().with_rule("id", "3", FilterOperator.GREATER_OR_EQUAL)

    assert reread.get_column("name", row_filter=late_rows) == ["Carol", "Dave"]


def test_single_column_round_trip_keeps_empty_values(tmp_path: Path) -> None:
    """Empty values in a single-column file should survive export and re-read."""
    client = _client()
    container = client.new_container()
    container.set_headers(["value"])
    container.add_rows([["a"], [""], ["b"]])
    target = tmp_path / "values.csv"

    container.export_container(target)
    reread = client.open(target)

    assert reread.get_rows() == [["a"], [""], ["b"]]
