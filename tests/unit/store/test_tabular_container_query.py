"""Unit tests for container queries."""

from __future__ import annotations

import pytest
from structlog.testing import capture_logs

from core.errors import HeaderIndexError, NoSuchHeaderError
from core.types import FilterOperator, RowFilter
from store.tabular_container import TabularContainer
from tests.fixture_paths import fixture_path


@pytest.fixture
def cities() -> TabularContainer:
    """Load the comma-delimited cities fixture without a backing file."""
    container = TabularContainer(delimiter=",", source_path=fixture_path("cities_comma.csv"))
    container.read_data()
    container.source_path = None
    return container


def test_get_rows_projects_columns(cities: TabularContainer) -> None:
    """Projections should follow the requested column order."""
    rows = cities.get_rows(columns="city;id")

    assert rows[0] == ["Munich", "1"]


def test_get_rows_unknown_projection_column_is_none(cities: TabularContainer) -> None:
    """Unknown projection columns should yield empty fields."""
    assert cities.get_rows([0], ["name", "email"]) == [["Alice", None]]


def test_get_rows_stops_at_out_of_range_index(cities: TabularContainer) -> None:
    """An out-of-range row index should end collection with a log entry."""
    with capture_logs() as logs:
        rows = cities.get_rows([0, 7, 1])

    assert rows == [["1", "Alice", "Munich"]]
    assert logs[0]["event"] == "row_index_out_of_range"


def test_get_rows_filter_with_unknown_header_raises(cities: TabularContainer) -> None:
    """Filters naming unknown headers should fail hard."""
    with pytest.raises(NoSuchHeaderError):
        cities.get_rows(row_filter=RowFilter().with_rule("country", "DE"))


def test_get_rows_returns_copies(cities: TabularContainer) -> None:
    """Changing a returned row should not change the container."""
    cities.get_rows()[0][1] = "Mallory"

    assert cities.get_value("name", 0) == "Alice"


def test_get_columns_transposes_rows(cities: TabularContainer) -> None:
    """Columns should be the transposed projection."""
    columns = cities.get_columns(["id", "city"], row_indexes=[0, 1])

    assert columns == [["1", "2"], ["Munich", "Berlin"]]


def test_get_column_accepts_index(cities: TabularContainer) -> None:
    """Columns should be addressable by position."""
    assert cities.get_column(1) == ["Alice", "Bob", "Carol"]
    with pytest.raises(HeaderIndexError):
        cities.get_column(9)


def test_get_value_uses_first_matching_row(cities: TabularContainer) -> None:
    """Without a row index the first filter match should be returned."""
    row_filter = RowFilter().with_rule("city", "Munich")

    assert cities.get_value("name", row_filter=row_filter) == "Alice"
    assert cities.get_value("name", row_filter=RowFilter().with_rule("city", "Paris")) is None


def test_get_value_of_filtered_out_row_is_none(cities: TabularContainer) -> None:
    """A row that fails the filter should not produce a value."""
    row_filter = RowFilter().with_rule("city", "Munich")

    assert cities.get_value("name", 1, row_filter) is None


def test_distinct_values_keep_first_seen_order(cities: TabularContainer) -> None:
    """Distinct values should be deduplicated in encounter order."""
    assert cities.get_distinct_values("city") == ["Munich", "Berlin"]


def test_numeric_value_lists(cities: TabularContainer) -> None:
    """Numeric helpers should coerce values and skip empty fields."""
    cities.add_row(["", "Dave", "Hamburg"])

    assert cities.get_values_as_int_list("id") == [1, 2, 3]
    assert cities.get_values_as_float_list("id") == [1.0, 2.0, 3.0]


def test_get_max_length(cities: TabularContainer) -> None:
    """Max length should measure the longest value of a column."""
    assert cities.get_max_length("city") == 6
    assert cities.get_max_length("missing") == 0


def test_get_rows_indexes_with_operators(cities: TabularContainer) -> None:
    """Row indexes should honor comparison and pattern operators."""
    by_id = RowFilter().with_rule("id", "2", FilterOperator.GREATER_OR_EQUAL)
    by_name = RowFilter().with_rule("name", "%o%", FilterOperator.LIKE)

    assert cities.get_rows_indexes(by_id) == [1, 2]
    assert cities.get_rows_indexes(by_name) == [1, 2]


def test_as_string_joins_records(cities: TabularContainer) -> None:
    """The string form should hold one delimited record per line."""
    assert cities.as_string() == "1,Alice,Munich\n2,Bob,Berlin\n3,Carol,Munich\n"
