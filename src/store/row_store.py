"""In-memory record storage.

The row store is the single source of truth for container content. It
holds fixed-width string records and hands out copies only.
"""

from __future__ import annotations

from typing import Iterator, Sequence

from core.errors import RowIndexError


class RowStore:
    """Ordered sequence of fixed-width string records."""

    def __init__(self) -> None:
        self._records: list[list[str]] = []

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[list[str]]:
        return (list(record) for record in self._records)

    def get(self, row_index: int) -> list[str]:
        """Return a copy of one record.

        Raises:
            RowIndexError: If the row does not exist.
        """
        self._check_index(row_index)
        return list(self._records[row_index])

    def records(self) -> list[list[str]]:
        """Return copies of all records in order."""
        return [list(record) for record in self._records]

    def append(self, record: Sequence[str]) -> None:
        """Append one record."""
        self._records.append(list(record))

    def insert(self, row_index: int, record: Sequence[str]) -> None:
        """Insert a record before ``row_index``; past-the-end appends."""
        if row_index < 0 or row_index > len(self._records):
            raise RowIndexError(
                f"Cannot insert at row {row_index}: container holds {len(self._records)} rows."
            )
        self._records.insert(row_index, list(record))

    def replace(self, row_index: int, record: Sequence[str]) -> None:
        """Replace one record in place."""
        self._check_index(row_index)
        self._records[row_index] = list(record)

    def set_field(self, row_index: int, column_index: int, value: str) -> None:
        """Replace one field in place."""
        self._check_index(row_index)
        self._records[row_index][column_index] = value

    def delete(self, row_index: int) -> None:
        """Remove one record."""
        self._check_index(row_index)
        del self._records[row_index]

    def delete_many(self, row_indexes: Sequence[int]) -> None:
        """Remove several records; indexes refer to positions before removal."""
        for row_index in sorted(set(row_indexes), reverse=True):
            self.delete(row_index)

    def insert_column(self, column_index: int, fill_value: str = "") -> None:
        """Insert one field at ``column_index`` into every record."""
        for record in self._records:
            record.insert(column_index, fill_value)

    def append_column(self, fill_value: str = "") -> None:
        """Extend every record by one trailing field."""
        for record in self._records:
            record.append(fill_value)

    def _check_index(self, row_index: int) -> None:
        if row_index < 0 or row_index >= len(self._records):
            raise RowIndexError(
                f"Row index {row_index} is out of range. "
                f"Container holds {len(self._records)} rows."
            )
