"""Tabular container facade.

This module composes the header registry, row store, metadata fields,
header reconciler, filter evaluator and orientation translator into one
read/query/mutate/write API over a delimited text source.

Failure contract: structural problems (a filter naming an unknown
header, a positional mutation of a missing row, an I/O failure) raise a
``TabstoreError``. Shape problems (wrong field counts, out-of-range
reads, incompatible appends, unsupported orientations) are logged and
degrade to an empty or sentinel result.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Sequence

from core.config import TabstoreConfig
from core.constants import (
    DEFAULT_COLUMN_DELIMITER,
    DEFAULT_ENCODING,
    DEFAULT_HEADER_INDEX,
    HEADER_LIST_SEPARATOR,
)
from core.container_profile import profile_to_config
from core.errors import HeaderConflictError, HeaderIndexError, TabstoreIOError
from core.logging_config import get_logger
from core.types import ContainerProfile, HeaderComparison, HeaderState, Orientation, RowFilter
from ingest.orientation import ParsedLayout, parse_layout, render_lines
from ingest.text_lines import create_empty_file, read_lines, write_field_rows
from store.header_reconciler import compare_headers, reorder_values
from store.header_registry import HeaderRegistry
from store.metadata_fields import MetadataFields
from store.row_filtering import matches_filter
from store.row_store import RowStore

logger = get_logger(__name__)

ColumnSelection = str | Sequence[str] | None
RowValues = Sequence[str | None]


class TabularContainer:
    """In-memory row/column model backed by an optional delimited file."""

    def __init__(
        self,
        delimiter: str = DEFAULT_COLUMN_DELIMITER,
        orientation: Orientation | str = Orientation.ROW,
        header_index: int = DEFAULT_HEADER_INDEX,
        encoding: str = DEFAULT_ENCODING,
        source_path: str | Path | None = None,
        row_filter: RowFilter | None = None,
    ) -> None:
        """Create an empty container.

        Args:
            delimiter: Column delimiter of the backing file.
            orientation: Physical layout, fixed for the container lifetime.
            header_index: Header line index for row layout.
            encoding: Text encoding of the backing file.
            source_path: Backing file; mutations write through to it.
            row_filter: Active filter applied to ingested and added rows.
        """
        self._delimiter = delimiter
        self._orientation = orientation
        self._header_index = header_index
        self._encoding = encoding
        self._source_path = Path(source_path) if source_path is not None else None
        self._row_filter = row_filter or RowFilter()
        self._headers = HeaderRegistry()
        self._rows = RowStore()
        self._metadata = MetadataFields()
        self._preamble: tuple[str, ...] = ()

    @classmethod
    def from_config(
        cls,
        config: TabstoreConfig,
        source_path: str | Path | None = None,
    ) -> "TabularContainer":
        """Create a container using runtime configuration settings."""
        return cls(
            delimiter=config.delimiter,
            orientation=config.orientation,
            header_index=config.header_index,
            encoding=config.encoding,
            source_path=source_path,
        )

    @classmethod
    def from_profile(
        cls,
        profile: ContainerProfile,
        source_path: str | Path | None = None,
    ) -> "TabularContainer":
        """Create a container with a profile's layout, metadata and filter."""
        container = cls.from_config(profile_to_config(profile), source_path=source_path)
        container.row_filter = profile.row_filter
        for name, value in profile.metadata.items():
            container.put_metadata(name, value)
        return container

    # ------------------------------------------------------------------
    # settings
    # ------------------------------------------------------------------

    @property
    def delimiter(self) -> str:
        return self._delimiter

    @delimiter.setter
    def delimiter(self, value: str) -> None:
        self._delimiter = value

    @property
    def orientation(self) -> Orientation | str:
        return self._orientation

    @property
    def header_index(self) -> int:
        return self._header_index

    @header_index.setter
    def header_index(self, value: int) -> None:
        self._header_index = value

    @property
    def source_path(self) -> Path | None:
        return self._source_path

    @source_path.setter
    def source_path(self, value: str | Path | None) -> None:
        self._source_path = Path(value) if value is not None else None

    @property
    def row_filter(self) -> RowFilter:
        return self._row_filter

    @row_filter.setter
    def row_filter(self, value: RowFilter | None) -> None:
        self._row_filter = value or RowFilter()

    # ------------------------------------------------------------------
    # headers and metadata
    # ------------------------------------------------------------------

    @property
    def headers(self) -> dict[str, int]:
        """Return an owned ``name -> index`` copy, metadata fields included."""
        return self._all_headers()

    @property
    def header_names(self) -> list[str]:
        """Return header names in column order, metadata fields last."""
        return self._metadata.extend_headers(self._headers.names())

    @property
    def metadata(self) -> dict[str, str]:
        """Return an owned copy of the metadata fields."""
        return self._metadata.as_mapping()

    @property
    def row_count(self) -> int:
        return len(self._rows)

    @property
    def column_count(self) -> int:
        return len(self._headers) + len(self._metadata)

    def add_column(self, name: str, use_existing: bool = False) -> str | None:
        """Add an intrinsic column and extend every record by an empty field.

        Args:
            name: Header name; collisions with columns or metadata fields
                become ``name_2``, ``name_3``...
            use_existing: Leave an existing column or metadata field
                untouched.

        Returns:
            Registered name, or ``None`` when nothing was added.
        """
        registered = self._headers.add_column(
            name,
            use_existing=use_existing,
            reserved=self._metadata,
        )
        if registered is not None:
            self._rows.insert_column(len(self._headers) - 1)
        return registered

    def set_headers(self, names: Sequence[str]) -> list[str]:
        """Append intrinsic columns in bulk using the collision rule."""
        registered: list[str] = []
        for name in names:
            added = self.add_column(name)
            if added is not None:
                registered.append(added)
        return registered

    def put_metadata(self, name: str, value: str) -> None:
        """Declare or update a metadata field.

        Records created afterwards carry ``value``; records that exist when
        a new field is declared receive an empty value for it.

        Raises:
            HeaderConflictError: If ``name`` is already an intrinsic header.
        """
        if name in self._headers:
            raise HeaderConflictError(
                f"Metadata field '{name}' collides with an intrinsic header. "
                "Declare metadata before reading or choose another name."
            )
        if self._metadata.put(name, value):
            self._rows.append_column("")

    def get_header_index(self, name: str) -> int:
        """Return the column index of a header, or -1 when unknown."""
        return self._all_headers().get(name, -1)

    def get_header_name(self, index: int) -> str:
        """Return the header name at a column index.

        Raises:
            HeaderIndexError: If no header has that index.
        """
        intrinsic_count = len(self._headers)
        if index < intrinsic_count:
            return self._headers.name_at(index)
        metadata_names = self._metadata.names()
        if index - intrinsic_count < len(metadata_names):
            return metadata_names[index - intrinsic_count]
        raise HeaderIndexError(
            f"No header is assigned to index {index}. "
            f"Valid indexes are 0..{self.column_count - 1}."
        )

    def get_headers_indexes(self, headers: ColumnSelection = None) -> list[int]:
        """Return column indexes for headers; all headers when none are named."""
        names = _column_names(headers) or self.header_names
        all_headers = self._all_headers()
        return [all_headers.get(name, -1) for name in names]

    def get_header_occurrences(self, pattern: str) -> int:
        """Count header names fully matching a regular expression."""
        compiled = re.compile(pattern)
        return sum(1 for name in self.header_names if compiled.fullmatch(name))

    def check_header(self, names: Sequence[str]) -> HeaderState:
        """Classify a header set against this container's headers."""
        return compare_headers(self._all_headers(), names).state

    # ------------------------------------------------------------------
    # read / import
    # ------------------------------------------------------------------

    def read_data(self, row_filter: RowFilter | None = None) -> None:
        """Load the backing file into the container.

        Args:
            row_filter: Optional filter that becomes the active filter.
                Rows that do not match it are not loaded.

        Raises:
            TabstoreIOError: If the backing file exists but is unreadable.
        """
        if row_filter is not None:
            self.row_filter = row_filter
        if self._source_path is None or not self._source_path.exists():
            logger.info("source_not_found", path=str(self._source_path))
            return
        lines = read_lines(self._source_path, self._encoding)
        layout = parse_layout(self._orientation, lines, self._delimiter, self._header_index)
        if layout is not None:
            self._ingest_layout(layout)

    def append_data(self, source_path: str | Path, delimiter: str | None = None) -> None:
        """Read another file into this container, reconciling headers.

        The appended file becomes the backing file of the container.
        """
        self._source_path = Path(source_path)
        if delimiter is not None:
            self._delimiter = delimiter
        self.read_data()

    def append_data_container(self, other: "TabularContainer") -> int:
        """Append the records of another container.

        Matching headers are concatenated, permuted headers are reordered
        into this container's column order, and incompatible headers
        reject the append with a warning. A container without intrinsic
        headers adopts the incoming ones. Incoming columns named like
        this container's metadata fields are replaced by its current
        metadata values.

        Returns:
            Number of appended rows; 0 for a rejected append.
        """
        incoming_headers = other.header_names
        positions = self._intrinsic_positions(incoming_headers)
        intrinsic_headers = [incoming_headers[position] for position in positions]
        if len(self._headers) == 0:
            self.set_headers(intrinsic_headers)
        comparison = compare_headers(self._headers.as_mapping(), intrinsic_headers)
        if comparison.state is HeaderState.INCOMPATIBLE:
            logger.warning(
                "append_headers_incompatible",
                headers=self.header_names,
                incoming=incoming_headers,
            )
            return 0
        width = len(self._headers)
        incoming_records = other.get_rows()
        for record in incoming_records:
            values = [record[position] for position in positions]
            self._rows.append(self._metadata.inject(reorder_values(values, comparison, width)))
        return len(incoming_records)

    def _ingest_layout(self, layout: ParsedLayout) -> None:
        if not layout.header_names:
            logger.warning("source_without_headers", path=str(self._source_path))
            return
        if layout.preamble and not self._preamble:
            self._preamble = layout.preamble
        positions = self._intrinsic_positions(layout.header_names)
        comparison = self._reconcile_incoming(
            [layout.header_names[position] for position in positions]
        )
        width = len(self._headers)
        for values in layout.records:
            intrinsic_values = [values[position] for position in positions]
            self.add_row(reorder_values(intrinsic_values, comparison, width))

    def _intrinsic_positions(self, header_names: Sequence[str]) -> list[int]:
        """Return positions of incoming headers that are not metadata fields."""
        return [
            position
            for position, name in enumerate(header_names)
            if name not in self._metadata
        ]

    def _reconcile_incoming(self, incoming_headers: Sequence[str]) -> HeaderComparison:
        if len(self._headers) == 0:
            self.set_headers(incoming_headers)
            identity = {index: index for index in range(len(incoming_headers))}
            return HeaderComparison(state=HeaderState.MATCH, index_map=identity)
        comparison = compare_headers(self._headers.as_mapping(), incoming_headers)
        if comparison.state is HeaderState.INCOMPATIBLE:
            for name in incoming_headers:
                self.add_column(name, use_existing=True)
            comparison = compare_headers(self._headers.as_mapping(), incoming_headers)
        if comparison.state is HeaderState.PERMUTED:
            logger.info("incoming_headers_reordered", incoming=list(incoming_headers))
        return comparison

    # ------------------------------------------------------------------
    # queries
    # ------------------------------------------------------------------

    def get_rows(
        self,
        row_indexes: Sequence[int] = (),
        columns: ColumnSelection = None,
        row_filter: RowFilter | None = None,
    ) -> list[list[str | None]]:
        """Return matching records, optionally projected onto columns.

        Soft failure: an out-of-range row index is logged and ends the
        collection; unknown projection columns yield ``None`` fields.

        Args:
            row_indexes: Rows to consider; all rows when empty.
            columns: Projection as ``;``-delimited names or a sequence.
            row_filter: Filter the rows must satisfy.

        Returns:
            Copies of matching records, possibly empty.

        Raises:
            NoSuchHeaderError: If the filter names an unknown header.
        """
        all_headers = self._all_headers()
        names = _column_names(columns)
        candidates = list(row_indexes) if row_indexes else range(len(self._rows))
        selected: list[list[str | None]] = []
        for row_index in candidates:
            if row_index < 0 or row_index >= len(self._rows):
                logger.info("row_index_out_of_range", row=row_index, row_count=len(self._rows))
                break
            record = self._rows.get(row_index)
            if not matches_filter(record, row_filter, all_headers, row_index):
                continue
            if not names:
                selected.append(list(record))
            else:
                selected.append(
                    [record[all_headers[name]] if name in all_headers else None for name in names]
                )
        return selected

    def get_row(
        self,
        row_index: int,
        columns: ColumnSelection = None,
        row_filter: RowFilter | None = None,
    ) -> list[str | None]:
        """Return one record, or an empty list when it is missing or filtered out."""
        rows = self.get_rows([row_index], columns, row_filter)
        return rows[0] if rows else []

    def get_row_as_map(self, row_index: int) -> dict[str, str | None]:
        """Return one record keyed by header name; empty when missing."""
        record = self.get_row(row_index)
        if not record:
            return {}
        return dict(zip(self.header_names, record))

    def get_columns(
        self,
        columns: ColumnSelection = None,
        row_indexes: Sequence[int] = (),
        row_filter: RowFilter | None = None,
    ) -> list[list[str | None]]:
        """Return matching records transposed into columns."""
        rows = self.get_rows(row_indexes, columns, row_filter)
        if not rows:
            return []
        return [list(column) for column in zip(*rows)]

    def get_column(
        self,
        column: str | int,
        row_indexes: Sequence[int] = (),
        row_filter: RowFilter | None = None,
    ) -> list[str | None]:
        """Return the values of one column for matching rows."""
        name = self.get_header_name(column) if isinstance(column, int) else column
        columns = self.get_columns([name], row_indexes, row_filter)
        return columns[0] if columns else []

    def get_values_as_list(
        self,
        header: str,
        row_indexes: Sequence[int] = (),
        row_filter: RowFilter | None = None,
    ) -> list[str | None]:
        return self.get_column(header, row_indexes, row_filter)

    def get_value(
        self,
        header: str | int,
        row_index: int | None = None,
        row_filter: RowFilter | None = None,
    ) -> str | None:
        """Return the first matching value of a column.

        Args:
            header: Header name or column index.
            row_index: Row to read; the first matching row when ``None``.
            row_filter: Filter the row must satisfy.

        Returns:
            Field value, or ``None`` when nothing matches.
        """
        row_indexes = [] if row_index is None or row_index < 0 else [row_index]
        values = self.get_column(header, row_indexes, row_filter)
        return values[0] if values else None

    def get_distinct_values(
        self,
        header: str,
        row_filter: RowFilter | None = None,
    ) -> list[str | None]:
        """Return the distinct values of a column in first-seen order."""
        return list(dict.fromkeys(self.get_column(header, row_filter=row_filter)))

    def get_values_as_float_list(
        self,
        header: str,
        row_filter: RowFilter | None = None,
    ) -> list[float]:
        """Return non-empty column values coerced to floats.

        Raises:
            ValueError: If a non-empty value is not numeric.
        """
        return [float(value) for value in self.get_column(header, row_filter=row_filter) if value]

    def get_values_as_int_list(
        self,
        header: str,
        row_filter: RowFilter | None = None,
    ) -> list[int]:
        """Return non-empty column values coerced to integers.

        Raises:
            ValueError: If a non-empty value is not an integer.
        """
        return [int(value) for value in self.get_column(header, row_filter=row_filter) if value]

    def get_max_length(self, header: str) -> int:
        """Return the length of the longest value in a column."""
        return max((len(value) for value in self.get_column(header) if value), default=0)

    def get_rows_indexes(self, row_filter: RowFilter | None = None) -> list[int]:
        """Return ascending indexes of rows matching a filter.

        Raises:
            NoSuchHeaderError: If the filter names an unknown header.
        """
        all_headers = self._all_headers()
        return [
            row_index
            for row_index, record in enumerate(self._rows)
            if matches_filter(record, row_filter, all_headers, row_index)
        ]

    def as_string(self) -> str:
        """Return all records joined by the delimiter, one per line."""
        return "".join(f"{self._delimiter.join(record)}\n" for record in self._rows)

    # ------------------------------------------------------------------
    # mutation
    # ------------------------------------------------------------------

    def add_row(self, values: RowValues) -> bool:
        """Append a record after injecting metadata values.

        Short records are padded with empty values. Records wider than the
        header set are rejected with a warning. When an active filter is
        set, non-matching records are silently skipped.

        Returns:
            True when the record was stored.

        Raises:
            NoSuchHeaderError: If the active filter names an unknown header.
        """
        record = self._new_record(values)
        if record is None:
            return False
        if not matches_filter(record, self._row_filter, self._all_headers(), len(self._rows)):
            return False
        self._rows.append(record)
        return True

    def add_rows(self, rows: Sequence[RowValues]) -> int:
        """Append several records; returns how many were stored."""
        return sum(1 for values in rows if self.add_row(values))

    def insert_row(self, row_index: int, values: RowValues) -> None:
        """Insert a record before ``row_index`` without filter checks.

        Raises:
            RowIndexError: If ``row_index`` is beyond the end of the store.
        """
        record = self._new_record(values)
        if record is not None:
            self._rows.insert(row_index, record)

    def set_row(self, row_index: int, values: RowValues) -> None:
        """Replace a record in place and write through.

        Raises:
            RowIndexError: If the row does not exist.
            TabstoreIOError: If the write-through fails.
        """
        record = self._new_record(values)
        if record is None:
            return
        self._rows.replace(row_index, record)
        self._write_through()

    def set_value(
        self,
        header: str,
        value: str,
        row_index: int = 0,
        row_filter: RowFilter | None = None,
    ) -> None:
        """Set one field of the ``row_index``-th matching row and write through."""
        self.set_values(header, value, row_filter, indexes=[row_index])

    def set_values(
        self,
        header: str,
        value: str,
        row_filter: RowFilter | None = None,
        indexes: Sequence[int] = (),
        all_occurrences: bool = False,
    ) -> None:
        """Set a field on matching rows and write through.

        An unknown header is added as a new column. On an empty container a
        first row is created.

        Args:
            header: Header of the field to set.
            value: New field value.
            row_filter: Filter selecting candidate rows.
            indexes: Positions among the matching rows to update; every
                matching row when empty.
            all_occurrences: Update every matching row regardless of
                ``indexes``.

        Raises:
            NoSuchHeaderError: If the filter names an unknown header.
            TabstoreIOError: If the write-through fails.
        """
        if len(self._rows) == 0:
            self._set_field(header, 0, value)
        else:
            matching = self.get_rows_indexes(row_filter)
            if all_occurrences or not indexes:
                targets = matching
            else:
                targets = [matching[position] for position in indexes if 0 <= position < len(matching)]
            for row_index in targets:
                self._set_field(header, row_index, value)
        self._write_through()

    def set_column(self, header: str, values: Sequence[str | None]) -> None:
        """Overwrite a column, growing or padding the store as needed.

        Raises:
            TabstoreIOError: If the write-through fails.
        """
        column_index = self._ensure_column(header)
        row_count = len(self._rows)
        for row_index in range(max(row_count, len(values))):
            value = _text(values[row_index]) if row_index < len(values) else ""
            if row_index < row_count:
                self._rows.set_field(row_index, column_index, value)
            else:
                intrinsic: list[str | None] = [""] * len(self._headers)
                intrinsic[column_index] = value
                self.add_row(intrinsic)
        self._write_through()

    def merge_rows(self, row_index: int, new_values: RowValues) -> None:
        """Fill the empty fields of a record without overwriting others.

        ``None`` entries in ``new_values`` carry no value.

        Raises:
            RowIndexError: If the row does not exist.
        """
        record = self._rows.get(row_index)
        for column_index, value in enumerate(new_values):
            if value is None or column_index >= len(record):
                continue
            if record[column_index] == "":
                record[column_index] = value
        self._rows.replace(row_index, record)

    def delete_row(self, row_index: int) -> None:
        """Remove one record and write through.

        Raises:
            RowIndexError: If the row does not exist.
        """
        self._rows.delete(row_index)
        self._write_through()

    def delete_rows(self, row_filter: RowFilter | None) -> int:
        """Remove every record matching a filter and write through.

        Returns:
            Number of removed rows; zero matches are logged, not raised.
        """
        row_indexes = self.get_rows_indexes(row_filter)
        if not row_indexes:
            logger.warning("delete_rows_no_match", row_count=len(self._rows))
            return 0
        self._rows.delete_many(row_indexes)
        self._write_through()
        return len(row_indexes)

    def delete_value(self, header: str) -> None:
        """Clear a field of the first record and write through."""
        column_index = self.get_header_index(header)
        if column_index < 0 or len(self._rows) == 0:
            logger.warning("delete_value_skipped", header=header, row_count=len(self._rows))
            return
        self._rows.set_field(0, column_index, "")
        self._write_through()

    # ------------------------------------------------------------------
    # export / write
    # ------------------------------------------------------------------

    def export_container(self, target_path: str | Path, delimiter: str | None = None) -> bool:
        """Serialize the container into a file honoring its orientation.

        Row layout keeps the header at ``header_index``: lines read before
        the header are written back in front of it, padded with empty
        lines when fewer were read.

        Soft failure: an unsupported orientation is logged and nothing is
        written.

        Returns:
            True when the file was written.

        Raises:
            TabstoreIOError: If the file cannot be written.
        """
        lines = render_lines(
            self._orientation,
            self.header_names,
            self._rows.records(),
            preamble=self._preamble_lines(),
        )
        if lines is None:
            return False
        write_field_rows(Path(target_path), lines, delimiter or self._delimiter, self._encoding)
        return True

    def write_data(self, target_path: str | Path | None = None) -> bool:
        """Write the container to ``target_path`` or its backing file.

        Raises:
            TabstoreIOError: If no target is known or writing fails.
        """
        target = Path(target_path) if target_path is not None else self._source_path
        if target is None:
            raise TabstoreIOError(
                "No target file to write. Pass a path or create the container with source_path."
            )
        return self.export_container(target)

    def create_file(self, target_path: str | Path | None = None) -> None:
        """Create an empty file for the container to write into."""
        target = Path(target_path) if target_path is not None else self._source_path
        if target is None:
            raise TabstoreIOError("No file path to create. Pass a path or set source_path.")
        create_empty_file(target)

    # ------------------------------------------------------------------
    # internals
    # ------------------------------------------------------------------

    def _all_headers(self) -> dict[str, int]:
        intrinsic = self._headers.as_mapping()
        offset = len(intrinsic)
        all_headers = {
            name: offset + position for position, name in enumerate(self._metadata.names())
        }
        all_headers.update(intrinsic)
        return all_headers

    def _new_record(self, values: RowValues) -> list[str] | None:
        width = len(self._headers)
        if len(values) > width:
            logger.warning("row_width_mismatch", expected=width, got=len(values))
            return None
        intrinsic = [_text(value) for value in values] + [""] * (width - len(values))
        return self._metadata.inject(intrinsic)

    def _preamble_lines(self) -> list[str]:
        kept = list(self._preamble[: self._header_index])
        return kept + [""] * (self._header_index - len(kept))

    def _ensure_column(self, header: str) -> int:
        column_index = self.get_header_index(header)
        if column_index < 0:
            self.add_column(header)
            column_index = self.get_header_index(header)
        return column_index

    def _set_field(self, header: str, row_index: int, value: str) -> None:
        column_index = self._ensure_column(header)
        if len(self._rows) == 0:
            self._rows.append(self._metadata.inject([""] * len(self._headers)))
        self._rows.set_field(row_index, column_index, value)

    def _write_through(self) -> None:
        if self._source_path is None:
            return
        try:
            self.write_data(self._source_path)
        except TabstoreIOError as error:
            logger.error("write_through_failed", path=str(self._source_path), error=str(error))
            raise


def _column_names(columns: ColumnSelection) -> list[str]:
    if columns is None:
        return []
    if isinstance(columns, str):
        return [name for name in columns.split(HEADER_LIST_SEPARATOR) if name]
    return list(columns)


def _text(value: str | None) -> str:
    return "" if value is None else value
