"""Orientation translation between physical lines and logical records.

Row layout maps one physical line onto one record and reads header names
from a configurable header line. Column layout maps one physical line
onto one column (header name first, values after) and transposes the
accumulated columns into records. Rendering performs the inverse.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from core.logging_config import get_logger
from core.types import Orientation
from ingest.text_lines import remove_enclosing_quotes, split_fields

logger = get_logger(__name__)


@dataclass(frozen=True)
class ParsedLayout:
    """Logical view of a physical source.

    Attributes:
        header_names: Header names in source order.
        records: Records positionally aligned to ``header_names``.
        preamble: Raw lines read before the header line.
    """

    header_names: tuple[str, ...]
    records: tuple[tuple[str, ...], ...]
    preamble: tuple[str, ...] = ()


def resolve_orientation(value: Orientation | str) -> Orientation | None:
    """Resolve an orientation value, logging unsupported values.

    Args:
        value: Orientation member or its name.

    Returns:
        Orientation, or ``None`` when the value is not supported.
    """
    if isinstance(value, Orientation):
        return value
    try:
        return Orientation(str(value).strip().lower())
    except ValueError:
        logger.warning(
            "unsupported_orientation",
            orientation=str(value),
            supported=[member.value for member in Orientation],
        )
        return None


def parse_layout(
    orientation: Orientation | str,
    lines: Sequence[str],
    delimiter: str,
    header_index: int = 0,
) -> ParsedLayout | None:
    """Parse physical lines according to an orientation.

    Args:
        orientation: Physical layout of ``lines``.
        lines: Physical lines without terminators.
        delimiter: Column delimiter.
        header_index: Header line index for row layout.

    Returns:
        Parsed layout, or ``None`` for an unsupported orientation.
    """
    resolved = resolve_orientation(orientation)
    if resolved is Orientation.ROW:
        return parse_row_layout(lines, delimiter, header_index)
    if resolved is Orientation.COLUMN:
        return parse_column_layout(lines, delimiter)
    return None


def parse_row_layout(
    lines: Sequence[str],
    delimiter: str,
    header_index: int = 0,
) -> ParsedLayout:
    """Parse a source with one record per physical line.

    Lines before ``header_index`` are kept as the preamble, not as
    records. Lines whose field count differs from the header line are
    dropped with a warning. Blank lines are ignored unless the source has
    a single column, where a blank line is a record with an empty value.

    Args:
        lines: Physical lines.
        delimiter: Column delimiter.
        header_index: Index of the line holding header names.

    Returns:
        Header names, well-shaped records and the preamble.
    """
    header_names: tuple[str, ...] = ()
    records: list[tuple[str, ...]] = []
    preamble: list[str] = []
    for line_index, line in enumerate(lines):
        if line_index < header_index:
            logger.info("line_skipped_before_header", line=line_index, header_index=header_index)
            preamble.append(line)
            continue
        if not line.strip() and (line_index == header_index or len(header_names) != 1):
            continue
        fields = _clean_fields(split_fields(line, delimiter))
        if line_index == header_index:
            header_names = tuple(fields)
            continue
        if len(fields) != len(header_names):
            logger.warning(
                "row_field_count_mismatch",
                line=line_index,
                expected=len(header_names),
                got=len(fields),
            )
            continue
        records.append(tuple(fields))
    return ParsedLayout(
        header_names=header_names,
        records=tuple(records),
        preamble=tuple(preamble),
    )


def parse_column_layout(lines: Sequence[str], delimiter: str) -> ParsedLayout:
    """Parse a source with one column per physical line.

    Each line contributes its first field as header name and the rest as
    that column's values. Columns are transposed into records; shorter
    columns are padded with empty values.

    Args:
        lines: Physical lines.
        delimiter: Column delimiter.

    Returns:
        Header names and transposed records.
    """
    header_names: list[str] = []
    columns: list[list[str]] = []
    for line in lines:
        if not line.strip():
            continue
        fields = _clean_fields(split_fields(line, delimiter))
        header_names.append(fields[0])
        columns.append(fields[1:])
    record_count = max((len(column) for column in columns), default=0)
    records = tuple(
        tuple(column[row_index] if row_index < len(column) else "" for column in columns)
        for row_index in range(record_count)
    )
    return ParsedLayout(header_names=tuple(header_names), records=records)


def render_lines(
    orientation: Orientation | str,
    header_names: Sequence[str],
    records: Sequence[Sequence[str]],
    preamble: Sequence[str] = (),
) -> list[list[str]] | None:
    """Render logical records as physical field arrays.

    Args:
        orientation: Target physical layout.
        header_names: Header names aligned to each record.
        records: Records to render.
        preamble: Raw lines written before the header line in row layout.

    Returns:
        Field arrays, one per physical line, or ``None`` for an
        unsupported orientation.
    """
    resolved = resolve_orientation(orientation)
    if resolved is Orientation.ROW:
        return (
            [[line] for line in preamble]
            + [list(header_names)]
            + [list(record) for record in records]
        )
    if resolved is Orientation.COLUMN:
        return [
            [header_name] + [record[column_index] for record in records]
            for column_index, header_name in enumerate(header_names)
        ]
    return None


def _clean_fields(fields: Sequence[str]) -> list[str]:
    return [remove_enclosing_quotes(field) for field in fields]
