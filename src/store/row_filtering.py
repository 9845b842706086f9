"""Row filter evaluation.

This module decides whether a record satisfies a filter. Rules are
checked in declaration order with AND semantics; wildcard rules accept
any value; unknown headers are a hard failure.
"""

from __future__ import annotations

import re
from typing import Mapping, Sequence

from core.constants import IMPLICIT_HEADERS, IN_OPERATOR_SEPARATOR, ROW_INDEX_HEADER
from core.errors import NoSuchHeaderError
from core.types import FilterOperator, FilterRule, RowFilter


def matches_filter(
    record: Sequence[str],
    row_filter: RowFilter | None,
    headers: Mapping[str, int],
    row_index: int = -1,
) -> bool:
    """Check whether a record satisfies every rule of a filter.

    Args:
        record: Full record, metadata fields included.
        row_filter: Filter to apply; ``None`` or empty matches all.
        headers: ``name -> position`` for every field of ``record``.
        row_index: Position of the record, exposed through the implicit
            row index header.

    Returns:
        True when all rules hold.

    Raises:
        NoSuchHeaderError: If a rule names a header that is neither in
            ``headers`` nor an implicit header.
    """
    if row_filter is None or row_filter.is_empty:
        return True
    validate_filter_headers(row_filter, headers)
    for rule in row_filter.rules:
        if rule.is_wildcard:
            continue
        if not evaluate_rule(rule, _field_value(record, rule.header_name, headers, row_index)):
            return False
    return True


def validate_filter_headers(row_filter: RowFilter, headers: Mapping[str, int]) -> None:
    """Raise when a rule names an unknown header.

    Raises:
        NoSuchHeaderError: If a rule header is unknown.
    """
    for rule in row_filter.rules:
        if rule.header_name not in headers and rule.header_name not in IMPLICIT_HEADERS:
            raise NoSuchHeaderError(
                f"Header '{rule.header_name}' does not exist in the container. "
                f"Known headers: {', '.join(headers) or '-'}."
            )


def evaluate_rule(rule: FilterRule, field_value: str) -> bool:
    """Evaluate one rule against one field value."""
    expected = "" if rule.value is None else rule.value
    operator = rule.operator
    if operator is FilterOperator.EQUALS:
        return field_value == expected
    if operator is FilterOperator.NOT_EQUALS:
        return field_value != expected
    if operator is FilterOperator.LIKE:
        return _like_pattern(expected).fullmatch(field_value) is not None
    if operator is FilterOperator.IN:
        alternatives = [item.strip() for item in expected.split(IN_OPERATOR_SEPARATOR)]
        return field_value in alternatives
    comparison = _compare(field_value, expected)
    if operator is FilterOperator.LESS_THAN:
        return comparison < 0
    if operator is FilterOperator.LESS_OR_EQUAL:
        return comparison <= 0
    if operator is FilterOperator.GREATER_THAN:
        return comparison > 0
    return comparison >= 0


def _field_value(
    record: Sequence[str],
    header_name: str,
    headers: Mapping[str, int],
    row_index: int,
) -> str:
    if header_name in headers:
        position = headers[header_name]
        return record[position] if position < len(record) else ""
    if header_name == ROW_INDEX_HEADER:
        return str(row_index)
    return ""


def _compare(left: str, right: str) -> int:
    """Compare numerically when both sides are numbers, lexically otherwise."""
    try:
        left_number = float(left)
        right_number = float(right)
    except ValueError:
        return (left > right) - (left < right)
    return (left_number > right_number) - (left_number < right_number)


def _like_pattern(pattern: str) -> re.Pattern[str]:
    parts = []
    for character in pattern:
        if character == "%":
            parts.append(".*")
        elif character == "_":
            parts.append(".")
        else:
            parts.append(re.escape(character))
    return re.compile("".join(parts), re.DOTALL)
