"""Unit tests for CLI filter expression parsing."""

from __future__ import annotations

import pytest

from cli.filter_arguments import parse_filter_expressions
from core.errors import TabstoreConfigError
from core.types import FilterOperator, FilterRule


@pytest.mark.parametrize(
    ("expression", "expected"),
    [
        ("name=Alice", FilterRule("name", FilterOperator.EQUALS, "Alice")),
        ("name!=Alice", FilterRule("name", FilterOperator.NOT_EQUALS, "Alice")),
        ("age>=30", FilterRule("age", FilterOperator.GREATER_OR_EQUAL, "30")),
        ("age<3", FilterRule("age", FilterOperator.LESS_THAN, "3")),
        ("city~Mun%", FilterRule("city", FilterOperator.LIKE, "Mun%")),
        ("city@Munich,Berlin", FilterRule("city", FilterOperator.IN, "Munich,Berlin")),
        ("formula=a<b", FilterRule("formula", FilterOperator.EQUALS, "a<b")),
    ],
)
def test_parse_filter_expressions_single_rule(expression: str, expected: FilterRule) -> None:
    """The leftmost operator symbol should split header and value."""
    assert parse_filter_expressions([expression]).rules == (expected,)


def test_parse_filter_expressions_keeps_order() -> None:
    """Expressions should become rules in command-line order."""
    row_filter = parse_filter_expressions(["name=*", "id>1"])

    assert [rule.header_name for rule in row_filter.rules] == ["name", "id"]


def test_parse_filter_expressions_empty() -> None:
    """No expressions should produce an empty filter."""
    assert parse_filter_expressions(None).is_empty


@pytest.mark.parametrize("expression", ["Alice", "=Alice"])
def test_parse_filter_expressions_rejects_invalid(expression: str) -> None:
    """Expressions without header or operator should be rejected."""
    with pytest.raises(TabstoreConfigError):
        parse_filter_expressions([expression])
