"""Filter expression parsing for CLI ``--where`` arguments."""

from __future__ import annotations

from typing import Sequence

from core.errors import TabstoreConfigError
from core.types import FilterOperator, RowFilter

# longest symbols first so ">=" is not read as ">"
_EXPRESSION_OPERATORS: tuple[tuple[str, FilterOperator], ...] = (
    ("!=", FilterOperator.NOT_EQUALS),
    ("<=", FilterOperator.LESS_OR_EQUAL),
    (">=", FilterOperator.GREATER_OR_EQUAL),
    ("=", FilterOperator.EQUALS),
    ("<", FilterOperator.LESS_THAN),
    (">", FilterOperator.GREATER_THAN),
    ("~", FilterOperator.LIKE),
    ("@", FilterOperator.IN),
)


def parse_filter_expressions(expressions: Sequence[str] | None) -> RowFilter:
    """Build a row filter from CLI expressions such as ``name=Alice``.

    Args:
        expressions: Raw expressions in rule order.

    Returns:
        Filter with one rule per expression.

    Raises:
        TabstoreConfigError: If an expression has no operator or header.
    """
    row_filter = RowFilter()
    for expression in expressions or ():
        header_name, operator, value = _parse_expression(expression)
        row_filter = row_filter.with_rule(header_name, value, operator)
    return row_filter


def _parse_expression(expression: str) -> tuple[str, FilterOperator, str]:
    best_position = -1
    best_symbol = ""
    best_operator = FilterOperator.EQUALS
    for symbol, operator in _EXPRESSION_OPERATORS:
        position = expression.find(symbol)
        if position <= 0:
            continue
        if best_position < 0 or position < best_position:
            best_position, best_symbol, best_operator = position, symbol, operator
    if best_position < 0:
        raise TabstoreConfigError(
            f"Invalid filter expression '{expression}'. "
            "Use header=value, header!=value, header<value, header~pattern or header@a,b."
        )
    header_name = expression[:best_position].strip()
    value = expression[best_position + len(best_symbol):]
    return header_name, best_operator, value
