"""Shared typed models.

This module defines the immutable value types exchanged between the
ingest, store and CLI layers so their interfaces stay explicit.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping

from core.constants import WILDCARD_VALUES


class Orientation(str, Enum):
    """Physical layout of a delimited source.

    ``ROW`` maps each physical line onto one logical record, ``COLUMN``
    maps each physical line onto one logical column.
    """

    ROW = "row"
    COLUMN = "column"


class FilterOperator(str, Enum):
    """Comparison operators supported by filter rules."""

    EQUALS = "="
    NOT_EQUALS = "!="
    LESS_THAN = "<"
    LESS_OR_EQUAL = "<="
    GREATER_THAN = ">"
    GREATER_OR_EQUAL = ">="
    LIKE = "like"
    IN = "in"


class HeaderState(str, Enum):
    """Outcome of comparing an incoming header set with a reference."""

    MATCH = "match"
    PERMUTED = "permuted"
    INCOMPATIBLE = "incompatible"


@dataclass(frozen=True)
class FilterRule:
    """One predicate over a named record field.

    Attributes:
        header_name: Header the rule reads its field from.
        operator: Comparison operator.
        value: Comparison value; ``*`` and ``%`` match anything.
    """

    header_name: str
    operator: FilterOperator
    value: str | None

    @property
    def is_wildcard(self) -> bool:
        """Return whether the rule accepts every field value."""
        return self.value in WILDCARD_VALUES


@dataclass(frozen=True)
class RowFilter:
    """Ordered rule set with AND semantics.

    Attributes:
        rules: Rules evaluated in declaration order.
    """

    rules: tuple[FilterRule, ...] = ()

    def with_rule(
        self,
        header_name: str,
        value: str | None,
        operator: FilterOperator = FilterOperator.EQUALS,
    ) -> "RowFilter":
        """Return a copy of this filter extended by one rule.

        Args:
            header_name: Header the new rule reads.
            value: Comparison value.
            operator: Comparison operator, equality by default.

        Returns:
            New filter with the rule appended.
        """
        rule = FilterRule(header_name=header_name, operator=operator, value=value)
        return RowFilter(rules=self.rules + (rule,))

    @property
    def is_empty(self) -> bool:
        """Return whether the filter has no rules."""
        return not self.rules


@dataclass(frozen=True)
class HeaderComparison:
    """Result of header reconciliation.

    Attributes:
        state: Match, permutation, or incompatibility of the incoming set.
        index_map: Incoming position to reference position, empty when
            the incoming headers are incompatible.
    """

    state: HeaderState
    index_map: Mapping[int, int] = field(default_factory=dict)


@dataclass(frozen=True)
class ContainerProfile:
    """Declarative container settings loaded from a YAML profile.

    Attributes:
        delimiter: Column delimiter.
        header_index: Physical line holding header names in row layout.
        orientation: Physical layout name.
        encoding: Text encoding of the backing file.
        metadata: Metadata fields injected into every record.
        row_filter: Active filter applied on ingest and ``add_row``.
    """

    delimiter: str
    header_index: int
    orientation: Orientation
    encoding: str
    metadata: Mapping[str, str] = field(default_factory=dict)
    row_filter: RowFilter = field(default_factory=RowFilter)
