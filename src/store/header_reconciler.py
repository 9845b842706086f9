"""Header reconciliation for imports and container appends.

This module classifies an incoming header set against a reference set
and remaps incoming value arrays into the reference column order.
"""

from __future__ import annotations

from typing import Mapping, Sequence

from core.types import HeaderComparison, HeaderState


def compare_headers(
    reference_headers: Mapping[str, int] | Sequence[str],
    incoming_headers: Sequence[str],
) -> HeaderComparison:
    """Compare an incoming header set with a reference set.

    Every incoming header must exist in the reference, otherwise the sets
    are incompatible. When each incoming header sits at its reference
    index the sets match; otherwise they are a permutation.

    Args:
        reference_headers: Reference ``name -> index`` mapping or names in
            column order.
        incoming_headers: Incoming header names in source order.

    Returns:
        Comparison state and the incoming-to-reference index map.
    """
    reference_indexes = _as_index_mapping(reference_headers)
    index_map: dict[int, int] = {}
    state = HeaderState.MATCH
    for incoming_index, header_name in enumerate(incoming_headers):
        reference_index = reference_indexes.get(header_name)
        if reference_index is None:
            return HeaderComparison(state=HeaderState.INCOMPATIBLE)
        if reference_index != incoming_index:
            state = HeaderState.PERMUTED
        index_map[incoming_index] = reference_index
    return HeaderComparison(state=state, index_map=index_map)


def reorder_values(
    values: Sequence[str],
    comparison: HeaderComparison,
    width: int,
) -> list[str]:
    """Place incoming values at their reference positions.

    Reference positions the incoming side does not provide are left
    empty, so the result always has ``width`` fields.

    Args:
        values: Incoming values in source order.
        comparison: Result of :func:`compare_headers`.
        width: Field count of a reference record.

    Returns:
        Reference-shaped record.
    """
    record = [""] * width
    for incoming_index, reference_index in comparison.index_map.items():
        if incoming_index < len(values) and reference_index < width:
            record[reference_index] = values[incoming_index]
    return record


def _as_index_mapping(headers: Mapping[str, int] | Sequence[str]) -> Mapping[str, int]:
    if isinstance(headers, Mapping):
        return headers
    return {name: index for index, name in enumerate(headers)}
