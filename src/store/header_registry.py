"""Ordered header name registry.

This module maps header names onto dense column indexes. Insertion order
is column order and colliding names are disambiguated with a numeric
suffix.
"""

from __future__ import annotations

from typing import Container, Iterable, Iterator

from core.constants import DUPLICATE_HEADER_FIRST_SUFFIX
from core.errors import HeaderIndexError


class HeaderRegistry:
    """Dense ``name -> index`` mapping for intrinsic headers."""

    def __init__(self) -> None:
        self._indexes: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._indexes)

    def __contains__(self, name: object) -> bool:
        return name in self._indexes

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def add_column(
        self,
        name: str,
        use_existing: bool = False,
        reserved: Container[str] = (),
    ) -> str | None:
        """Register one header name.

        Args:
            name: Requested header name.
            use_existing: Keep an already registered name instead of
                registering a suffixed duplicate.
            reserved: Names owned elsewhere in the record, such as
                metadata fields; they collide like registered names.

        Returns:
            The name registered at the next index, or ``None`` when the
            name already existed and ``use_existing`` is set.
        """
        if name not in self._indexes and name not in reserved:
            self._indexes[name] = len(self._indexes)
            return name
        if use_existing:
            return None
        unique_name = self._disambiguate(name, reserved)
        self._indexes[unique_name] = len(self._indexes)
        return unique_name

    def set_headers(self, names: Iterable[str]) -> list[str]:
        """Append header names in bulk using the collision rule.

        Args:
            names: Header names in column order.

        Returns:
            Names actually registered, in order.
        """
        registered: list[str] = []
        for name in names:
            added = self.add_column(name)
            if added is not None:
                registered.append(added)
        return registered

    def index_of(self, name: str) -> int:
        """Return the index of a header, or -1 when it is unknown."""
        return self._indexes.get(name, -1)

    def name_at(self, index: int) -> str:
        """Return the header name assigned to an index.

        Raises:
            HeaderIndexError: If no header has that index.
        """
        for name, header_index in self._indexes.items():
            if header_index == index:
                return name
        raise HeaderIndexError(
            f"No header is assigned to index {index}. "
            f"Valid indexes are 0..{len(self._indexes) - 1}."
        )

    def names(self) -> list[str]:
        """Return header names ordered by index."""
        return sorted(self._indexes, key=self._indexes.__getitem__)

    def as_mapping(self) -> dict[str, int]:
        """Return an owned copy of the ``name -> index`` mapping."""
        return dict(self._indexes)

    def _disambiguate(self, name: str, reserved: Container[str] = ()) -> str:
        suffix = DUPLICATE_HEADER_FIRST_SUFFIX
        candidate = f"{name}_{suffix}"
        while candidate in self._indexes or candidate in reserved:
            suffix += 1
            candidate = f"{name}_{suffix}"
        return candidate
