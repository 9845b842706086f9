"""Metadata field injection.

Metadata fields are provenance values, such as the source file name,
appended after the intrinsic fields of every record created through the
container.
"""

from __future__ import annotations

from typing import Sequence


class MetadataFields:
    """Ordered ``name -> value`` mapping appended to records."""

    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def put(self, name: str, value: str) -> bool:
        """Declare or update a field.

        Returns:
            True when the field is new and existing records need a slot.
        """
        is_new = name not in self._values
        self._values[name] = value
        return is_new

    def names(self) -> list[str]:
        """Return field names in declaration order."""
        return list(self._values)

    def values(self) -> list[str]:
        """Return field values in declaration order."""
        return list(self._values.values())

    def as_mapping(self) -> dict[str, str]:
        """Return an owned copy of the field mapping."""
        return dict(self._values)

    def inject(self, intrinsic_values: Sequence[str]) -> list[str]:
        """Append current field values to intrinsic record values."""
        return list(intrinsic_values) + self.values()

    def extend_headers(self, header_names: Sequence[str]) -> list[str]:
        """Append field names to intrinsic header names."""
        return list(header_names) + self.names()
