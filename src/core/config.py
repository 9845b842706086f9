"""Runtime configuration model for Tabstore.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os

from core.constants import (
    DEFAULT_COLUMN_DELIMITER,
    DEFAULT_ENCODING,
    DEFAULT_HEADER_INDEX,
    DEFAULT_ORIENTATION,
)
from core.errors import TabstoreConfigError
from core.types import Orientation


@dataclass(frozen=True)
class TabstoreConfig:
    """Validated runtime configuration.

    Attributes:
        delimiter: Column delimiter used to split and join physical lines.
        header_index: Physical line holding header names in row layout.
        orientation: Physical layout of sources and exports.
        encoding: Text encoding of backing files.
    """

    delimiter: str
    header_index: int
    orientation: Orientation
    encoding: str

    @classmethod
    def from_env(cls) -> "TabstoreConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            TabstoreConfigError: If environment values are invalid.
        """
        delimiter = parse_delimiter(
            os.getenv("TABSTORE_DELIMITER", DEFAULT_COLUMN_DELIMITER),
            "TABSTORE_DELIMITER",
        )
        header_index = parse_header_index(
            os.getenv("TABSTORE_HEADER_INDEX", str(DEFAULT_HEADER_INDEX)),
            "TABSTORE_HEADER_INDEX",
        )
        orientation = parse_orientation(
            os.getenv("TABSTORE_ORIENTATION", DEFAULT_ORIENTATION),
            "TABSTORE_ORIENTATION",
        )
        encoding = os.getenv("TABSTORE_ENCODING", DEFAULT_ENCODING)
        return cls(
            delimiter=delimiter,
            header_index=header_index,
            orientation=orientation,
            encoding=encoding,
        )


def parse_delimiter(raw_value: str, source_name: str) -> str:
    """Validate a column delimiter value.

    Args:
        raw_value: Raw delimiter text.
        source_name: Setting name used in error messages.

    Returns:
        The delimiter unchanged.

    Raises:
        TabstoreConfigError: If the delimiter is empty.
    """
    if not raw_value:
        raise TabstoreConfigError(
            f"Invalid {source_name} value: delimiter must not be empty. "
            "Set it to a character such as ';' or ','."
        )
    return raw_value


def parse_header_index(raw_value: str, source_name: str) -> int:
    """Parse a non-negative header line index.

    Args:
        raw_value: Raw string value.
        source_name: Setting name used in error messages.

    Returns:
        Parsed index.

    Raises:
        TabstoreConfigError: If value is not a non-negative integer.
    """
    try:
        header_index = int(raw_value)
    except ValueError as error:
        raise TabstoreConfigError(
            f"Invalid {source_name} value: "
            f"expected integer, got '{raw_value}'. "
            f"Set {source_name} to a numeric value."
        ) from error
    if header_index < 0:
        raise TabstoreConfigError(
            f"Invalid {source_name} value: expected index >= 0, got {header_index}."
        )
    return header_index


def parse_orientation(raw_value: str, source_name: str) -> Orientation:
    """Parse an orientation name.

    Args:
        raw_value: Raw orientation name, case-insensitive.
        source_name: Setting name used in error messages.

    Returns:
        Parsed orientation.

    Raises:
        TabstoreConfigError: If the name is not a known orientation.
    """
    try:
        return Orientation(raw_value.strip().lower())
    except ValueError as error:
        supported = ", ".join(member.value for member in Orientation)
        raise TabstoreConfigError(
            f"Invalid {source_name} value '{raw_value}'. Use one of: {supported}."
        ) from error
