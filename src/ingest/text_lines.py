"""Line-level file primitives for delimited sources.

This module reads a backing file as ordered lines and writes ordered
field arrays joined by a delimiter, one per line.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Sequence

from core.constants import DEFAULT_ENCODING, ENCLOSING_QUOTES
from core.errors import TabstoreIOError


def read_lines(source_path: Path, encoding: str = DEFAULT_ENCODING) -> list[str]:
    """Read every line of a file without line terminators.

    Args:
        source_path: File to read.
        encoding: Text encoding.

    Returns:
        Ordered lines of the file.

    Raises:
        TabstoreIOError: If the file cannot be read.
    """
    try:
        return source_path.read_text(encoding=encoding).splitlines()
    except OSError as error:
        raise TabstoreIOError(
            f"Failed to read source at {source_path}: {error}. "
            "Provide an existing, readable file."
        ) from error
    except UnicodeDecodeError as error:
        raise TabstoreIOError(
            f"Failed to decode source at {source_path} as {encoding}: {error.reason}. "
            "Set the encoding option to match the file."
        ) from error


def write_field_rows(
    target_path: Path,
    rows: Iterable[Sequence[str]],
    delimiter: str,
    encoding: str = DEFAULT_ENCODING,
) -> None:
    """Write field arrays joined by a delimiter, one per line.

    Parent directories are created before writing.

    Args:
        target_path: Output file path.
        rows: Field arrays in output order.
        delimiter: Separator placed between fields.
        encoding: Text encoding.

    Raises:
        TabstoreIOError: If the directory or file cannot be written.
    """
    lines = [delimiter.join(row) for row in rows]
    payload = "\n".join(lines) + "\n" if lines else ""
    try:
        target_path.parent.mkdir(parents=True, exist_ok=True)
        target_path.write_text(payload, encoding=encoding)
    except OSError as error:
        raise TabstoreIOError(
            f"Failed to write {target_path}: {error}. Check the directory permissions."
        ) from error


def create_empty_file(target_path: Path) -> None:
    """Create an empty file and its parent directories if missing.

    Raises:
        TabstoreIOError: If the file cannot be created.
    """
    try:
        target_path.parent.mkdir(parents=True, exist_ok=True)
        target_path.touch(exist_ok=True)
    except OSError as error:
        raise TabstoreIOError(f"Failed to create {target_path}: {error}.") from error


def split_fields(line: str, delimiter: str) -> list[str]:
    """Split a physical line, keeping empty trailing fields."""
    return line.split(delimiter)


def remove_enclosing_quotes(value: str) -> str:
    """Strip one pair of matching enclosing quote characters.

    Args:
        value: Raw field text.

    Returns:
        Field text without its enclosing quotes, or unchanged text.
    """
    if len(value) >= 2 and value[0] in ENCLOSING_QUOTES and value[-1] == value[0]:
        return value[1:-1]
    return value
