"""Explicit registry of ``key=value`` runtime option overrides.

Each recognized option name maps to a typed setter that returns an
updated config. Overrides are looked up by name, never by introspecting
the config type.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, Iterable, Mapping

from core.config import (
    TabstoreConfig,
    parse_delimiter,
    parse_header_index,
    parse_orientation,
)
from core.errors import TabstoreConfigError

OptionSetter = Callable[[TabstoreConfig, str], TabstoreConfig]


def _set_delimiter(config: TabstoreConfig, raw_value: str) -> TabstoreConfig:
    return replace(config, delimiter=parse_delimiter(raw_value, "delimiter"))


def _set_header_index(config: TabstoreConfig, raw_value: str) -> TabstoreConfig:
    return replace(config, header_index=parse_header_index(raw_value, "header_index"))


def _set_orientation(config: TabstoreConfig, raw_value: str) -> TabstoreConfig:
    return replace(config, orientation=parse_orientation(raw_value, "orientation"))


def _set_encoding(config: TabstoreConfig, raw_value: str) -> TabstoreConfig:
    if not raw_value.strip():
        raise TabstoreConfigError("Option 'encoding' must not be empty.")
    return replace(config, encoding=raw_value.strip())


OPTION_SETTERS: Mapping[str, OptionSetter] = {
    "delimiter": _set_delimiter,
    "header_index": _set_header_index,
    "orientation": _set_orientation,
    "encoding": _set_encoding,
}


def supported_options() -> tuple[str, ...]:
    """Return recognized option names in sorted order."""
    return tuple(sorted(OPTION_SETTERS))


def parse_option_assignment(assignment: str) -> tuple[str, str]:
    """Split a ``key=value`` assignment.

    Args:
        assignment: Raw assignment, optionally prefixed with ``-``.

    Returns:
        Normalized option name and raw value.

    Raises:
        TabstoreConfigError: If the assignment has no ``=`` separator.
    """
    if "=" not in assignment:
        raise TabstoreConfigError(
            f"Invalid option '{assignment}': expected key=value. "
            f"Supported keys: {', '.join(supported_options())}."
        )
    key, value = assignment.split("=", 1)
    return key.strip().lstrip("-").lower().replace("-", "_"), value


def apply_option_overrides(
    config: TabstoreConfig,
    assignments: Iterable[str],
) -> TabstoreConfig:
    """Apply ``key=value`` overrides through the option registry.

    Args:
        config: Base configuration.
        assignments: Raw assignments in application order.

    Returns:
        Updated configuration; later assignments win.

    Raises:
        TabstoreConfigError: If an option is unknown or its value invalid.
    """
    updated = config
    for assignment in assignments:
        name, raw_value = parse_option_assignment(assignment)
        setter = OPTION_SETTERS.get(name)
        if setter is None:
            raise TabstoreConfigError(
                f"Unknown option '{name}'. Supported keys: {', '.join(supported_options())}."
            )
        updated = setter(updated, raw_value)
    return updated
