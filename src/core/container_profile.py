"""Typed container profile parsing.

This module loads and validates YAML profiles describing how a delimited
source is laid out, which metadata fields to inject, and which rows to
keep. Missing settings fall back to the runtime configuration.
"""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, Sequence, cast

import yaml

from core.config import TabstoreConfig, parse_delimiter, parse_header_index, parse_orientation
from core.constants import SUPPORTED_PROFILE_VERSION
from core.errors import TabstoreConfigError
from core.types import ContainerProfile, FilterOperator, FilterRule, Orientation, RowFilter

_ROOT_KEYS = frozenset(
    {"version", "delimiter", "header_index", "orientation", "encoding", "metadata", "filter"}
)
_RULE_KEYS = frozenset({"header", "operator", "value"})


def load_container_profile(
    profile_path: str,
    base_config: TabstoreConfig | None = None,
) -> ContainerProfile:
    """Load and validate a YAML container profile from disk.

    Args:
        profile_path: File path to the YAML profile.
        base_config: Defaults for settings the profile omits; read from
            the environment when not given.

    Returns:
        Fully validated container profile.

    Raises:
        TabstoreConfigError: If the file is invalid or schema checks fail.
    """
    payload = _load_yaml_payload(profile_path)
    root_mapping = _expect_mapping(payload, "container profile root")
    _validate_keys(root_mapping, _ROOT_KEYS, "container profile")
    _parse_version(root_mapping)
    config = base_config or TabstoreConfig.from_env()
    return ContainerProfile(
        delimiter=_parse_delimiter(root_mapping, config.delimiter),
        header_index=_parse_header_index(root_mapping, config.header_index),
        orientation=_parse_orientation(root_mapping, config),
        encoding=_optional_string(root_mapping, "encoding") or config.encoding,
        metadata=_parse_metadata(root_mapping),
        row_filter=_parse_filter(root_mapping),
    )


def profile_to_config(profile: ContainerProfile) -> TabstoreConfig:
    """Project the layout settings of a profile onto a runtime config."""
    return TabstoreConfig(
        delimiter=profile.delimiter,
        header_index=profile.header_index,
        orientation=profile.orientation,
        encoding=profile.encoding,
    )


def _load_yaml_payload(profile_path: str) -> object:
    profile_file = Path(profile_path).expanduser().resolve()
    if not profile_file.exists():
        raise TabstoreConfigError(
            f"Container profile does not exist at {profile_file}. Provide a valid YAML file path."
        )
    try:
        payload = cast(object, yaml.safe_load(profile_file.read_text(encoding="utf-8")))
    except OSError as error:
        raise TabstoreConfigError(
            f"Failed to read container profile at {profile_file}: {error}. "
            "Check file permissions and retry."
        ) from error
    except yaml.YAMLError as error:
        raise TabstoreConfigError(
            f"Failed to parse YAML container profile at {profile_file}: {error}. "
            "Fix YAML syntax and retry."
        ) from error
    if payload is None:
        raise TabstoreConfigError(
            f"Container profile at {profile_file} is empty. Define at least 'version'."
        )
    return payload


def _expect_mapping(value: object, context: str) -> Mapping[str, object]:
    if isinstance(value, Mapping):
        normalized_mapping = {}
        for key, payload in value.items():
            if not isinstance(key, str):
                raise TabstoreConfigError(
                    f"Invalid {context}: expected string keys, got {type(key).__name__}."
                )
            normalized_mapping[key] = payload
        return normalized_mapping
    raise TabstoreConfigError(
        f"Invalid {context}: expected object mapping, got {type(value).__name__}."
    )


def _expect_sequence(value: object, context: str) -> Sequence[object]:
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return value
    raise TabstoreConfigError(f"Invalid {context}: expected list, got {type(value).__name__}.")


def _parse_version(root_mapping: Mapping[str, object]) -> int:
    raw_version = root_mapping.get("version")
    if not isinstance(raw_version, int) or isinstance(raw_version, bool):
        raise TabstoreConfigError(
            "Container profile field 'version' must be an integer. "
            f"Set version: {SUPPORTED_PROFILE_VERSION}."
        )
    if raw_version != SUPPORTED_PROFILE_VERSION:
        raise TabstoreConfigError(
            f"Unsupported container profile version {raw_version}. "
            f"Use version: {SUPPORTED_PROFILE_VERSION}."
        )
    return raw_version


def _parse_delimiter(root_mapping: Mapping[str, object], default_value: str) -> str:
    raw_value = root_mapping.get("delimiter")
    if raw_value is None:
        return default_value
    if not isinstance(raw_value, str):
        raise TabstoreConfigError("Container profile field 'delimiter' must be a string.")
    return parse_delimiter(raw_value, "delimiter")


def _parse_header_index(root_mapping: Mapping[str, object], default_value: int) -> int:
    raw_value = root_mapping.get("header_index")
    if raw_value is None:
        return default_value
    if isinstance(raw_value, bool) or not isinstance(raw_value, int):
        raise TabstoreConfigError("Container profile field 'header_index' must be an integer.")
    return parse_header_index(str(raw_value), "header_index")


def _parse_orientation(root_mapping: Mapping[str, object], config: TabstoreConfig) -> Orientation:
    raw_value = _optional_string(root_mapping, "orientation")
    if raw_value is None:
        return config.orientation
    return parse_orientation(raw_value, "orientation")


def _parse_metadata(root_mapping: Mapping[str, object]) -> dict[str, str]:
    raw_metadata = root_mapping.get("metadata")
    if raw_metadata is None:
        return {}
    metadata_mapping = _expect_mapping(raw_metadata, "container profile metadata")
    return {name: _scalar_text(value, f"metadata '{name}'") for name, value in metadata_mapping.items()}


def _parse_filter(root_mapping: Mapping[str, object]) -> RowFilter:
    raw_rules = root_mapping.get("filter")
    if raw_rules is None:
        return RowFilter()
    rule_rows = _expect_sequence(raw_rules, "container profile filter")
    rules = [_parse_rule(rule_value, index) for index, rule_value in enumerate(rule_rows)]
    return RowFilter(rules=tuple(rules))


def _parse_rule(rule_value: object, rule_index: int) -> FilterRule:
    context = f"filter rule #{rule_index + 1}"
    rule_mapping = _expect_mapping(rule_value, context)
    _validate_keys(rule_mapping, _RULE_KEYS, context)
    header_name = _optional_string(rule_mapping, "header")
    if header_name is None:
        raise TabstoreConfigError(f"Invalid {context}: field 'header' is required.")
    raw_operator = _optional_string(rule_mapping, "operator") or FilterOperator.EQUALS.value
    try:
        operator = FilterOperator(raw_operator.lower())
    except ValueError as error:
        supported = ", ".join(member.value for member in FilterOperator)
        raise TabstoreConfigError(
            f"Unsupported operator '{raw_operator}' in {context}. Use one of: {supported}."
        ) from error
    raw_rule_value = rule_mapping.get("value")
    value = None if raw_rule_value is None else _scalar_text(raw_rule_value, context)
    return FilterRule(header_name=header_name, operator=operator, value=value)


def _scalar_text(value: object, context: str) -> str:
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (str, int, float)):
        return str(value)
    raise TabstoreConfigError(
        f"Invalid {context}: expected a scalar value, got {type(value).__name__}."
    )


def _optional_string(mapping: Mapping[str, object], field_name: str) -> str | None:
    raw_value = mapping.get(field_name)
    if raw_value is None:
        return None
    if isinstance(raw_value, str):
        normalized_value = raw_value.strip()
        return normalized_value if normalized_value else None
    raise TabstoreConfigError(
        f"Container profile field '{field_name}' must be a string when provided."
    )


def _validate_keys(mapping: Mapping[str, object], allowed_keys: frozenset[str], context: str) -> None:
    unknown_keys = sorted(set(mapping) - allowed_keys)
    if unknown_keys:
        raise TabstoreConfigError(f"Invalid {context}: unknown fields {', '.join(unknown_keys)}.")
