"""Core constants used across Tabstore modules.

This module centralizes defaults and reserved names.
Keeping values here avoids magic literals in container logic.
"""

from __future__ import annotations

DEFAULT_COLUMN_DELIMITER = ";"
DEFAULT_HEADER_INDEX = 0
DEFAULT_ORIENTATION = "row"
DEFAULT_ENCODING = "utf-8"
HEADER_LIST_SEPARATOR = ";"
WILDCARD_VALUES = ("*", "%")
ROW_INDEX_HEADER = "_row_index"
IMPLICIT_HEADERS = frozenset({ROW_INDEX_HEADER})
ENCLOSING_QUOTES = ('"', "'")
DUPLICATE_HEADER_FIRST_SUFFIX = 2
SUPPORTED_PROFILE_VERSION = 1
IN_OPERATOR_SEPARATOR = ","
