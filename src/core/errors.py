"""Tabstore exception hierarchy.

This module defines the hard-failure errors raised to callers.
Recoverable shape problems are logged instead and never raise.
"""

from __future__ import annotations


class TabstoreError(Exception):
    """Base exception for all Tabstore failures."""


class TabstoreConfigError(TabstoreError):
    """Raised for invalid runtime configuration or container profiles."""


class TabstoreIOError(TabstoreError):
    """Raised when a backing file cannot be read or written."""


class NoSuchHeaderError(TabstoreError):
    """Raised when a filter rule names a header the container does not have."""


class HeaderIndexError(TabstoreError, IndexError):
    """Raised when a header index has no assigned name."""


class RowIndexError(TabstoreError, IndexError):
    """Raised when a positional mutation addresses a row that does not exist."""


class HeaderConflictError(TabstoreError):
    """Raised when a metadata field would reuse an intrinsic header name."""
