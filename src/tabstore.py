"""Public SDK surface for Tabstore.

This module provides a stable import path for library users.
It re-exports the container, client, and typed filter models.
"""

from __future__ import annotations

from core.config import TabstoreConfig
from core.container_profile import load_container_profile
from core.errors import (
    HeaderConflictError,
    HeaderIndexError,
    NoSuchHeaderError,
    RowIndexError,
    TabstoreConfigError,
    TabstoreError,
    TabstoreIOError,
)
from core.types import ContainerProfile, FilterOperator, FilterRule, HeaderState, Orientation, RowFilter
from store.container_sdk import TabstoreClient
from store.tabular_container import TabularContainer

__all__ = [
    "ContainerProfile",
    "FilterOperator",
    "FilterRule",
    "HeaderConflictError",
    "HeaderIndexError",
    "HeaderState",
    "NoSuchHeaderError",
    "Orientation",
    "RowFilter",
    "RowIndexError",
    "TabstoreClient",
    "TabstoreConfig",
    "TabstoreConfigError",
    "TabstoreError",
    "TabstoreIOError",
    "TabularContainer",
    "load_container_profile",
]
