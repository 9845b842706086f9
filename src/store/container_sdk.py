"""Python SDK for container operations.

This module exposes a client that builds configured containers, opens
backing files, and combines several sources into one container.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Iterable, Sequence

from core.config import TabstoreConfig
from core.container_profile import load_container_profile
from core.runtime_options import apply_option_overrides
from core.types import ContainerProfile, Orientation, RowFilter
from store.tabular_container import TabularContainer


class TabstoreClient:
    """Primary SDK entry point for container workflows."""

    def __init__(
        self,
        config: TabstoreConfig | None = None,
        profile: ContainerProfile | None = None,
    ) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
            profile: Optional container profile; its layout settings take
                precedence over ``config``.
        """
        self._config = config or TabstoreConfig.from_env()
        self._profile = profile

    @property
    def config(self) -> TabstoreConfig:
        return self._config

    def new_container(self, source_path: str | Path | None = None) -> TabularContainer:
        """Create an empty container with the client settings.

        Args:
            source_path: Optional backing file for write-through.

        Returns:
            Empty configured container.
        """
        if self._profile is not None:
            return TabularContainer.from_profile(self._profile, source_path=source_path)
        return TabularContainer.from_config(self._config, source_path=source_path)

    def open(
        self,
        source_path: str | Path,
        row_filter: RowFilter | None = None,
    ) -> TabularContainer:
        """Open and read a delimited file.

        Args:
            source_path: File to read; it becomes the backing file.
            row_filter: Optional active filter for the read.

        Returns:
            Loaded container.

        Raises:
            TabstoreIOError: If the file exists but cannot be read.
            NoSuchHeaderError: If the filter names an unknown header.
        """
        container = self.new_container(source_path)
        container.read_data(row_filter if row_filter is not None else container.row_filter)
        return container

    def combine(
        self,
        source_paths: Sequence[str | Path],
        row_filter: RowFilter | None = None,
    ) -> TabularContainer:
        """Read several files into one container, reconciling headers.

        Returns:
            Container holding the rows of every source in order.
        """
        container = self.new_container()
        if row_filter is not None:
            container.row_filter = row_filter
        for source_path in source_paths:
            container.append_data(source_path)
        container.source_path = None
        return container

    def with_options(self, assignments: Iterable[str]) -> "TabstoreClient":
        """Clone the client with ``key=value`` option overrides applied."""
        updated_config = apply_option_overrides(self._config, assignments)
        updated_profile = None
        if self._profile is not None:
            updated_profile = replace(
                self._profile,
                delimiter=updated_config.delimiter,
                header_index=updated_config.header_index,
                orientation=updated_config.orientation,
                encoding=updated_config.encoding,
            )
        return TabstoreClient(updated_config, updated_profile)

    def with_orientation(self, orientation: Orientation) -> "TabstoreClient":
        """Clone the client with a different physical layout."""
        return self.with_options([f"orientation={orientation.value}"])

    @classmethod
    def from_profile_file(
        cls,
        profile_path: str,
        config: TabstoreConfig | None = None,
    ) -> "TabstoreClient":
        """Build a client from a YAML container profile."""
        base_config = config or TabstoreConfig.from_env()
        profile = load_container_profile(profile_path, base_config)
        profile_config = replace(
            base_config,
            delimiter=profile.delimiter,
            header_index=profile.header_index,
            orientation=profile.orientation,
            encoding=profile.encoding,
        )
        return cls(profile_config, profile)
