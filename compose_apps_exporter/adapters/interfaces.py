"""Typed interfaces for adapter-layer responsibilities."""

from pathlib import Path
from typing import Protocol

from compose_apps_exporter.domain import ComposeApplicationDefinition, RuntimeContainer


class ComposeRuntimePort(Protocol):
    """Port definition for reading compose topology and live container state."""

    def adapter_source_name(self) -> str:
        """Return adapter source identifier for diagnostics.

        Returns:
            str: Human-readable runtime source identifier.

        Raises:
            RuntimeError: Raised when source metadata is unavailable.
        """

    def adapter_read_application_definition(self, config_path: Path) -> ComposeApplicationDefinition:
        """Read normalized declared topology for one compose definition file.

        Args:
            config_path: Compose definition file path.

        Returns:
            ComposeApplicationDefinition: Application name and service container names.

        Raises:
            ComposeAdapterError: Raised when the runtime call fails or output is invalid.
        """

    def adapter_read_running_containers(self, config_path: Path) -> list[RuntimeContainer]:
        """Read containers currently known to the runtime for one compose definition.

        Args:
            config_path: Compose definition file path.

        Returns:
            list[RuntimeContainer]: Containers with state and health, possibly empty.

        Raises:
            ComposeAdapterError: Raised when the runtime call fails or output is invalid.
        """
