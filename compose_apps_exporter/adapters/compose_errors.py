"""Project-native typed exceptions for docker compose CLI adapter failures."""

from __future__ import annotations

from compose_apps_exporter.domain import MetricsDerivationError


class ComposeAdapterError(MetricsDerivationError):
    """Base exception for adapter-level docker compose failures.

    Attributes:
        config_path: Compose definition path the command ran against.
        subcommand: Compose sub-command name, e.g. `config` or `ps`.
        exit_code: Process exit status when the process finished.
        stderr: Captured error stream text.
    """

    def __init__(
        self,
        message: str,
        config_path: str | None = None,
        subcommand: str | None = None,
        exit_code: int | None = None,
        stderr: str | None = None,
    ):
        super().__init__(message)
        self.config_path = config_path
        self.subcommand = subcommand
        self.exit_code = exit_code
        self.stderr = stderr


class ComposeCommandLaunchError(ComposeAdapterError, RuntimeError):
    """Compose process could not be started, e.g. docker binary is missing."""


class ComposeCommandFailedError(ComposeAdapterError, RuntimeError):
    """Compose process finished with a non-zero exit status."""


class ComposeCommandTimeoutError(ComposeAdapterError, TimeoutError):
    """Compose process did not finish before the configured deadline."""


class ComposeOutputParseError(ComposeAdapterError, ValueError):
    """Compose process output could not be parsed into the expected schema."""
