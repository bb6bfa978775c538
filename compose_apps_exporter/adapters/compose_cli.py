"""Docker compose CLI adapter implementation for topology and container state reads."""

from __future__ import annotations

import json
import shlex
import subprocess
import time
from pathlib import Path
from typing import Any, Final

import structlog
import yaml
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from compose_apps_exporter.domain import ComposeApplicationDefinition, RuntimeContainer

from .compose_errors import (
    ComposeCommandFailedError,
    ComposeCommandLaunchError,
    ComposeCommandTimeoutError,
    ComposeOutputParseError,
)
from .interfaces import ComposeRuntimePort

logger = structlog.get_logger(__name__)


class _ComposeServiceDocument(BaseModel):
    """Service entry of `docker compose config` output."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    container_name: str


class _ComposeConfigDocument(BaseModel):
    """Top-level `docker compose config` output contract.

    Attributes:
        name: Compose project name.
        services: Declared services keyed by service name.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str
    services: dict[str, _ComposeServiceDocument]


class _ComposeContainerDocument(BaseModel):
    """One container entry of `docker compose ps --format json` output.

    Attributes:
        name: Container name.
        state: Docker container state.
        health: Health check status, empty when no check is configured.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str = Field(alias="Name")
    state: str = Field(alias="State")
    health: str = Field(alias="Health")


_CONTAINER_LIST_ADAPTER: Final[TypeAdapter[list[_ComposeContainerDocument]]] = TypeAdapter(
    list[_ComposeContainerDocument]
)


class DockerComposeCliAdapter(ComposeRuntimePort):
    """Adapter implementation that shells out to `docker compose` per definition file."""

    _CONFIG_SUBCOMMAND: Final[tuple[str, ...]] = ("config",)
    _PS_SUBCOMMAND: Final[tuple[str, ...]] = ("ps", "--format", "json")

    def __init__(self, docker_binary: str = "docker", command_timeout_seconds: float = 30.0):
        """Initialize docker compose CLI adapter.

        Args:
            docker_binary: Docker executable name or path.
            command_timeout_seconds: Deadline for each compose process invocation.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when required config values are invalid.
        """

        normalized_docker_binary = docker_binary.strip()
        if not normalized_docker_binary:
            raise ValueError("docker_binary must not be blank")
        if command_timeout_seconds <= 0:
            raise ValueError("command_timeout_seconds must be > 0")

        self._docker_binary = normalized_docker_binary
        self._command_timeout_seconds = float(command_timeout_seconds)

    def adapter_source_name(self) -> str:
        """Return stable adapter source label.

        Returns:
            str: Source identifier.

        Raises:
            RuntimeError: This implementation does not raise runtime errors.
        """

        return "docker_compose_cli"

    def adapter_read_application_definition(self, config_path: Path) -> ComposeApplicationDefinition:
        """Run `docker compose config` and parse the normalized declared topology.

        Args:
            config_path: Compose definition file path.

        Returns:
            ComposeApplicationDefinition: Application name and service container names.

        Raises:
            ComposeCommandLaunchError: Raised when the docker binary cannot be started.
            ComposeCommandFailedError: Raised when the command exits with non-zero status.
            ComposeCommandTimeoutError: Raised when the command exceeds its deadline.
            ComposeOutputParseError: Raised when output does not match the config contract.
        """

        payload, stderr_text = self._adapter_run_compose_command(
            config_path=config_path,
            subcommand=self._CONFIG_SUBCOMMAND,
        )
        try:
            raw_document = yaml.safe_load(payload)
            document = _ComposeConfigDocument.model_validate(raw_document)
        except (yaml.YAMLError, ValidationError) as error:
            raise self._adapter_build_parse_error(
                config_path, self._CONFIG_SUBCOMMAND, error, stderr_text
            ) from error

        return ComposeApplicationDefinition(
            name=document.name,
            services={
                service_name: service.container_name for service_name, service in document.services.items()
            },
        )

    def adapter_read_running_containers(self, config_path: Path) -> list[RuntimeContainer]:
        """Run `docker compose ps --format json` and parse the container list.

        Both output shapes are accepted: one JSON array (older compose releases) or
        one JSON object per line (newer releases). Empty output means no containers.

        Args:
            config_path: Compose definition file path.

        Returns:
            list[RuntimeContainer]: Containers in runtime output order.

        Raises:
            ComposeCommandLaunchError: Raised when the docker binary cannot be started.
            ComposeCommandFailedError: Raised when the command exits with non-zero status.
            ComposeCommandTimeoutError: Raised when the command exceeds its deadline.
            ComposeOutputParseError: Raised when output does not match the container contract.
        """

        payload, stderr_text = self._adapter_run_compose_command(
            config_path=config_path,
            subcommand=self._PS_SUBCOMMAND,
        )
        try:
            raw_entries = self._adapter_decode_container_entries(payload)
            documents = _CONTAINER_LIST_ADAPTER.validate_python(raw_entries)
        except (UnicodeDecodeError, json.JSONDecodeError, ValidationError) as error:
            raise self._adapter_build_parse_error(
                config_path, self._PS_SUBCOMMAND, error, stderr_text
            ) from error

        return [
            RuntimeContainer(name=document.name, state=document.state, health=document.health)
            for document in documents
        ]

    def _adapter_decode_container_entries(self, payload: bytes) -> Any:
        """Decode `ps` output into a list of raw JSON entries.

        Args:
            payload: Raw process stdout.

        Returns:
            Any: Decoded JSON value, a list for well-formed output.

        Raises:
            UnicodeDecodeError: Raised when output is not UTF-8.
            json.JSONDecodeError: Raised when output is not valid JSON.
        """

        text = payload.decode("utf-8").strip()
        if not text:
            return []
        if text.startswith("["):
            return json.loads(text)
        return [json.loads(line) for line in text.splitlines() if line.strip()]

    def _adapter_run_compose_command(self, config_path: Path, subcommand: tuple[str, ...]) -> tuple[bytes, str]:
        """Execute one compose sub-command and return its captured streams.

        Args:
            config_path: Compose definition file path.
            subcommand: Compose sub-command arguments.

        Returns:
            tuple[bytes, str]: Raw stdout and decoded stderr of a successful command.

        Raises:
            ComposeCommandLaunchError: Raised when the process cannot be started.
            ComposeCommandFailedError: Raised when the process exits with non-zero status.
            ComposeCommandTimeoutError: Raised when the process exceeds its deadline.
        """

        command = [self._docker_binary, "compose", "-f", str(config_path), *subcommand]
        command_label = shlex.join(command)
        subcommand_name = subcommand[0]
        started_at = time.monotonic()
        try:
            completed_process = subprocess.run(
                command,
                capture_output=True,
                timeout=self._command_timeout_seconds,
                check=False,
            )
        except subprocess.TimeoutExpired as error:
            stderr_text = self._adapter_decode_stream(error.stderr)
            raise ComposeCommandTimeoutError(
                f"`{command_label}` for {config_path} timed out after {self._command_timeout_seconds:g} seconds "
                f"(sub-command `{subcommand_name}`, exit code none): {stderr_text}",
                config_path=str(config_path),
                subcommand=subcommand_name,
                stderr=stderr_text,
            ) from error
        except OSError as error:
            raise ComposeCommandLaunchError(
                f"Failed to execute `{command_label}` for {config_path} (is docker installed?): {error}",
                config_path=str(config_path),
                subcommand=subcommand_name,
            ) from error

        stderr_text = self._adapter_decode_stream(completed_process.stderr)
        if completed_process.returncode != 0:
            raise ComposeCommandFailedError(
                f"`{command_label}` for {config_path} failed (sub-command `{subcommand_name}`) "
                f"with exit code {completed_process.returncode}: {stderr_text}",
                config_path=str(config_path),
                subcommand=subcommand_name,
                exit_code=completed_process.returncode,
                stderr=stderr_text,
            )

        logger.debug(
            "compose_command_completed",
            command=command_label,
            duration_seconds=round(time.monotonic() - started_at, 3),
        )
        return bytes(completed_process.stdout), stderr_text

    def _adapter_build_parse_error(
        self,
        config_path: Path,
        subcommand: tuple[str, ...],
        error: Exception,
        stderr_text: str,
    ) -> ComposeOutputParseError:
        """Build a parse error carrying definition path and sub-command context.

        Args:
            config_path: Compose definition file path.
            subcommand: Compose sub-command arguments.
            error: Underlying decode or validation error.
            stderr_text: Decoded stderr of the successful command.

        Returns:
            ComposeOutputParseError: Error ready to raise.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        return ComposeOutputParseError(
            f"Failed to parse `docker compose {' '.join(subcommand)}` output for {config_path} "
            f"(exit code 0): {error}; stderr: {stderr_text}",
            config_path=str(config_path),
            subcommand=subcommand[0],
            exit_code=0,
            stderr=stderr_text,
        )

    def _adapter_decode_stream(self, stream: bytes | str | None) -> str:
        """Decode one captured process stream for error messages."""

        if stream is None:
            return ""
        if isinstance(stream, str):
            return stream.strip()
        return stream.decode("utf-8", errors="replace").strip()
