"""Typed runtime settings with layered sources and startup validation.

From lowest to highest priority, configuration is loaded from:

- field defaults
- user configuration file (YAML)
- system configuration file (YAML)
- environment variables prefixed with `COMPOSE_APPS_EXPORTER_`
- command line arguments the user explicitly supplied
"""

from __future__ import annotations

import json
import os
import sys
from dataclasses import dataclass, field
from ipaddress import IPv4Address
from pathlib import Path
from typing import Annotated, Any, Final, Mapping, Sequence

import yaml
from pydantic import Field, IPvAnyAddress, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    EnvSettingsSource,
    NoDecode,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    SettingsError,
)

ENV_PREFIX: Final[str] = "COMPOSE_APPS_EXPORTER_"
APPLICATION_SLUG: Final[str] = "compose-apps-exporter"
CONFIG_FILE_NAME: Final[str] = "config.yaml"
DEFAULT_COMPOSE_CONFIGS_GLOB: Final[str] = "/etc/compose-apps/*"

_LOG_LEVEL_NAMES: Final[frozenset[str]] = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class SettingsLoadError(RuntimeError):
    """Raised when runtime settings cannot be loaded or validated."""


class ExporterSettings(BaseSettings):
    """Resolved exporter settings shared read-only by all request handlers.

    Instances only accept explicit keyword values; layer reading and merging happen
    in `config_load_settings`.

    Attributes:
        compose_configs_glob: Glob patterns for compose files or directories containing them.
        port: Port to listen on.
        address: IP address to listen on.
        compose_command_timeout_seconds: Deadline for each docker compose invocation.
        docker_binary: Docker executable name or path.
        log_level: Process log level name.
    """

    model_config = SettingsConfigDict(
        extra="forbid",
        frozen=True,
        case_sensitive=False,
    )

    compose_configs_glob: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: [DEFAULT_COMPOSE_CONFIGS_GLOB],
        min_length=1,
    )
    port: int = Field(default=9179, ge=1, le=65535)
    address: IPvAnyAddress = Field(default=IPv4Address("127.0.0.1"))
    compose_command_timeout_seconds: float = Field(default=30.0, gt=0)
    docker_binary: str = Field(default="docker", min_length=1)
    log_level: str = Field(default="INFO")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        _ = (settings_cls, env_settings, dotenv_settings, file_secret_settings)
        return (init_settings,)

    @field_validator("compose_configs_glob", mode="before")
    @classmethod
    def _coerce_glob_list(cls, value: Any) -> Any:
        if isinstance(value, str):
            stripped_value = value.strip()
            if stripped_value.startswith("["):
                try:
                    decoded_value = json.loads(stripped_value)
                except json.JSONDecodeError:
                    decoded_value = None
                if isinstance(decoded_value, list):
                    return decoded_value
            return [stripped_value]
        return value

    @field_validator("compose_configs_glob")
    @classmethod
    def _validate_glob_patterns(cls, value: list[str]) -> list[str]:
        stripped_patterns = [pattern.strip() for pattern in value]
        if any(not pattern for pattern in stripped_patterns):
            raise ValueError("glob patterns must not be blank")
        return stripped_patterns

    @field_validator("docker_binary")
    @classmethod
    def _validate_non_empty_string(cls, value: str) -> str:
        stripped_value = value.strip()
        if not stripped_value:
            raise ValueError("value must not be blank")
        return stripped_value

    @field_validator("log_level", mode="before")
    @classmethod
    def _validate_log_level(cls, value: Any) -> Any:
        if not isinstance(value, str):
            return value
        normalized_value = value.strip().upper()
        if normalized_value not in _LOG_LEVEL_NAMES:
            raise ValueError(f"log_level must be one of {', '.join(sorted(_LOG_LEVEL_NAMES))}")
        return normalized_value


@dataclass(frozen=True)
class ConfigSourcePaths:
    """Locations of the configuration layers resolved once at startup.

    Attributes:
        user_config_path: Per-user YAML configuration file.
        system_config_path: System-wide YAML configuration file.
        env_prefix: Environment variable name prefix.
    """

    user_config_path: Path
    system_config_path: Path
    env_prefix: str = ENV_PREFIX


@dataclass(frozen=True)
class ConfigLayer:
    """One configuration source's raw values before merging.

    Attributes:
        label: Source label used in diagnostics.
        values: Field values supplied by the source.
    """

    label: str
    values: dict[str, Any] = field(default_factory=dict)


def config_build_source_paths(
    environ: Mapping[str, str] | None = None,
    platform: str | None = None,
) -> ConfigSourcePaths:
    """Build configuration file locations for the current platform.

    Args:
        environ: Environment mapping used for directory lookups, defaults to `os.environ`.
        platform: Platform identifier, defaults to `sys.platform`.

    Returns:
        ConfigSourcePaths: User and system config file paths plus env prefix.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    resolved_environ = os.environ if environ is None else environ
    resolved_platform = sys.platform if platform is None else platform
    home_directory = Path(resolved_environ.get("HOME") or Path.home())

    if resolved_platform == "darwin":
        user_config_directory = home_directory / "Library" / "Application Support" / f"net.pfiers.{APPLICATION_SLUG}"
        system_config_directory = Path("/usr/local/etc") / APPLICATION_SLUG
    elif resolved_platform == "win32":
        app_data_directory = Path(resolved_environ.get("APPDATA") or home_directory / "AppData" / "Roaming")
        user_config_directory = app_data_directory / "pfiers" / APPLICATION_SLUG / "config"
        system_config_directory = Path(resolved_environ.get("PROGRAMDATA") or "C:\\ProgramData") / APPLICATION_SLUG
    else:
        xdg_config_home = resolved_environ.get("XDG_CONFIG_HOME")
        user_config_root = Path(xdg_config_home) if xdg_config_home else home_directory / ".config"
        user_config_directory = user_config_root / APPLICATION_SLUG
        system_config_directory = Path("/etc") / APPLICATION_SLUG

    return ConfigSourcePaths(
        user_config_path=user_config_directory / CONFIG_FILE_NAME,
        system_config_path=system_config_directory / CONFIG_FILE_NAME,
    )


def config_read_yaml_layer(label: str, config_path: Path) -> ConfigLayer:
    """Read one YAML configuration file as a layer.

    Args:
        label: Layer label for diagnostics.
        config_path: YAML file path. A missing file is an empty layer.

    Returns:
        ConfigLayer: Parsed top-level mapping.

    Raises:
        SettingsLoadError: Raised when the file cannot be read or is not a YAML mapping.
    """

    if not config_path.exists():
        return ConfigLayer(label=label)

    try:
        with open(config_path, encoding="utf-8") as config_file:
            data = yaml.safe_load(config_file)
    except (OSError, yaml.YAMLError) as error:
        raise SettingsLoadError(f"Failed to read {label} configuration file {config_path}: {error}") from error

    if data is None:
        return ConfigLayer(label=label)
    if not isinstance(data, dict):
        raise SettingsLoadError(f"Configuration file {config_path} must contain a YAML mapping at top level")
    return ConfigLayer(label=label, values=dict(data))


def config_read_env_layer(env_prefix: str) -> ConfigLayer:
    """Read prefixed environment variables as a layer.

    Args:
        env_prefix: Environment variable prefix, e.g. `COMPOSE_APPS_EXPORTER_`.

    Returns:
        ConfigLayer: Field values keyed by field name.

    Raises:
        SettingsLoadError: Raised when an environment value cannot be decoded.
    """

    try:
        env_source = EnvSettingsSource(ExporterSettings, case_sensitive=False, env_prefix=env_prefix)
        return ConfigLayer(label="environment", values=dict(env_source()))
    except SettingsError as error:
        raise SettingsLoadError(f"Failed to read environment configuration: {error}") from error


def config_read_layers(
    source_paths: ConfigSourcePaths,
    cli_overrides: Mapping[str, Any] | None = None,
) -> list[ConfigLayer]:
    """Read every configuration layer above the field defaults, lowest priority first.

    Args:
        source_paths: Configuration file locations and env prefix.
        cli_overrides: Only the command line values the user explicitly supplied.

    Returns:
        list[ConfigLayer]: User file, system file, environment and command line layers.

    Raises:
        SettingsLoadError: Raised when a layer cannot be read.
    """

    return [
        config_read_yaml_layer("user", source_paths.user_config_path),
        config_read_yaml_layer("system", source_paths.system_config_path),
        config_read_env_layer(source_paths.env_prefix),
        ConfigLayer(label="command_line", values=dict(cli_overrides or {})),
    ]


def config_merge_layers(layers: Sequence[ConfigLayer]) -> dict[str, Any]:
    """Merge layers so later layers override earlier ones field by field."""

    merged_values: dict[str, Any] = {}
    for layer in layers:
        merged_values.update(layer.values)
    return merged_values


def config_load_settings(
    source_paths: ConfigSourcePaths | None = None,
    cli_overrides: Mapping[str, Any] | None = None,
) -> ExporterSettings:
    """Load, merge and validate runtime settings from every configuration layer.

    Args:
        source_paths: Configuration file locations, defaults to platform locations.
        cli_overrides: Only the command line values the user explicitly supplied.

    Returns:
        ExporterSettings: Validated immutable runtime settings.

    Raises:
        SettingsLoadError: Raised when any layer is malformed or merged values are invalid.
    """

    resolved_source_paths = source_paths or config_build_source_paths()
    layers = config_read_layers(resolved_source_paths, cli_overrides)
    try:
        return ExporterSettings(**config_merge_layers(layers))
    except ValidationError as error:
        raise SettingsLoadError(
            f"Startup configuration validation failed. Update config files, environment variables "
            f"or command line arguments. Details: {error}"
        ) from error


def config_describe_sources(source_paths: ConfigSourcePaths) -> str:
    """Describe configuration layer order for command line help output."""

    return (
        "From lowest to highest priority, configuration is loaded from:\n"
        "    - Default values\n"
        f"    - User configuration file ({source_paths.user_config_path})\n"
        f"    - System configuration file ({source_paths.system_config_path})\n"
        f"    - Environment variables (prefixed with '{source_paths.env_prefix}')\n"
        "    - Command line arguments\n"
    )
