"""Regression tests for layered settings resolution and precedence."""

from __future__ import annotations

from ipaddress import IPv4Address, IPv6Address
from pathlib import Path

import pytest

from compose_apps_exporter.config import (
    ConfigSourcePaths,
    SettingsLoadError,
    config_build_source_paths,
    config_load_settings,
)
from compose_apps_exporter.main import main_parse_cli_overrides

_TEST_ENV_PREFIX = "COMPOSE_APPS_EXPORTER_TEST_"


def _build_source_paths(tmp_path: Path) -> ConfigSourcePaths:
    """Create isolated config source paths under a temporary directory.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        ConfigSourcePaths: User and system file paths that do not exist yet.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return ConfigSourcePaths(
        user_config_path=tmp_path / "user" / "config.yaml",
        system_config_path=tmp_path / "system" / "config.yaml",
        env_prefix=_TEST_ENV_PREFIX,
    )


def _write_yaml(config_path: Path, content: str) -> None:
    """Write one YAML config file, creating its directory."""

    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(content, encoding="utf-8")


def test_config_settings_defaults_apply_when_no_source_is_present(tmp_path: Path) -> None:
    """Resolve built-in defaults when files, env and CLI are absent.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate default values.

    Raises:
        AssertionError: Raised when defaults are unexpected.
    """

    settings = config_load_settings(source_paths=_build_source_paths(tmp_path), cli_overrides={})

    assert settings.compose_configs_glob == ["/etc/compose-apps/*"]
    assert settings.port == 9179
    assert settings.address == IPv4Address("127.0.0.1")
    assert settings.compose_command_timeout_seconds == 30.0
    assert settings.log_level == "INFO"


def test_config_settings_cli_default_does_not_clobber_user_file(tmp_path: Path) -> None:
    """Keep user file port when the CLI leaves port at its default.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate precedence behavior.

    Raises:
        AssertionError: Raised when CLI default overrides a lower layer.
    """

    source_paths = _build_source_paths(tmp_path)
    _write_yaml(source_paths.user_config_path, "port: 9000\n")

    omitted_port_overrides = main_parse_cli_overrides(source_paths, ["--address", "0.0.0.0"])
    explicit_port_overrides = main_parse_cli_overrides(source_paths, ["--port", "8000"])

    assert "port" not in omitted_port_overrides
    assert config_load_settings(source_paths, omitted_port_overrides).port == 9000
    assert config_load_settings(source_paths, explicit_port_overrides).port == 8000


def test_config_settings_layers_apply_in_priority_order(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Apply user file, system file, environment and CLI from lowest to highest.

    Args:
        tmp_path: Pytest temporary directory fixture.
        monkeypatch: Pytest monkeypatch fixture.

    Returns:
        None: Assertions validate per-field precedence.

    Raises:
        AssertionError: Raised when a lower layer wins.
    """

    source_paths = _build_source_paths(tmp_path)
    _write_yaml(
        source_paths.user_config_path,
        "port: 9001\naddress: 10.0.0.1\ncompose_configs_glob: /srv/user/*\ndocker_binary: /usr/bin/docker\n",
    )
    _write_yaml(source_paths.system_config_path, "port: 9002\naddress: 10.0.0.2\n")
    monkeypatch.setenv(f"{_TEST_ENV_PREFIX}PORT", "9003")

    settings = config_load_settings(
        source_paths,
        main_parse_cli_overrides(source_paths, ["-c", "/srv/cli/*", "-c", "/opt/cli/*"]),
    )

    assert settings.docker_binary == "/usr/bin/docker"
    assert settings.address == IPv4Address("10.0.0.2")
    assert settings.port == 9003
    assert settings.compose_configs_glob == ["/srv/cli/*", "/opt/cli/*"]


def test_config_settings_environment_accepts_json_list_and_single_glob(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Accept JSON array and plain pattern forms for env glob values.

    Args:
        tmp_path: Pytest temporary directory fixture.
        monkeypatch: Pytest monkeypatch fixture.

    Returns:
        None: Assertions validate env glob decoding.

    Raises:
        AssertionError: Raised when env glob decoding is incorrect.
    """

    source_paths = _build_source_paths(tmp_path)

    monkeypatch.setenv(f"{_TEST_ENV_PREFIX}COMPOSE_CONFIGS_GLOB", '["/a/*", "/b/*"]')
    assert config_load_settings(source_paths, {}).compose_configs_glob == ["/a/*", "/b/*"]

    monkeypatch.setenv(f"{_TEST_ENV_PREFIX}COMPOSE_CONFIGS_GLOB", "/c/*")
    assert config_load_settings(source_paths, {}).compose_configs_glob == ["/c/*"]


def test_config_settings_bracket_class_glob_is_a_single_pattern(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Keep a bracket character-class glob that is not a JSON array as one pattern.

    Args:
        tmp_path: Pytest temporary directory fixture.
        monkeypatch: Pytest monkeypatch fixture.

    Returns:
        None: Assertions validate bracket glob handling.

    Raises:
        AssertionError: Raised when a bracket glob is rejected or split.
    """

    source_paths = _build_source_paths(tmp_path)
    _write_yaml(source_paths.user_config_path, "compose_configs_glob: '[ab]pps/*'\n")

    assert config_load_settings(source_paths, {}).compose_configs_glob == ["[ab]pps/*"]

    monkeypatch.setenv(f"{_TEST_ENV_PREFIX}COMPOSE_CONFIGS_GLOB", "[xy]apps/*")
    assert config_load_settings(source_paths, {}).compose_configs_glob == ["[xy]apps/*"]


def test_config_settings_accepts_ipv6_address(tmp_path: Path) -> None:
    """Parse IPv6 literals as listen addresses.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate IPv6 parsing.

    Raises:
        AssertionError: Raised when IPv6 literal is rejected.
    """

    settings = config_load_settings(_build_source_paths(tmp_path), {"address": "::1"})

    assert settings.address == IPv6Address("::1")


@pytest.mark.parametrize(
    "cli_overrides",
    [
        {"address": "localhost"},
        {"address": "300.1.1.1"},
        {"port": 0},
        {"port": 70000},
        {"compose_configs_glob": []},
        {"compose_configs_glob": ["  "]},
        {"compose_command_timeout_seconds": 0},
        {"log_level": "chatty"},
    ],
)
def test_config_settings_rejects_invalid_values(tmp_path: Path, cli_overrides: dict[str, object]) -> None:
    """Raise startup configuration error for invalid merged values.

    Args:
        tmp_path: Pytest temporary directory fixture.
        cli_overrides: Invalid override variant.

    Returns:
        None: Assertions validate validation failures.

    Raises:
        AssertionError: Raised when invalid values are accepted.
    """

    with pytest.raises(SettingsLoadError, match="Startup configuration validation failed"):
        config_load_settings(_build_source_paths(tmp_path), cli_overrides)


@pytest.mark.parametrize(
    "content",
    [
        "port: [9000\n",
        "- port\n- 9000\n",
        "prot: 9000\n",
    ],
)
def test_config_settings_rejects_malformed_config_files(tmp_path: Path, content: str) -> None:
    """Raise startup configuration error for malformed or unknown file content.

    Args:
        tmp_path: Pytest temporary directory fixture.
        content: Malformed YAML variant.

    Returns:
        None: Assertions validate file error handling.

    Raises:
        AssertionError: Raised when malformed file content is accepted.
    """

    source_paths = _build_source_paths(tmp_path)
    _write_yaml(source_paths.system_config_path, content)

    with pytest.raises(SettingsLoadError):
        config_load_settings(source_paths, {})


def test_config_settings_empty_config_file_is_an_empty_layer(tmp_path: Path) -> None:
    """Treat an empty YAML file like a missing one.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate empty layer handling.

    Raises:
        AssertionError: Raised when empty files fail loading.
    """

    source_paths = _build_source_paths(tmp_path)
    _write_yaml(source_paths.user_config_path, "")

    assert config_load_settings(source_paths, {}).port == 9179


def test_config_settings_resolved_settings_are_immutable(tmp_path: Path) -> None:
    """Reject attribute assignment on resolved settings.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate immutability.

    Raises:
        AssertionError: Raised when settings can be mutated.
    """

    settings = config_load_settings(_build_source_paths(tmp_path), {})

    with pytest.raises(ValueError):
        settings.port = 1234


def test_config_settings_source_paths_follow_platform_conventions() -> None:
    """Build user and system config paths per platform from the environment.

    Returns:
        None: Assertions validate platform path selection.

    Raises:
        AssertionError: Raised when path selection is unexpected.
    """

    linux_paths = config_build_source_paths(
        environ={"HOME": "/home/ops", "XDG_CONFIG_HOME": "/home/ops/.xdg"},
        platform="linux",
    )
    linux_default_paths = config_build_source_paths(environ={"HOME": "/home/ops"}, platform="linux")
    macos_paths = config_build_source_paths(environ={"HOME": "/Users/ops"}, platform="darwin")

    assert linux_paths.user_config_path == Path("/home/ops/.xdg/compose-apps-exporter/config.yaml")
    assert linux_paths.system_config_path == Path("/etc/compose-apps-exporter/config.yaml")
    assert linux_default_paths.user_config_path == Path("/home/ops/.config/compose-apps-exporter/config.yaml")
    assert macos_paths.user_config_path == Path(
        "/Users/ops/Library/Application Support/net.pfiers.compose-apps-exporter/config.yaml"
    )
    assert macos_paths.system_config_path == Path("/usr/local/etc/compose-apps-exporter/config.yaml")
    assert linux_paths.env_prefix == "COMPOSE_APPS_EXPORTER_"
