"""Compose definition discovery from filesystem glob patterns."""

from __future__ import annotations

import glob
from pathlib import Path
from typing import Final, Sequence

from compose_apps_exporter.domain import MetricsDerivationError

COMPOSE_DEFAULT_FILENAME: Final[str] = "docker-compose.yml"


class ComposeLocatorError(MetricsDerivationError, ValueError):
    """Raised when a glob pattern is invalid or a match is neither file nor directory."""


def job_resolve_compose_config_path(matched_path: Path) -> Path:
    """Resolve one glob match to a compose definition file path.

    Args:
        matched_path: Filesystem entry produced by glob expansion.

    Returns:
        Path: The entry itself for regular files, `<dir>/docker-compose.yml` for directories.

    Raises:
        ComposeLocatorError: Raised for broken symlinks, special files or unreadable entries.
    """

    try:
        if matched_path.is_dir():
            return matched_path / COMPOSE_DEFAULT_FILENAME
        if matched_path.is_file():
            return matched_path
    except OSError as error:
        raise ComposeLocatorError(f"Invalid path: {matched_path}: {error}") from error

    raise ComposeLocatorError(f"Invalid path: {matched_path} is neither a regular file nor a directory")


def job_locate_compose_config_paths(compose_configs_glob: Sequence[str]) -> list[Path]:
    """Expand glob patterns into candidate compose definition paths.

    Patterns are expanded in the given order and the matches of one pattern are
    sorted. Overlapping patterns yield duplicate paths, which are kept.

    Args:
        compose_configs_glob: Ordered glob patterns for compose files or their directories.

    Returns:
        list[Path]: Candidate compose definition paths.

    Raises:
        ComposeLocatorError: Raised when a pattern is blank or a match cannot be resolved.
    """

    config_paths: list[Path] = []
    for pattern in compose_configs_glob:
        if not pattern.strip():
            raise ComposeLocatorError("Invalid glob: pattern must not be blank")
        for match in sorted(glob.glob(pattern, recursive=True, include_hidden=True)):
            config_paths.append(job_resolve_compose_config_path(Path(match)))
    return config_paths
