"""Regression tests for compose definition discovery from glob patterns."""

from __future__ import annotations

from pathlib import Path

import pytest

from compose_apps_exporter.jobs import (
    COMPOSE_DEFAULT_FILENAME,
    ComposeLocatorError,
    job_locate_compose_config_paths,
)


def test_jobs_app_locator_resolves_directories_and_files(tmp_path: Path) -> None:
    """Append the default compose filename to directories and keep files as-is.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate path resolution.

    Raises:
        AssertionError: Raised when resolved paths are unexpected.
    """

    (tmp_path / "shop").mkdir()
    (tmp_path / "blog").mkdir()
    custom_file = tmp_path / "custom.yml"
    custom_file.write_text("services: {}\n", encoding="utf-8")

    config_paths = job_locate_compose_config_paths([str(tmp_path / "*")])

    assert config_paths == [
        tmp_path / "blog" / COMPOSE_DEFAULT_FILENAME,
        custom_file,
        tmp_path / "shop" / COMPOSE_DEFAULT_FILENAME,
    ]


def test_jobs_app_locator_keeps_duplicates_from_overlapping_globs(tmp_path: Path) -> None:
    """Keep duplicate paths when two patterns match the same entry.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate duplicate retention.

    Raises:
        AssertionError: Raised when duplicates are removed.
    """

    (tmp_path / "shop").mkdir()

    config_paths = job_locate_compose_config_paths([str(tmp_path / "*"), str(tmp_path / "sh*")])

    assert config_paths == [tmp_path / "shop" / COMPOSE_DEFAULT_FILENAME] * 2


def test_jobs_app_locator_matches_hidden_entries(tmp_path: Path) -> None:
    """Match dot-prefixed app directories with a plain wildcard.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate hidden entry discovery.

    Raises:
        AssertionError: Raised when hidden entries are skipped.
    """

    (tmp_path / ".staging").mkdir()
    (tmp_path / "shop").mkdir()

    config_paths = job_locate_compose_config_paths([str(tmp_path / "*")])

    assert config_paths == [
        tmp_path / ".staging" / COMPOSE_DEFAULT_FILENAME,
        tmp_path / "shop" / COMPOSE_DEFAULT_FILENAME,
    ]


def test_jobs_app_locator_returns_empty_list_for_unmatched_glob(tmp_path: Path) -> None:
    """Return no paths when a pattern matches nothing.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate empty expansion.

    Raises:
        AssertionError: Raised when paths are fabricated.
    """

    assert job_locate_compose_config_paths([str(tmp_path / "missing-*")]) == []


def test_jobs_app_locator_rejects_broken_symlink(tmp_path: Path) -> None:
    """Fail the whole location pass when a match is a broken symlink.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate locator failure.

    Raises:
        AssertionError: Raised when the broken entry is skipped.
    """

    (tmp_path / "shop").mkdir()
    (tmp_path / "zombie").symlink_to(tmp_path / "does-not-exist")

    with pytest.raises(ComposeLocatorError, match="zombie"):
        job_locate_compose_config_paths([str(tmp_path / "*")])


def test_jobs_app_locator_rejects_blank_pattern() -> None:
    """Reject blank glob patterns.

    Returns:
        None: Assertions validate pattern validation.

    Raises:
        AssertionError: Raised when blank pattern is accepted.
    """

    with pytest.raises(ComposeLocatorError, match="blank"):
        job_locate_compose_config_paths(["  "])
