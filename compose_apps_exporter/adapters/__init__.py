"""Adapter layer package for docker compose runtime boundaries."""

from .compose_cli import DockerComposeCliAdapter
from .compose_errors import (
	ComposeAdapterError,
	ComposeCommandFailedError,
	ComposeCommandLaunchError,
	ComposeCommandTimeoutError,
	ComposeOutputParseError,
)
from .interfaces import ComposeRuntimePort

__all__ = [
	"ComposeAdapterError",
	"ComposeCommandFailedError",
	"ComposeCommandLaunchError",
	"ComposeCommandTimeoutError",
	"ComposeOutputParseError",
	"ComposeRuntimePort",
	"DockerComposeCliAdapter",
]
