"""Typed domain models shared across runtime layers.

This module provides simple data contracts for one compose application's declared
topology and its live containers, plus the fixed value taxonomies used by the
metrics mapper.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

STATE_NOT_UP: Final[str] = "not_up"
HEALTH_NO_CHECK: Final[str] = "no_check"

POSSIBLE_CONTAINER_STATES: Final[tuple[str, ...]] = (
    STATE_NOT_UP,
    "created",
    "restarting",
    "running",
    "removing",
    "paused",
    "exited",
    "dead",
)

POSSIBLE_CONTAINER_HEALTHS: Final[tuple[str, ...]] = (
    STATE_NOT_UP,
    HEALTH_NO_CHECK,
    "starting",
    "healthy",
    "unhealthy",
)


@dataclass(frozen=True)
class ComposeApplicationDefinition:
    """Declared topology of one compose application.

    Attributes:
        name: Compose project name.
        services: Mapping of service name to configured container name.
    """

    name: str
    services: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class RuntimeContainer:
    """Live container reported by the compose runtime.

    Attributes:
        name: Container name.
        state: Docker container state, e.g. `running` or `exited`.
        health: Health check status, empty when no check is configured.
    """

    name: str
    state: str
    health: str = ""
