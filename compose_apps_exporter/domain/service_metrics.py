"""One-hot metric line mapping for compose services.

Every declared service produces a fixed number of gauge lines regardless of its
current state: one line per possible state value and one line per possible health
value, with exactly one line set to `1` in each dimension. Stable series cardinality
keeps scrape consumers from seeing series appear and vanish as containers change state.
"""

from __future__ import annotations

from typing import Final, Sequence

from .errors import ComposeStateMappingError
from .models import (
    HEALTH_NO_CHECK,
    POSSIBLE_CONTAINER_HEALTHS,
    POSSIBLE_CONTAINER_STATES,
    STATE_NOT_UP,
    ComposeApplicationDefinition,
    RuntimeContainer,
)

METRIC_SERVICE_STATE: Final[str] = "compose_service_state"
METRIC_SERVICE_HEALTH: Final[str] = "compose_service_health"

_REPORTABLE_CONTAINER_STATES: Final[frozenset[str]] = frozenset(POSSIBLE_CONTAINER_STATES[1:])
_REPORTABLE_CONTAINER_HEALTHS: Final[frozenset[str]] = frozenset(POSSIBLE_CONTAINER_HEALTHS[2:])


def domain_escape_label_value(value: str) -> str:
    """Escape one label value for the Prometheus text exposition format.

    Args:
        value: Raw label value.

    Returns:
        str: Value with backslash, double quote and newline escaped.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


def domain_format_service_metric_line(
    metric_name: str,
    compose_name: str,
    service_name: str,
    state_label: str,
    value: int,
) -> str:
    """Format one service gauge line with its label set.

    Args:
        metric_name: Metric family name.
        compose_name: Compose application name label.
        service_name: Service name label.
        state_label: Possible value encoded by this line.
        value: Gauge value, `0` or `1`.

    Returns:
        str: One exposition line without trailing newline.

    Raises:
        ValueError: Raised when value is not a one-hot indicator.
    """

    if value not in (0, 1):
        raise ValueError("value must be 0 or 1")

    labels = (
        ("compose_name", compose_name),
        ("service_name", service_name),
        ("state", state_label),
    )
    rendered_labels = ",".join(f'{key}="{domain_escape_label_value(label)}"' for key, label in labels)
    return f"{metric_name}{{{rendered_labels}}} {value}"


def domain_build_one_hot_lines(
    metric_name: str,
    compose_name: str,
    service_name: str,
    possible_values: Sequence[str],
    effective_value: str,
) -> list[str]:
    """Build one gauge line per possible value with a single active indicator.

    Args:
        metric_name: Metric family name.
        compose_name: Compose application name label.
        service_name: Service name label.
        possible_values: Ordered possible values for the dimension.
        effective_value: Value that receives the `1` indicator.

    Returns:
        list[str]: Exposition lines in possible-value order.

    Raises:
        ValueError: Raised when effective value is not one of the possible values.
    """

    if effective_value not in possible_values:
        raise ValueError(f"effective_value `{effective_value}` is not a possible value for {metric_name}")

    return [
        domain_format_service_metric_line(
            metric_name=metric_name,
            compose_name=compose_name,
            service_name=service_name,
            state_label=possible_value,
            value=1 if possible_value == effective_value else 0,
        )
        for possible_value in possible_values
    ]


def domain_find_container(
    containers: Sequence[RuntimeContainer],
    container_name: str,
) -> RuntimeContainer | None:
    """Return the first container with an exactly matching name, if any."""

    for container in containers:
        if container.name == container_name:
            return container
    return None


def domain_resolve_effective_state(
    compose_name: str,
    service_name: str,
    container: RuntimeContainer | None,
) -> str:
    """Resolve the state-dimension value for one service.

    Args:
        compose_name: Compose application name used in error context.
        service_name: Service name used in error context.
        container: Matching runtime container, or None when not running.

    Returns:
        str: One of the possible container state values.

    Raises:
        ComposeStateMappingError: Raised when the runtime reports an unknown state.
    """

    if container is None:
        return STATE_NOT_UP
    if container.state not in _REPORTABLE_CONTAINER_STATES:
        raise ComposeStateMappingError(
            compose_name=compose_name,
            service_name=service_name,
            dimension="state",
            reported_value=container.state,
        )
    return container.state


def domain_resolve_effective_health(
    compose_name: str,
    service_name: str,
    container: RuntimeContainer | None,
) -> str:
    """Resolve the health-dimension value for one service.

    Args:
        compose_name: Compose application name used in error context.
        service_name: Service name used in error context.
        container: Matching runtime container, or None when not running.

    Returns:
        str: One of the possible container health values.

    Raises:
        ComposeStateMappingError: Raised when the runtime reports an unknown health value.
    """

    if container is None:
        return STATE_NOT_UP
    if container.health == "":
        return HEALTH_NO_CHECK
    if container.health not in _REPORTABLE_CONTAINER_HEALTHS:
        raise ComposeStateMappingError(
            compose_name=compose_name,
            service_name=service_name,
            dimension="health",
            reported_value=container.health,
        )
    return container.health


def domain_map_application_metrics(
    definition: ComposeApplicationDefinition,
    containers: Sequence[RuntimeContainer],
) -> list[str]:
    """Map one application's topology and live containers to metric lines.

    Services are emitted in sorted name order. Each service yields its health
    lines followed by its state lines.

    Args:
        definition: Declared compose application topology.
        containers: Containers currently reported by the runtime.

    Returns:
        list[str]: Exposition lines for every declared service.

    Raises:
        ComposeStateMappingError: Raised when a container reports an unknown state or health.
    """

    metric_lines: list[str] = []
    for service_name in sorted(definition.services):
        container = domain_find_container(containers, definition.services[service_name])
        health = domain_resolve_effective_health(definition.name, service_name, container)
        state = domain_resolve_effective_state(definition.name, service_name, container)
        metric_lines.extend(
            domain_build_one_hot_lines(
                metric_name=METRIC_SERVICE_HEALTH,
                compose_name=definition.name,
                service_name=service_name,
                possible_values=POSSIBLE_CONTAINER_HEALTHS,
                effective_value=health,
            )
        )
        metric_lines.extend(
            domain_build_one_hot_lines(
                metric_name=METRIC_SERVICE_STATE,
                compose_name=definition.name,
                service_name=service_name,
                possible_values=POSSIBLE_CONTAINER_STATES,
                effective_value=state,
            )
        )
    return metric_lines
