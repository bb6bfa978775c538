"""Shared error base for per-scrape metrics derivation failures."""

from __future__ import annotations


class MetricsDerivationError(Exception):
    """Base exception for failures that abort one metrics scrape.

    Locator, runtime inspection and mapping failures all derive from this type so
    the HTTP surface can translate any of them into one internal-error response.
    """


class ComposeStateMappingError(MetricsDerivationError, ValueError):
    """Runtime reported a state or health value outside the known taxonomy.

    Attributes:
        compose_name: Application name whose service failed mapping.
        service_name: Service whose container reported the unknown value.
        dimension: Metric dimension name, `state` or `health`.
        reported_value: Raw value reported by the runtime.
    """

    def __init__(self, compose_name: str, service_name: str, dimension: str, reported_value: str):
        super().__init__(
            f"Unrecognized container {dimension} `{reported_value}` for service `{service_name}` "
            f"of compose app `{compose_name}`"
        )
        self.compose_name = compose_name
        self.service_name = service_name
        self.dimension = dimension
        self.reported_value = reported_value
