"""Application bootstrap wiring for dependency assembly."""

from fastapi import FastAPI

from compose_apps_exporter.adapters import DockerComposeCliAdapter
from compose_apps_exporter.api import create_api_application
from compose_apps_exporter.config import ExporterSettings
from compose_apps_exporter.jobs import ComposeMetricsCollector, MetricsCollectorConfig


def bootstrap_create_metrics_collector(settings: ExporterSettings) -> ComposeMetricsCollector:
    """Build the metrics collector with the docker compose CLI adapter.

    Args:
        settings: Validated runtime settings.

    Returns:
        ComposeMetricsCollector: Fully wired collector instance.

    Raises:
        ValueError: Raised when adapter configuration is invalid.
    """

    runtime_adapter = DockerComposeCliAdapter(
        docker_binary=settings.docker_binary,
        command_timeout_seconds=settings.compose_command_timeout_seconds,
    )
    return ComposeMetricsCollector(
        runtime_adapter=runtime_adapter,
        config=MetricsCollectorConfig(compose_configs_glob=tuple(settings.compose_configs_glob)),
    )


def bootstrap_create_application(settings: ExporterSettings) -> FastAPI:
    """Assemble the runtime application from already validated settings.

    Args:
        settings: Validated runtime settings.

    Returns:
        FastAPI: Fully initialized FastAPI application instance.

    Raises:
        ValueError: Raised when dependency wiring fails.
    """

    return create_api_application(metrics_collector=bootstrap_create_metrics_collector(settings))
