"""Metrics collection orchestrator running the per-scrape derivation pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import structlog

from compose_apps_exporter.adapters import ComposeRuntimePort
from compose_apps_exporter.domain import (
    domain_format_apps_count_line,
    domain_map_application_metrics,
    domain_render_metrics_document,
)

from .app_locator import job_locate_compose_config_paths
from .interfaces import MetricsCollectionResult, MetricsCollectorPort

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class MetricsCollectorConfig:
    """Immutable collector configuration.

    Attributes:
        compose_configs_glob: Ordered glob patterns for compose files or directories.
    """

    compose_configs_glob: tuple[str, ...]


class ComposeMetricsCollector(MetricsCollectorPort):
    """Collector that derives metrics for every located compose application.

    Any application failure aborts the whole pass. A scrape never returns a partial
    document that silently omits a misbehaving application.
    """

    def __init__(self, runtime_adapter: ComposeRuntimePort, config: MetricsCollectorConfig):
        """Initialize collector dependencies.

        Args:
            runtime_adapter: Adapter reading compose topology and container state.
            config: Immutable collector configuration.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when dependencies are invalid.
        """

        if runtime_adapter is None:
            raise ValueError("runtime_adapter must not be None")
        if not config.compose_configs_glob:
            raise ValueError("compose_configs_glob must not be empty")

        self._runtime_adapter = runtime_adapter
        self._config = config

    def job_collect_metrics(self) -> MetricsCollectionResult:
        """Locate compose apps, derive their metric lines and render the document.

        Returns:
            MetricsCollectionResult: Rendered document and pass counters.

        Raises:
            ComposeLocatorError: Raised when glob expansion fails.
            ComposeAdapterError: Raised when a compose command fails or output is invalid.
            ComposeStateMappingError: Raised when a container reports an unknown value.
        """

        config_paths = job_locate_compose_config_paths(self._config.compose_configs_glob)
        metric_lines = self.job_collect_metric_lines(config_paths)
        result = MetricsCollectionResult(
            document=domain_render_metrics_document(metric_lines),
            app_count=len(config_paths),
            line_count=len(metric_lines),
        )
        logger.debug(
            "metrics_collection_completed",
            source=self._runtime_adapter.adapter_source_name(),
            app_count=result.app_count,
            line_count=result.line_count,
        )
        return result

    def job_collect_metric_lines(self, config_paths: list[Path]) -> list[str]:
        """Derive metric lines for the given compose paths in order.

        Args:
            config_paths: Candidate compose definition paths, duplicates allowed.

        Returns:
            list[str]: Per-application lines followed by the app count gauge.

        Raises:
            MetricsDerivationError: Raised when any application fails derivation.
        """

        metric_lines: list[str] = []
        for config_path in config_paths:
            metric_lines.extend(self._job_collect_application_lines(config_path))
        metric_lines.append(domain_format_apps_count_line(len(config_paths)))
        return metric_lines

    def _job_collect_application_lines(self, config_path: Path) -> list[str]:
        """Read one application's topology and containers, then map them to lines."""

        definition = self._runtime_adapter.adapter_read_application_definition(config_path)
        containers = self._runtime_adapter.adapter_read_running_containers(config_path)
        return domain_map_application_metrics(definition, containers)
