"""Job layer package for metrics collection workflows."""

from .app_locator import (
	COMPOSE_DEFAULT_FILENAME,
	ComposeLocatorError,
	job_locate_compose_config_paths,
	job_resolve_compose_config_path,
)
from .interfaces import MetricsCollectionResult, MetricsCollectorPort
from .metrics_collector import ComposeMetricsCollector, MetricsCollectorConfig

__all__ = [
	"COMPOSE_DEFAULT_FILENAME",
	"ComposeLocatorError",
	"ComposeMetricsCollector",
	"MetricsCollectionResult",
	"MetricsCollectorConfig",
	"MetricsCollectorPort",
	"job_locate_compose_config_paths",
	"job_resolve_compose_config_path",
]
