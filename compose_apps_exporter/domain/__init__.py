"""Domain models, metric mapping and exposition rendering."""

from .errors import ComposeStateMappingError, MetricsDerivationError
from .exposition import (
    EXPOSITION_CONTENT_TYPE,
    METRIC_APPS_NBRO_CONFIGS,
    domain_build_exposition_preamble,
    domain_format_apps_count_line,
    domain_render_metrics_document,
)
from .models import (
    HEALTH_NO_CHECK,
    POSSIBLE_CONTAINER_HEALTHS,
    POSSIBLE_CONTAINER_STATES,
    STATE_NOT_UP,
    ComposeApplicationDefinition,
    RuntimeContainer,
)
from .service_metrics import (
    METRIC_SERVICE_HEALTH,
    METRIC_SERVICE_STATE,
    domain_build_one_hot_lines,
    domain_escape_label_value,
    domain_map_application_metrics,
)

__all__ = [
    "ComposeApplicationDefinition",
    "ComposeStateMappingError",
    "EXPOSITION_CONTENT_TYPE",
    "HEALTH_NO_CHECK",
    "METRIC_APPS_NBRO_CONFIGS",
    "METRIC_SERVICE_HEALTH",
    "METRIC_SERVICE_STATE",
    "MetricsDerivationError",
    "POSSIBLE_CONTAINER_HEALTHS",
    "POSSIBLE_CONTAINER_STATES",
    "RuntimeContainer",
    "STATE_NOT_UP",
    "domain_build_exposition_preamble",
    "domain_build_one_hot_lines",
    "domain_escape_label_value",
    "domain_format_apps_count_line",
    "domain_map_application_metrics",
    "domain_render_metrics_document",
]
