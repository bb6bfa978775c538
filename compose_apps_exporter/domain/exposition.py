"""Prometheus text exposition rendering for the metrics document."""

from __future__ import annotations

from typing import Final, Sequence

from .service_metrics import METRIC_SERVICE_HEALTH, METRIC_SERVICE_STATE

METRIC_APPS_NBRO_CONFIGS: Final[str] = "compose_apps_nbro_configs"

EXPOSITION_CONTENT_TYPE: Final[str] = "text/plain; version=0.0.4; charset=utf-8"

_METRIC_FAMILY_HELP: Final[tuple[tuple[str, str], ...]] = (
    (METRIC_SERVICE_STATE, "Docker compose service container state, one series per possible state"),
    (METRIC_SERVICE_HEALTH, "Docker compose service container health, one series per possible health status"),
    (METRIC_APPS_NBRO_CONFIGS, "Number of docker compose apps"),
)


def domain_build_exposition_preamble() -> list[str]:
    """Build `# HELP` and `# TYPE` lines for every exported metric family.

    Returns:
        list[str]: Declaration comment lines in family order.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    preamble_lines: list[str] = []
    for metric_name, help_text in _METRIC_FAMILY_HELP:
        preamble_lines.append(f"# HELP {metric_name} {help_text}")
        preamble_lines.append(f"# TYPE {metric_name} gauge")
    return preamble_lines


def domain_format_apps_count_line(app_count: int) -> str:
    """Format the summary gauge counting processed compose apps."""

    if app_count < 0:
        raise ValueError("app_count must be >= 0")
    return f"{METRIC_APPS_NBRO_CONFIGS} {app_count}"


def domain_render_metrics_document(metric_lines: Sequence[str]) -> str:
    """Render the final exposition document.

    Args:
        metric_lines: Aggregated metric lines, summary gauge included.

    Returns:
        str: Preamble followed by metric lines, ending with exactly one newline.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    document_lines = domain_build_exposition_preamble() + [line for line in metric_lines if line]
    return "\n".join(document_lines).rstrip("\n") + "\n"
