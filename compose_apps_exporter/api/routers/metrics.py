"""Metrics endpoint router composition for Prometheus scrapes."""

from typing import Final

import structlog
from fastapi import APIRouter, Response, status
from fastapi.responses import PlainTextResponse

from compose_apps_exporter.domain import EXPOSITION_CONTENT_TYPE, MetricsDerivationError
from compose_apps_exporter.jobs import MetricsCollectorPort

SCRAPE_FAILURE_BODY: Final[str] = "Internal server error. Check logs for details."

logger = structlog.get_logger(__name__)


def api_create_metrics_router(metrics_collector: MetricsCollectorPort) -> APIRouter:
    """Create metrics router exposing the rendered exposition document.

    Args:
        metrics_collector: Job-layer collector running one derivation pass per scrape.

    Returns:
        APIRouter: Router exposing `/metrics` endpoint.

    Raises:
        ValueError: Raised when metrics_collector is invalid.
    """

    if metrics_collector is None:
        raise ValueError("metrics_collector must not be None")

    router = APIRouter(tags=["metrics"])

    @router.get("/metrics")
    def api_metrics_scrape() -> Response:
        """Return current compose service metrics in Prometheus text format.

        The handler is synchronous so concurrent scrapes run in the server threadpool,
        each with its own blocking compose invocations.

        Returns:
            Response: Exposition document, or a generic 500 body when derivation fails.

        Raises:
            RuntimeError: Unexpected non-derivation failures propagate to the framework.
        """

        try:
            collection_result = metrics_collector.job_collect_metrics()
        except MetricsDerivationError as error:
            logger.error(
                "metrics_scrape_failed",
                error_type=type(error).__name__,
                error=str(error),
            )
            return PlainTextResponse(
                content=SCRAPE_FAILURE_BODY,
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response(
            content=collection_result.document,
            media_type=EXPOSITION_CONTENT_TYPE,
            status_code=status.HTTP_200_OK,
        )

    return router
