"""FastAPI application factory for the exporter HTTP surface.

Only `GET /` and `GET /metrics` are served. Every other path or method answers
404 with an empty body.
"""

from fastapi import FastAPI, Request, Response, status
from fastapi.responses import RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from compose_apps_exporter.jobs import MetricsCollectorPort

from .routers import api_create_metrics_router


def create_api_application(metrics_collector: MetricsCollectorPort) -> FastAPI:
    """Create the FastAPI application instance for the exporter.

    Args:
        metrics_collector: Job-layer collector used by the metrics endpoint.

    Returns:
        FastAPI: Framework application with redirect and metrics routes.

    Raises:
        ValueError: Raised when metrics_collector is invalid.
    """

    application = FastAPI(
        title="Compose Apps Exporter",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    @application.exception_handler(StarletteHTTPException)
    async def api_http_error_handler(_request: Request, error: StarletteHTTPException) -> Response:
        """Answer unknown paths and unsupported methods with an empty 404.

        Args:
            _request: Incoming request.
            error: Routing or handler HTTP exception.

        Returns:
            Response: Empty-body response.

        Raises:
            RuntimeError: This handler does not raise runtime errors.
        """

        if error.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            return Response(status_code=status.HTTP_404_NOT_FOUND)
        return Response(status_code=error.status_code, headers=getattr(error, "headers", None))

    @application.get("/", include_in_schema=False)
    def api_index_redirect() -> RedirectResponse:
        """Redirect the index to the metrics endpoint."""

        return RedirectResponse(url="/metrics", status_code=status.HTTP_308_PERMANENT_REDIRECT)

    application.include_router(api_create_metrics_router(metrics_collector=metrics_collector))

    return application
