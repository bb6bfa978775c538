"""API router package for endpoint composition."""

from .metrics import SCRAPE_FAILURE_BODY, api_create_metrics_router

__all__ = ["SCRAPE_FAILURE_BODY", "api_create_metrics_router"]
