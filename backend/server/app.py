"""FastAPI application factory wiring the metrics aggregator."""

from typing import Optional

from fastapi import FastAPI

from backend.config import MetricsSettings, get_metrics_settings
from backend.logger import logger
from backend.modules.observability.dashboard import metrics_router
from backend.modules.observability.metrics import MetricsAggregator
from backend.modules.observability.middleware import track_request_metrics


def create_app(
    settings: Optional[MetricsSettings] = None,
    aggregator: Optional[MetricsAggregator] = None,
) -> FastAPI:
    """Create the API with a single process-wide metrics aggregator.

    Args:
        settings: Metrics settings (default profile when omitted)
        aggregator: Pre-built aggregator, mainly for tests

    Returns:
        Configured FastAPI application
    """
    aggregator = aggregator or MetricsAggregator(settings or get_metrics_settings())
    settings = aggregator.settings

    app = FastAPI(title="DocuIntel API", version=settings.version)
    app.state.metrics = aggregator
    app.middleware("http")(track_request_metrics)
    app.include_router(metrics_router, prefix="/api")

    logger.info(
        f"Metrics aggregator ready: max_points={settings.max_points}, "
        f"window_ms={settings.window_ms}"
    )
    return app
