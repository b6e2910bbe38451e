"""Dashboard module exposing metrics to reporting surfaces.

Provides read-only FastAPI endpoints over the application's MetricsAggregator.

Example:
    from fastapi import FastAPI
    from backend.modules.observability.dashboard import metrics_router

    app = FastAPI()
    app.state.metrics = MetricsAggregator()
    app.include_router(metrics_router, prefix="/api")

    # Endpoints:
    # GET /api/observability/metrics/report
    # GET /api/observability/metrics/summary
    # GET /api/observability/metrics/series
    # GET /api/observability/metrics/series/{name}
"""

from .metrics_api import get_metrics_aggregator
from .metrics_api import router as metrics_router

__all__ = [
    "metrics_router",
    "get_metrics_aggregator",
]
