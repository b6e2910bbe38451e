"""FastAPI endpoints exposing performance metrics to the dashboard.

All endpoints are read-only views over the application's MetricsAggregator.
"""

from typing import Dict

from fastapi import APIRouter, Depends, HTTPException, Request

from ..metrics.metrics_aggregator import MetricsAggregator, MetricsReport, MetricsSummary
from ..metrics.metrics_store import MetricStats

router = APIRouter(prefix="/observability", tags=["observability"])


def get_metrics_aggregator(request: Request) -> MetricsAggregator:
    """Resolve the aggregator created at application startup."""
    return request.app.state.metrics


@router.get("/metrics/report", response_model=MetricsReport)
async def get_metrics_report(
    aggregator: MetricsAggregator = Depends(get_metrics_aggregator),
) -> MetricsReport:
    """Get the full metrics report.

    Returns:
        MetricsReport with percentage scaling and placeholders applied
    """
    return aggregator.get_report()


@router.get("/metrics/summary", response_model=MetricsSummary)
async def get_metrics_summary(
    aggregator: MetricsAggregator = Depends(get_metrics_aggregator),
) -> MetricsSummary:
    """Get display-formatted metrics for the dashboard header."""
    return aggregator.get_summary()


@router.get("/metrics/series", response_model=Dict[str, MetricStats])
async def get_all_series(
    aggregator: MetricsAggregator = Depends(get_metrics_aggregator),
) -> Dict[str, MetricStats]:
    """Get raw statistics for every recorded series."""
    return aggregator.get_all_metrics()


@router.get("/metrics/series/{name}", response_model=MetricStats)
async def get_series_stats(
    name: str,
    aggregator: MetricsAggregator = Depends(get_metrics_aggregator),
) -> MetricStats:
    """Get raw statistics for one series.

    Args:
        name: Series name (e.g., responseLatency)

    Returns:
        MetricStats for the series
    """
    if name not in aggregator.store.series_names():
        raise HTTPException(status_code=404, detail=f"No data found for metric: {name}")
    return aggregator.store.get_stats(name)


@router.get("/health")
async def health_check() -> Dict[str, str]:
    """Health check endpoint for observability service.

    Returns:
        Health status
    """
    return {
        "status": "healthy",
        "service": "docuintel-observability",
    }
