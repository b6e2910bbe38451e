"""Observability module for the DocuIntel RAG backend.

Provides in-process performance monitoring:
- Metrics recording with sliding window retention
- Latency instrumentation for functions and HTTP requests
- Read-only dashboard endpoints

Components:
    - metrics: Series store, aggregator, latency helpers
    - middleware: Request latency and outcome tracking
    - dashboard: API endpoints for reports and summaries
"""

from .dashboard.metrics_api import get_metrics_aggregator
from .metrics.latency import measure_latency, track_latency
from .metrics.metrics_aggregator import MetricsAggregator
from .middleware.request_metrics import track_request_metrics

__all__ = [
    "MetricsAggregator",
    "get_metrics_aggregator",
    "measure_latency",
    "track_latency",
    "track_request_metrics",
]
