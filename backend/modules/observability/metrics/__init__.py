"""Performance metrics collection and reporting for the RAG service.

Records timestamped observations under named series with sliding window
retention, and builds reports for the observability dashboard.

Components:
    - SeriesStore: Bounded per-series storage (count and age eviction)
    - MetricsAggregator: Typed recording API, reports and summaries
    - track_latency / measure_latency: Latency instrumentation helpers

Example:
    from backend.modules.observability.metrics import MetricsAggregator

    metrics = MetricsAggregator()

    # Record request latency and outcome
    metrics.record_latency(45.2, "/api/query")
    metrics.record_request(True)

    # Record pipeline quality
    metrics.record_retrieval_accuracy(0.94)
    metrics.record_hallucination(False)
    metrics.record_tokens(812, provider="openai")

    summary = metrics.get_summary()
"""

from .latency import measure_latency, track_latency
from .metrics_aggregator import (
    MetricsAggregator,
    MetricsReport,
    MetricsSummary,
    format_uptime,
)
from .metrics_store import DataPoint, InvalidValueError, MetricStats, SeriesStore

__all__ = [
    "DataPoint",
    "MetricStats",
    "InvalidValueError",
    "SeriesStore",
    "MetricsAggregator",
    "MetricsReport",
    "MetricsSummary",
    "format_uptime",
    "track_latency",
    "measure_latency",
]
