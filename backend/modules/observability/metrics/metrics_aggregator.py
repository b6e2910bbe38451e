"""Performance metrics aggregator for the DocuIntel RAG pipeline.

Tracks the key performance indicators of the service:
- Retrieval accuracy (target: 92%)
- Response latency
- Hallucination rate (target: < 5%)
- Token usage
- Request success rate

Raw values are kept in a SeriesStore; percentage scaling and empty-series
placeholders are applied only when a report is built.
"""

import threading
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict

from backend.config import MetricsSettings
from backend.logger import logger

from .metrics_store import Clock, MetricStats, SeriesStore, wall_clock_ms

RETRIEVAL_ACCURACY = "retrievalAccuracy"
RESPONSE_LATENCY = "responseLatency"
HALLUCINATION_RATE = "hallucinationRate"
TOKENS_USED = "tokensUsed"
SUCCESS_RATE = "successRate"

# Shown before any retrieval has been scored, not a measured value
RETRIEVAL_ACCURACY_TARGET = 92.0
SUCCESS_RATE_DEFAULT = 100.0


class MetricsReport(BaseModel):
    """Point-in-time report over all tracked series.

    Percentage series (retrieval accuracy, hallucination rate, success
    rate) carry ``average`` and ``current`` in the 0-100 range.

    Attributes:
        retrieval_accuracy: Retrieval accuracy stats (percent)
        response_latency: Response latency stats (ms)
        hallucination_rate: Hallucination rate stats (percent)
        tokens_used: Token usage stats
        success_rate: Request success stats (percent)
        uptime: Milliseconds since the aggregator started
        start_time: Aggregator start instant in milliseconds
        version: Metrics version string
    """

    model_config = ConfigDict(frozen=True)

    retrieval_accuracy: MetricStats
    response_latency: MetricStats
    hallucination_rate: MetricStats
    tokens_used: MetricStats
    success_rate: MetricStats
    uptime: int
    start_time: int
    version: str


class MetricsSummary(BaseModel):
    """Dashboard-friendly formatted view of a MetricsReport."""

    model_config = ConfigDict(frozen=True)

    retrieval_accuracy: str
    avg_latency: str
    hallucination_rate: str
    uptime: str
    success_rate: str


def _as_percentage(stats: MetricStats, empty_default: Optional[float] = None) -> MetricStats:
    """Scale average/current to percent, or use a placeholder when empty."""
    if stats.count == 0 and empty_default is not None:
        return stats.model_copy(update={"average": empty_default, "current": empty_default})
    return stats.model_copy(update={"average": stats.average * 100, "current": stats.current * 100})


def format_uptime(ms: int) -> str:
    """Format an uptime in milliseconds using its two largest units.

    Args:
        ms: Uptime in milliseconds

    Returns:
        String such as "2d 3h", "4h 12m", "5m 7s" or "42s"
    """
    seconds = max(0, int(ms // 1000))
    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24

    if days > 0:
        return f"{days}d {hours % 24}h"
    if hours > 0:
        return f"{hours}h {minutes % 60}m"
    if minutes > 0:
        return f"{minutes}m {seconds % 60}s"
    return f"{seconds}s"


class MetricsAggregator:
    """Centralized metrics collection and reporting.

    One instance is created at application startup and passed to every
    producer (middleware, retrieval pipeline) and consumer (dashboard).

    Example:
        aggregator = MetricsAggregator()

        aggregator.record_latency(120, "/api/query")
        aggregator.record_retrieval_accuracy(0.95)
        aggregator.record_request(True)

        report = aggregator.get_report()
        print(report.retrieval_accuracy.average)  # 95.0

        summary = aggregator.get_summary()
        print(summary.avg_latency)  # "120ms"
    """

    def __init__(
        self,
        settings: Optional[MetricsSettings] = None,
        store: Optional[SeriesStore] = None,
        clock: Optional[Clock] = None,
    ):
        """Initialize metrics aggregator.

        Args:
            settings: Retention and version settings. Defaults to MetricsSettings().
            store: Series store to use. Built from settings when omitted.
            clock: Callable returning the current instant in milliseconds
        """
        self.settings = settings or MetricsSettings()
        self._clock = clock or wall_clock_ms
        self._store = store or SeriesStore(
            max_points=self.settings.max_points,
            window_ms=self.settings.window_ms,
            clock=self._clock,
        )
        self._start_time = self._clock()
        self._request_count = 0
        self._success_count = 0
        self._lock = threading.Lock()

    @property
    def store(self) -> SeriesStore:
        return self._store

    @property
    def start_time(self) -> int:
        return self._start_time

    @property
    def version(self) -> str:
        return self.settings.version

    @property
    def request_count(self) -> int:
        """Requests recorded since start or the last reset."""
        return self._request_count

    @property
    def success_count(self) -> int:
        """Successful requests recorded since start or the last reset."""
        return self._success_count

    def record_retrieval_accuracy(
        self,
        accuracy: float,
        query_info: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Record retrieval accuracy for a query.

        Args:
            accuracy: Fraction of relevant results in [0, 1]
            query_info: Optional query context
        """
        self._store.record(RETRIEVAL_ACCURACY, accuracy, query_info)

    def record_latency(self, latency_ms: float, endpoint: Optional[str] = None) -> None:
        """Record response latency in milliseconds.

        Args:
            latency_ms: Elapsed time in milliseconds
            endpoint: Optional route or operation name
        """
        self._store.record(RESPONSE_LATENCY, latency_ms, {"endpoint": endpoint})

    def record_hallucination(
        self,
        detected: bool,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Record the outcome of a hallucination check.

        Args:
            detected: Whether a hallucination was detected
            details: Optional verification context
        """
        self._store.record(HALLUCINATION_RATE, 1.0 if detected else 0.0, details)

    def record_tokens(self, count: int, provider: Optional[str] = None) -> None:
        """Record token usage.

        Args:
            count: Number of tokens consumed
            provider: Optional model provider name
        """
        self._store.record(TOKENS_USED, count, {"provider": provider})

    def record_request(self, success: bool) -> None:
        """Record a request outcome.

        Args:
            success: Whether the request succeeded
        """
        with self._lock:
            self._request_count += 1
            if success:
                self._success_count += 1
            self._store.record(SUCCESS_RATE, 1.0 if success else 0.0)

    def get_report(self) -> MetricsReport:
        """Get comprehensive metrics report.

        Retrieval accuracy and success rate show a placeholder (92% and
        100%) until their first observation. Hallucination rate is always
        a scaled measurement, so it reads 0% with no data.

        Returns:
            MetricsReport snapshot
        """
        with self._lock:
            retrieval_stats = self._store.get_stats(RETRIEVAL_ACCURACY)
            latency_stats = self._store.get_stats(RESPONSE_LATENCY)
            hallucination_stats = self._store.get_stats(HALLUCINATION_RATE)
            token_stats = self._store.get_stats(TOKENS_USED)
            success_stats = self._store.get_stats(SUCCESS_RATE)
            now = self._clock()

        return MetricsReport(
            retrieval_accuracy=_as_percentage(retrieval_stats, RETRIEVAL_ACCURACY_TARGET),
            response_latency=latency_stats,
            hallucination_rate=_as_percentage(hallucination_stats),
            tokens_used=token_stats,
            success_rate=_as_percentage(success_stats, SUCCESS_RATE_DEFAULT),
            # a wall clock stepping backwards must not yield negative uptime
            uptime=max(0, now - self._start_time),
            start_time=self._start_time,
            version=self.version,
        )

    def get_summary(self) -> MetricsSummary:
        """Get dashboard-friendly summary.

        Returns:
            MetricsSummary with formatted strings
        """
        report = self.get_report()

        return MetricsSummary(
            retrieval_accuracy=f"{report.retrieval_accuracy.average:.1f}%",
            avg_latency=f"{report.response_latency.average:.0f}ms",
            hallucination_rate=f"{report.hallucination_rate.average:.1f}%",
            uptime=format_uptime(report.uptime),
            success_rate=f"{report.success_rate.average:.1f}%",
        )

    def get_all_metrics(self) -> Dict[str, MetricStats]:
        """Get raw, unscaled statistics for every recorded series."""
        return self._store.get_all_metrics()

    def reset(self) -> None:
        """Reset all metrics and request counters.

        Start time and version are preserved.
        """
        with self._lock:
            self._store.clear()
            self._request_count = 0
            self._success_count = 0
        logger.info("Metrics reset")
