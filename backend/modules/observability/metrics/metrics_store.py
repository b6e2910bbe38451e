"""In-memory series store with sliding window retention.

Keeps an ordered sequence of data points per series name and evicts the
oldest points on every write once a series exceeds the point limit or
points fall outside the time window. Eviction is lazy, so no background
sweep is needed.
"""

import copy
import math
import threading
import time
from collections import deque
from numbers import Real
from typing import Any, Callable, Deque, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from backend.config import ONE_DAY_MS
from backend.logger import logger

Clock = Callable[[], int]


def wall_clock_ms() -> int:
    """Current wall-clock time in milliseconds since the epoch."""
    return int(time.time() * 1000)


class InvalidValueError(ValueError):
    """Raised when a non-finite or non-numeric value is recorded."""

    def __init__(self, name: str, value: Any):
        self.name = name
        self.value = value
        super().__init__(f"Invalid value for metric '{name}': {value!r}")


class DataPoint(BaseModel):
    """Single recorded observation.

    The store never hands out its own instances, so neither the point nor
    its metadata can be changed after recording.

    Attributes:
        value: Observed value
        timestamp: Recording instant in milliseconds
        metadata: Optional diagnostic context, never used for aggregation
    """

    model_config = ConfigDict(frozen=True)

    value: float
    timestamp: int
    metadata: Optional[Dict[str, Any]] = None


class MetricStats(BaseModel):
    """Statistics computed over the retained points of one series.

    Attributes:
        current: Value of the most recent point
        average: Arithmetic mean of retained values
        min: Minimum retained value
        max: Maximum retained value
        count: Number of retained points
        last_updated: Timestamp of the most recent point (0 if empty)
    """

    model_config = ConfigDict(frozen=True)

    current: float = 0.0
    average: float = 0.0
    min: float = 0.0
    max: float = 0.0
    count: int = 0
    last_updated: int = 0


EMPTY_STATS = MetricStats()


class SeriesStore:
    """Bounded per-series point retention.

    Each series keeps at most ``max_points`` points and only points whose
    timestamp is within ``window_ms`` of the latest write. All access goes
    through one lock, so concurrent writers cannot break the length bound
    and readers never see a half-evicted series.

    Example:
        store = SeriesStore(max_points=1000)

        store.record("responseLatency", 120.0, {"endpoint": "/query"})
        store.record("responseLatency", 80.0)

        stats = store.get_stats("responseLatency")
        print(stats.average)  # 100.0
    """

    def __init__(
        self,
        max_points: int = 1000,
        window_ms: int = ONE_DAY_MS,
        clock: Optional[Clock] = None,
    ):
        """Initialize series store.

        Args:
            max_points: Maximum points retained per series
            window_ms: Retention window in milliseconds
            clock: Callable returning the current instant in milliseconds
        """
        self.max_points = max_points
        self.window_ms = window_ms
        self._clock = clock or wall_clock_ms
        self._series: Dict[str, Deque[DataPoint]] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _validate(name: str, value: Any) -> float:
        # bool is a Real subclass; True/False are recorded as 1.0/0.0
        number = None
        if isinstance(value, Real):
            try:
                number = float(value)
            except OverflowError:
                number = None

        if number is None or not math.isfinite(number):
            logger.warning(f"Rejected metric value for '{name}': {value!r}")
            raise InvalidValueError(name, value)
        return number

    def record(
        self,
        name: str,
        value: float,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> DataPoint:
        """Append a value to a series and apply retention.

        Args:
            name: Series name (created on first write)
            value: Observed value
            metadata: Optional diagnostic context

        Returns:
            A copy of the stored DataPoint

        Raises:
            InvalidValueError: If value is NaN, infinite or not a number
        """
        value = self._validate(name, value)

        with self._lock:
            now = self._clock()
            point = DataPoint(value=value, timestamp=now, metadata=copy.deepcopy(metadata))

            points = self._series.get(name)
            if points is None:
                points = self._series[name] = deque()
            points.append(point)

            evicted = 0
            while len(points) > self.max_points:
                points.popleft()
                evicted += 1

            cutoff = now - self.window_ms
            while points and points[0].timestamp < cutoff:
                points.popleft()
                evicted += 1

        if evicted:
            logger.debug(f"Evicted {evicted} point(s) from series '{name}'")

        return point.model_copy(deep=True)

    @staticmethod
    def _compute_stats(points: Deque[DataPoint]) -> MetricStats:
        if not points:
            return EMPTY_STATS

        values = [p.value for p in points]
        last = points[-1]
        return MetricStats(
            current=last.value,
            average=sum(values) / len(values),
            min=min(values),
            max=max(values),
            count=len(values),
            last_updated=last.timestamp,
        )

    def get_stats(self, name: str) -> MetricStats:
        """Get statistics for a series.

        Args:
            name: Series name

        Returns:
            MetricStats, zero-valued if the series is unknown or empty
        """
        with self._lock:
            points = self._series.get(name)
            if points is None:
                return EMPTY_STATS
            return self._compute_stats(points)

    def get_all_metrics(self) -> Dict[str, MetricStats]:
        """Get fresh statistics for every known series.

        Returns:
            Dictionary of series name to MetricStats
        """
        with self._lock:
            return {name: self._compute_stats(points) for name, points in self._series.items()}

    def get_points(self, name: str) -> Tuple[DataPoint, ...]:
        """Get copies of the retained points of a series, oldest first."""
        with self._lock:
            return tuple(p.model_copy(deep=True) for p in self._series.get(name, ()))

    def series_names(self) -> List[str]:
        """List known series names in creation order."""
        with self._lock:
            return list(self._series)

    def clear(self) -> None:
        """Discard all series and their points."""
        with self._lock:
            self._series.clear()
