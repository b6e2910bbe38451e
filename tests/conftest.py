import pytest

from backend.modules.observability.metrics import MetricsAggregator, SeriesStore


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, start: int = 1_700_000_000_000):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> SeriesStore:
    return SeriesStore(max_points=1000, window_ms=24 * 60 * 60 * 1000, clock=clock)


@pytest.fixture
def aggregator(clock: FakeClock) -> MetricsAggregator:
    return MetricsAggregator(clock=clock)
