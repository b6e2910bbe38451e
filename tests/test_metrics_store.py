"""Tests for SeriesStore retention and statistics."""

import math
import threading

import pytest

from backend.modules.observability.metrics import InvalidValueError, MetricStats, SeriesStore


class TestRecord:
    def test_creates_series_lazily(self, store):
        assert store.series_names() == []
        store.record("latency", 10)
        assert store.series_names() == ["latency"]

    def test_point_is_stamped_with_clock(self, store, clock):
        point = store.record("latency", 10, {"endpoint": "/x"})
        assert point.timestamp == clock.now
        assert point.value == 10.0
        assert point.metadata == {"endpoint": "/x"}

    def test_bool_values_recorded_as_floats(self, store):
        store.record("flag", True)
        store.record("flag", False)
        assert [p.value for p in store.get_points("flag")] == [1.0, 0.0]

    def test_only_target_series_mutated(self, store):
        store.record("a", 1)
        store.record("b", 2)
        store.record("a", 3)
        assert store.get_stats("b").count == 1
        assert store.get_stats("a").count == 2

    def test_large_finite_int_accepted(self, store):
        store.record("tokens", 10**300)
        assert store.get_stats("tokens").current == float(10**300)

    def test_metadata_cannot_be_changed_after_recording(self, store):
        metadata = {"endpoint": "/x", "tags": ["a"]}
        returned = store.record("latency", 10, metadata)

        metadata["endpoint"] = "/caller"
        metadata["tags"].append("b")
        returned.metadata["endpoint"] = "/returned"
        store.get_points("latency")[0].metadata["endpoint"] = "/snapshot"

        assert store.get_points("latency")[0].metadata == {"endpoint": "/x", "tags": ["a"]}

    def test_negative_and_out_of_range_values_accepted(self, store):
        store.record("latency", -5)
        store.record("accuracy", 1.7)
        assert store.get_stats("latency").current == -5.0
        assert store.get_stats("accuracy").current == 1.7

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf, 10**400, -(10**400), "12", None])
    def test_rejects_invalid_values(self, store, value):
        with pytest.raises(InvalidValueError) as exc_info:
            store.record("latency", value)

        assert exc_info.value.name == "latency"
        assert isinstance(exc_info.value, ValueError)
        assert store.get_points("latency") == ()
        assert store.series_names() == []


class TestRetention:
    def test_length_bounded_by_max_points(self, clock):
        store = SeriesStore(max_points=5, clock=clock)
        for i in range(20):
            clock.advance(1)
            store.record("s", i)
            assert len(store.get_points("s")) <= 5

        assert [p.value for p in store.get_points("s")] == [15.0, 16.0, 17.0, 18.0, 19.0]

    def test_evicts_points_outside_window(self, clock):
        store = SeriesStore(window_ms=1000, clock=clock)
        store.record("s", 1)
        clock.advance(500)
        store.record("s", 2)
        clock.advance(1000)
        store.record("s", 3)

        # cutoff is exactly the second point's timestamp, which is retained
        assert [p.value for p in store.get_points("s")] == [2.0, 3.0]

    def test_window_freshness_after_every_write(self, clock):
        store = SeriesStore(max_points=100, window_ms=50, clock=clock)
        for i in range(200):
            clock.advance(7)
            store.record("s", i)
            cutoff = clock.now - 50
            assert all(p.timestamp >= cutoff for p in store.get_points("s"))

    def test_eviction_is_fifo(self, clock):
        store = SeriesStore(max_points=3, window_ms=10_000, clock=clock)
        for i in range(10):
            clock.advance(1)
            store.record("s", i)
            timestamps = [p.timestamp for p in store.get_points("s")]
            assert timestamps == sorted(timestamps)
            assert timestamps[-1] == clock.now
            assert timestamps == list(range(timestamps[0], timestamps[0] + len(timestamps)))

    def test_stale_series_untouched_until_written(self, clock):
        store = SeriesStore(window_ms=100, clock=clock)
        store.record("s", 1)
        clock.advance(1000)
        store.record("other", 1)
        assert store.get_stats("s").count == 1

    def test_max_points_1001_scenario(self, clock):
        store = SeriesStore(max_points=1000, clock=clock)
        for i in range(1, 1002):
            clock.advance(1)
            store.record("responseLatency", i)

        stats = store.get_stats("responseLatency")
        assert stats.count == 1000
        assert stats.min == 2.0
        assert stats.current == 1001.0


class TestStats:
    def test_unknown_series_is_zero(self, store):
        assert store.get_stats("missing") == MetricStats(
            current=0, average=0, min=0, max=0, count=0, last_updated=0
        )

    def test_stats_over_retained_values(self, store, clock):
        values = [4.0, 1.0, 9.0, 6.0]
        for v in values:
            clock.advance(10)
            store.record("s", v)

        stats = store.get_stats("s")
        assert stats.current == 6.0
        assert stats.average == pytest.approx(sum(values) / len(values))
        assert stats.min == 1.0
        assert stats.max == 9.0
        assert stats.count == 4
        assert stats.last_updated == clock.now

    def test_get_all_metrics_is_fresh(self, store):
        store.record("a", 1)
        first = store.get_all_metrics()
        store.record("a", 3)
        store.record("b", 5)
        second = store.get_all_metrics()

        assert first["a"].count == 1
        assert set(first) == {"a"}
        assert second["a"].average == 2.0
        assert second["b"].current == 5.0

    def test_clear_discards_everything(self, store):
        store.record("a", 1)
        store.record("b", 2)
        store.clear()

        assert store.get_all_metrics() == {}
        store.record("a", 7)
        assert store.get_stats("a").count == 1


def test_concurrent_writers_respect_max_points():
    store = SeriesStore(max_points=50)

    def write():
        for i in range(500):
            store.record("s", i)

    threads = [threading.Thread(target=write) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert store.get_stats("s").count == 50
