"""Latency instrumentation helpers backed by a MetricsAggregator."""

import functools
import inspect
import time
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional

from .metrics_aggregator import MetricsAggregator


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000.0


@contextmanager
def track_latency(aggregator: MetricsAggregator, endpoint: Optional[str] = None) -> Iterator[None]:
    """Record the elapsed time of a block as response latency.

    Latency is recorded whether the block completes or raises; exceptions
    propagate unchanged.

    Example:
        with track_latency(aggregator, "retrieval"):
            docs = retriever.search(query)
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        aggregator.record_latency(_elapsed_ms(start), endpoint)


def measure_latency(aggregator: MetricsAggregator, name: Optional[str] = None):
    """Decorator recording the execution time of sync or async functions.

    Args:
        aggregator: Aggregator receiving the latency
        name: Endpoint label (defaults to function name)

    Example:
        @measure_latency(aggregator)
        async def generate_answer(query: str) -> str:
            return await llm.generate(query)
    """
    def decorator(fn: Callable) -> Callable:
        endpoint = name or fn.__name__

        if inspect.iscoroutinefunction(fn):
            @functools.wraps(fn)
            async def async_wrapper(*args, **kwargs) -> Any:
                with track_latency(aggregator, endpoint):
                    return await fn(*args, **kwargs)

            return async_wrapper

        @functools.wraps(fn)
        def sync_wrapper(*args, **kwargs) -> Any:
            with track_latency(aggregator, endpoint):
                return fn(*args, **kwargs)

        return sync_wrapper

    return decorator
