"""FastAPI middleware recording latency and outcome of every request."""

import time

from fastapi import Request

from ..metrics.metrics_aggregator import MetricsAggregator


def _is_success(status_code: int) -> bool:
    return status_code < 400


async def track_request_metrics(request: Request, call_next):
    """Measure each request and record it on the app's aggregator.

    Latency is measured from receipt until the last chunk of the response
    body has been sent, so streamed responses include their streaming
    time. Responses with status < 400 count as successful; an exception
    raised downstream is recorded as a failed request and then re-raised.

    Args:
        request: Incoming request
        call_next: Callback continuing request handling

    Returns:
        Response produced by downstream handlers
    """
    aggregator: MetricsAggregator = request.app.state.metrics
    endpoint = request.url.path
    start_time = time.perf_counter()

    def record(success: bool) -> None:
        elapsed_ms = (time.perf_counter() - start_time) * 1000.0
        aggregator.record_latency(elapsed_ms, endpoint)
        aggregator.record_request(success)

    try:
        response = await call_next(request)
    except Exception:
        record(False)
        raise

    success = _is_success(response.status_code)
    body_iterator = getattr(response, "body_iterator", None)
    if body_iterator is None:
        record(success)
        return response

    async def record_on_completion():
        try:
            async for chunk in body_iterator:
                yield chunk
        finally:
            record(success)

    response.body_iterator = record_on_completion()
    return response
