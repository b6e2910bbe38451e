"""HTTP middleware feeding request metrics into the aggregator."""

from .request_metrics import track_request_metrics

__all__ = ["track_request_metrics"]
