from .aggregate_result import AggregateResult
from .upstream_aggregator import UpstreamAggregator, UpstreamQuery

__all__ = ["AggregateResult", "UpstreamAggregator", "UpstreamQuery"]
