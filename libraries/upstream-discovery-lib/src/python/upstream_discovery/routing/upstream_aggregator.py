"""Upstream aggregator: fan a query out to every registered upstream.

Each round snapshots the registry, runs the query against every
upstream concurrently and returns the successful documents.  Upstreams
whose query fails are evicted from the registry; they come back with
their next announcement.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any

from prometheus_client import Counter, Histogram

from ..membership.upstream_registry import UpstreamRegistry
from .aggregate_result import AggregateResult

logger = logging.getLogger(__name__)

FAN_OUT_ROUNDS_COUNTER = Counter(
    "pag_fan_out_rounds_total",
    "Total number of fan-out rounds",
)
FAN_OUT_EVICTIONS_COUNTER = Counter(
    "pag_fan_out_evictions_total",
    "Total number of upstreams evicted after a failed query",
)
FAN_OUT_DURATION_HISTOGRAM = Histogram(
    "pag_fan_out_duration_seconds",
    "Duration of a fan-out round in seconds",
)

UpstreamQuery = Callable[[str], Any]


class UpstreamAggregator:
    """Concurrent fan-out over an :class:`UpstreamRegistry` snapshot.

    Parameters:
        registry: Source of upstream addresses, pruned on failure.
        thread_name_prefix: Prefix for the per-round worker threads.
    """

    def __init__(self, registry: UpstreamRegistry, thread_name_prefix: str = "fan-out") -> None:
        self._registry = registry
        self._thread_name_prefix = thread_name_prefix

    def aggregate(self, query: UpstreamQuery) -> list[AggregateResult]:
        """Run *query* against every known upstream.

        Args:
            query: Called once per upstream with its ``host:port``.
                Any exception it raises marks that upstream as failed.

        Returns:
            One result per successful upstream, in completion order.
            Empty when no upstream is known or every query failed.
        """
        start_time = time.time()
        FAN_OUT_ROUNDS_COUNTER.inc()
        try:
            upstreams = self._registry.snapshot()
            if not upstreams:
                return []

            logger.debug("Fanning out to %d upstream(s)", len(upstreams))
            results: list[AggregateResult] = []
            with ThreadPoolExecutor(
                max_workers=len(upstreams),
                thread_name_prefix=self._thread_name_prefix,
            ) as executor:
                futures = {executor.submit(query, address): address for address in upstreams}
                for future in as_completed(futures):
                    address = futures[future]
                    try:
                        document = future.result()
                    except Exception as exc:
                        self._evict(address, exc)
                        continue
                    results.append(AggregateResult(address=address, document=document))
            return results
        finally:
            FAN_OUT_DURATION_HISTOGRAM.observe(time.time() - start_time)

    def _evict(self, address: str, error: Exception) -> None:
        logger.warning("Removing upstream %s after failed query: %s", address, error)
        FAN_OUT_EVICTIONS_COUNTER.inc()
        self._registry.remove(address)
