"""Upstream registry: the set of currently known upstream addresses.

The registry is fed by the discovery listener and pruned by the
aggregator whenever a query to an upstream fails.  It is shared by
every long-running task of the process, so all access goes through a
single reader/writer lock.
"""

from __future__ import annotations

import logging

from prometheus_client import Gauge
from readerwriterlock import rwlock

from .membership_events import MembershipEvents, MembershipSubscription

logger = logging.getLogger(__name__)

REGISTERED_UPSTREAMS = Gauge(
    "pag_registry_upstreams",
    "Number of upstream servers currently registered",
)


class UpstreamRegistry:
    """Thread-safe set of upstream ``host:port`` addresses.

    ``add`` and ``remove`` take the write lock, ``snapshot`` the read
    lock.  The notification mailbox is created lazily and its reference
    is guarded by the same lock.
    """

    def __init__(self) -> None:
        self._lock = rwlock.RWLockFair()
        self._upstreams: set[str] = set()
        self._mailbox: tuple[MembershipEvents, MembershipSubscription] | None = None

    # ── Query Methods ─────────────────────────────────────────────

    def snapshot(self) -> list[str]:
        """Return a copy of the current membership (unordered)."""
        with self._lock.gen_rlock():
            return list(self._upstreams)

    def __contains__(self, address: object) -> bool:
        with self._lock.gen_rlock():
            return address in self._upstreams

    def __len__(self) -> int:
        with self._lock.gen_rlock():
            return len(self._upstreams)

    # ── Mutation Methods ──────────────────────────────────────────

    def add(self, address: str) -> None:
        """Record an upstream and publish it to subscribers.

        Adding a known address leaves the set unchanged but still
        emits a notification.  Notifications are dropped when nobody
        has drained the previous one.
        """
        with self._lock.gen_wlock():
            if address not in self._upstreams:
                self._upstreams.add(address)
                REGISTERED_UPSTREAMS.set(len(self._upstreams))
                logger.info("Upstream server discovered: %s", address)
            events, _ = self._ensure_mailbox()
            if not events.offer(address):
                logger.debug("Membership event dropped for %s", address)

    def remove(self, address: str) -> None:
        """Forget an upstream.  Unknown addresses are ignored."""
        with self._lock.gen_wlock():
            if address in self._upstreams:
                self._upstreams.discard(address)
                REGISTERED_UPSTREAMS.set(len(self._upstreams))
                logger.info("Upstream server removed: %s", address)

    # ── Notifications ─────────────────────────────────────────────

    def subscribe(self) -> MembershipSubscription:
        """Return the (lazily created) membership event mailbox.

        Every call returns the same read-only view over a single-slot
        mailbox.
        """
        with self._lock.gen_wlock():
            _, subscription = self._ensure_mailbox()
            return subscription

    def _ensure_mailbox(self) -> tuple[MembershipEvents, MembershipSubscription]:
        # Caller must hold the write lock.
        if self._mailbox is None:
            events = MembershipEvents()
            self._mailbox = (events, MembershipSubscription(events))
        return self._mailbox
