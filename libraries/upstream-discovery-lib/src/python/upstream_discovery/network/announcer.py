"""Announcer: periodically advertises this process to its peers.

Sends one announcement datagram carrying the local HTTP port to the
configured (usually multicast) address on a fixed interval.  Sends are
fire-and-forget: failures are logged and the next attempt happens on
the next tick.
"""

from __future__ import annotations

import logging
import socket
import threading

from prometheus_client import Counter

from ..exceptions import InvalidAddressError
from .address_util import is_multicast, split_host_port
from .announcement_protocol import encode_announcement

logger = logging.getLogger(__name__)

DEFAULT_ANNOUNCE_INTERVAL = 30.0

ANNOUNCEMENTS_COUNTER = Counter(
    "pag_announcements_total",
    "Total number of announcement datagrams sent",
    ["outcome"],
)


class Announcer:
    """Periodic sender of announcement datagrams.

    Parameters:
        address: ``host:port`` the announcements are sent to.
        port: The local listening port being advertised.
        interval: Seconds between two announcements.
        ttl: Multicast time-to-live (1 keeps datagrams on the local
            network segment).
    """

    def __init__(
        self,
        address: str,
        port: int,
        interval: float = DEFAULT_ANNOUNCE_INTERVAL,
        ttl: int = 1,
    ) -> None:
        host, target_port = split_host_port(address)
        if not host:
            raise InvalidAddressError(address, "announce address needs a host")
        self._address = address
        self._target = (host, target_port)
        self._payload = encode_announcement(port)
        self._port = port
        self._interval = interval
        self._ttl = ttl

        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def interval(self) -> float:
        return self._interval

    # ── Sending ───────────────────────────────────────────────────

    def announce(self) -> None:
        """Send a single announcement.

        Raises:
            OSError: If the datagram cannot be sent.
        """
        logger.debug("Sending announcement to %s with port %d", self._address, self._port)
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM, socket.IPPROTO_UDP) as sock:
            if is_multicast(self._target[0]):
                sock.setsockopt(socket.IPPROTO_IP, socket.IP_MULTICAST_TTL, self._ttl)
            sock.sendto(self._payload, self._target)

    # ── Lifecycle ─────────────────────────────────────────────────

    def start(self) -> None:
        """Start the background announcement loop."""
        if self._thread is not None:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._loop, name="announcer", daemon=True)
        self._thread.start()
        logger.info(
            "Sending announcements to %s every %.1fs", self._address, self._interval
        )

    def stop(self) -> None:
        """Stop the background announcement loop."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=5.0)
            self._thread = None

    def _loop(self) -> None:
        while not self._stop_event.is_set():
            try:
                self.announce()
                ANNOUNCEMENTS_COUNTER.labels(outcome="sent").inc()
            except OSError as exc:
                ANNOUNCEMENTS_COUNTER.labels(outcome="failed").inc()
                logger.warning("Announcement to %s failed: %s", self._address, exc)
            self._stop_event.wait(self._interval)
