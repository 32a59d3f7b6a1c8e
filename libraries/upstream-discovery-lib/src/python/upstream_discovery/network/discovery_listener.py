"""Discovery listener: learns upstream servers from announcements.

Binds a UDP socket (joining the multicast group when the configured
host is a multicast address) and turns every well-formed announcement
into a ``source_ip:announced_port`` entry in the
:class:`UpstreamRegistry`.  Malformed datagrams are logged, counted and
skipped; socket errors end the loop with :class:`DiscoveryError`.
"""

from __future__ import annotations

import logging
import socket
import struct
import threading

from prometheus_client import Counter

from ..exceptions import DiscoveryError, InvalidAddressError, MalformedAnnouncementError
from ..membership.upstream_registry import UpstreamRegistry
from .address_util import is_multicast, join_host_port, split_host_port
from .announcement_protocol import MAX_DATAGRAM_SIZE, decode_announcement

logger = logging.getLogger(__name__)

DATAGRAMS_COUNTER = Counter(
    "pag_discovery_datagrams_total",
    "Total number of well-formed announcement datagrams received",
)
MALFORMED_DATAGRAMS_COUNTER = Counter(
    "pag_discovery_malformed_datagrams_total",
    "Total number of malformed announcement datagrams discarded",
)


class DiscoveryListener:
    """Blocking UDP listener feeding an :class:`UpstreamRegistry`.

    Parameters:
        address: ``host:port`` to listen on, typically a multicast
            group such as ``"224.0.0.1:8888"``.  Unicast hosts are bound
            directly; port ``0`` picks an ephemeral port.
        registry: Registry that receives discovered upstreams.
        interface: Local interface used to join the multicast group.
        poll_interval: Socket timeout in seconds, i.e. how quickly
            :meth:`stop` is noticed.
    """

    def __init__(
        self,
        address: str,
        registry: UpstreamRegistry,
        interface: str = "0.0.0.0",
        poll_interval: float = 1.0,
    ) -> None:
        self._address = address
        self._registry = registry
        self._interface = interface
        self._poll_interval = poll_interval
        self._stop_event = threading.Event()
        self._bound_address: tuple[str, int] | None = None

    @property
    def address(self) -> str:
        return self._address

    @property
    def bound_address(self) -> tuple[str, int] | None:
        """The ``(host, port)`` actually bound, once listening."""
        return self._bound_address

    # ── Lifecycle ─────────────────────────────────────────────────

    def listen(self, ready: threading.Event | None = None) -> None:
        """Run the receive loop until :meth:`stop` is called.

        Args:
            ready: Optional event set exactly once, after the socket is
                bound and before the first blocking read.

        Raises:
            DiscoveryError: If the socket cannot be bound, or a read
                fails after binding.
        """
        logger.info("Starting discovery listener on %s", self._address)
        sock = self._bind()
        try:
            if ready is not None:
                ready.set()
            while not self._stop_event.is_set():
                try:
                    payload, source = sock.recvfrom(MAX_DATAGRAM_SIZE)
                except socket.timeout:
                    continue
                except OSError as exc:
                    if self._stop_event.is_set():
                        break
                    raise DiscoveryError(self._address, str(exc)) from exc
                self._handle_datagram(payload, source[0], source[1])
        finally:
            sock.close()
        logger.info("Discovery listener on %s stopped", self._address)

    def stop(self) -> None:
        """Ask the receive loop to exit at its next poll tick."""
        self._stop_event.set()

    # ── Internal ──────────────────────────────────────────────────

    def _bind(self) -> socket.socket:
        try:
            host, port = split_host_port(self._address)
        except InvalidAddressError as exc:
            raise DiscoveryError(self._address, exc.message) from exc

        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM, socket.IPPROTO_UDP)
        try:
            if is_multicast(host):
                # Several processes on one host may share the group port
                sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
                if hasattr(socket, "SO_REUSEPORT"):
                    try:
                        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEPORT, 1)
                    except OSError as exc:
                        logger.debug("SO_REUSEPORT unavailable on %s: %s", self._address, exc)
                sock.bind(("", port))
                mreq = struct.pack(
                    "4s4s",
                    socket.inet_aton(host),
                    socket.inet_aton(self._interface),
                )
                sock.setsockopt(socket.IPPROTO_IP, socket.IP_ADD_MEMBERSHIP, mreq)
            else:
                sock.bind((host, port))
            sock.settimeout(self._poll_interval)
        except OSError as exc:
            sock.close()
            raise DiscoveryError(self._address, str(exc)) from exc

        self._bound_address = sock.getsockname()[:2]
        return sock

    def _handle_datagram(self, payload: bytes, source_host: str, source_port: int) -> None:
        source = join_host_port(source_host, source_port)
        try:
            port = decode_announcement(payload)
        except MalformedAnnouncementError as exc:
            MALFORMED_DATAGRAMS_COUNTER.inc()
            logger.warning(
                "Received malformed UDP with %d bytes from %s: %r (%s)",
                len(payload),
                source,
                payload,
                exc.message,
            )
            return

        DATAGRAMS_COUNTER.inc()
        logger.debug("Received %d bytes UDP from %s: %r", len(payload), source, payload)
        self._registry.add(join_host_port(source_host, port))
