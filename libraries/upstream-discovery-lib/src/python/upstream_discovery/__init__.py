"""
upstream_discovery: find peer HTTP servers over UDP and fan out to them.

Quick start::

    import threading
    from upstream_discovery import (
        Announcer, DiscoveryListener, UpstreamAggregator, UpstreamRegistry,
    )

    registry = UpstreamRegistry()
    listener = DiscoveryListener("224.0.0.1:8888", registry)
    threading.Thread(target=listener.listen, daemon=True).start()

    Announcer("224.0.0.1:8888", port=8080).start()

    aggregator = UpstreamAggregator(registry)
    results = aggregator.aggregate(lambda address: fetch(address))
"""

from .exceptions import (
    DiscoveryError,
    InvalidAddressError,
    MalformedAnnouncementError,
    UpstreamDiscoveryError,
)
from .membership import MembershipEvents, MembershipSubscription, UpstreamRegistry
from .network import (
    DEFAULT_ANNOUNCE_INTERVAL,
    MAX_DATAGRAM_SIZE,
    Announcer,
    DiscoveryListener,
    decode_announcement,
    encode_announcement,
    is_multicast,
    join_host_port,
    split_host_port,
)
from .routing import AggregateResult, UpstreamAggregator, UpstreamQuery

__all__ = [
    # Exceptions
    "UpstreamDiscoveryError",
    "InvalidAddressError",
    "MalformedAnnouncementError",
    "DiscoveryError",
    # Membership
    "UpstreamRegistry",
    "MembershipEvents",
    "MembershipSubscription",
    # Network
    "DiscoveryListener",
    "Announcer",
    "DEFAULT_ANNOUNCE_INTERVAL",
    "MAX_DATAGRAM_SIZE",
    "encode_announcement",
    "decode_announcement",
    "split_host_port",
    "join_host_port",
    "is_multicast",
    # Routing
    "UpstreamAggregator",
    "UpstreamQuery",
    "AggregateResult",
]
