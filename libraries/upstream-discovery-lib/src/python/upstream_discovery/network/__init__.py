from .address_util import is_multicast, join_host_port, split_host_port
from .announcement_protocol import (
    MAX_DATAGRAM_SIZE,
    PAYLOAD_SIZE,
    decode_announcement,
    encode_announcement,
)
from .announcer import DEFAULT_ANNOUNCE_INTERVAL, Announcer
from .discovery_listener import DiscoveryListener

__all__ = [
    "Announcer",
    "DEFAULT_ANNOUNCE_INTERVAL",
    "DiscoveryListener",
    "MAX_DATAGRAM_SIZE",
    "PAYLOAD_SIZE",
    "decode_announcement",
    "encode_announcement",
    "is_multicast",
    "join_host_port",
    "split_host_port",
]
