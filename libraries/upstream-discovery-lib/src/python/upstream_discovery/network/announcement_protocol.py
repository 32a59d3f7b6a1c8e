"""Fixed-width announcement datagrams for upstream discovery.

Wire format:
    [2 bytes big-endian uint16: HTTP listening port]

The port is the whole UDP payload.  The announcing host is not part of
the payload; receivers take it from the datagram's source address.
"""

from __future__ import annotations

import struct

from ..exceptions import MalformedAnnouncementError

# 2-byte big-endian unsigned short
_PAYLOAD_FORMAT = "!H"
PAYLOAD_SIZE = struct.calcsize(_PAYLOAD_FORMAT)

# Receive buffer; larger datagrams are truncated and then rejected by length
MAX_DATAGRAM_SIZE = 32


def encode_announcement(port: int) -> bytes:
    """Encode a listening port as an announcement payload.

    Raises:
        ValueError: If *port* is not in 1–65535.
    """
    if not 1 <= port <= 65535:
        raise ValueError(f"Port {port} out of range 1-65535")
    return struct.pack(_PAYLOAD_FORMAT, port)


def decode_announcement(payload: bytes) -> int:
    """Decode an announcement payload into a port number.

    Raises:
        MalformedAnnouncementError: If the payload is not exactly
            ``PAYLOAD_SIZE`` bytes or carries port 0.
    """
    if len(payload) != PAYLOAD_SIZE:
        raise MalformedAnnouncementError(
            payload, f"expected {PAYLOAD_SIZE} bytes"
        )
    (port,) = struct.unpack(_PAYLOAD_FORMAT, payload)
    if port == 0:
        raise MalformedAnnouncementError(payload, "port 0 is not a listening port")
    return port
