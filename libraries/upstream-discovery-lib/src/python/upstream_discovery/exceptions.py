"""Exception hierarchy for upstream discovery and fan-out."""

from __future__ import annotations


class UpstreamDiscoveryError(Exception):
    """Base exception for all upstream discovery errors."""

    def __init__(self, message: str = "") -> None:
        self.message = message
        super().__init__(message)


# ── Address Errors ────────────────────────────────────────────────

class InvalidAddressError(UpstreamDiscoveryError):
    """Raised when an address is not in ``host:port`` form."""

    def __init__(self, address: str, reason: str = "") -> None:
        self.address = address
        msg = f"Invalid address {address!r}."
        if reason:
            msg += f" Reason: {reason}"
        super().__init__(msg)


# ── Wire Errors ───────────────────────────────────────────────────

class MalformedAnnouncementError(UpstreamDiscoveryError):
    """Raised when a datagram does not decode to a valid announcement."""

    def __init__(self, payload: bytes, reason: str = "") -> None:
        self.payload = payload
        msg = f"Malformed announcement of {len(payload)} bytes."
        if reason:
            msg += f" Reason: {reason}"
        super().__init__(msg)


# ── Socket Errors ─────────────────────────────────────────────────

class DiscoveryError(UpstreamDiscoveryError):
    """Raised when the discovery socket cannot be bound or read.

    This is fatal for the listener loop; it is never re-bound.
    """

    def __init__(self, address: str, reason: str = "") -> None:
        self.address = address
        msg = f"Discovery on {address} failed."
        if reason:
            msg += f" Reason: {reason}"
        super().__init__(msg)
