"""Helpers for ``host:port`` addresses."""

from __future__ import annotations

import ipaddress

from ..exceptions import InvalidAddressError


def split_host_port(address: str) -> tuple[str, int]:
    """Split ``host:port`` into its parts.

    The host may be empty (``":8080"``) and may be a bracketed IPv6
    literal (``"[::1]:8080"``).

    Raises:
        InvalidAddressError: If the port is missing or not in 0–65535.
    """
    host, sep, port = address.rpartition(":")
    if not sep:
        raise InvalidAddressError(address, "missing port")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    try:
        port_number = int(port)
    except ValueError as exc:
        raise InvalidAddressError(address, f"port {port!r} is not a number") from exc
    if not 0 <= port_number <= 65535:
        raise InvalidAddressError(address, f"port {port_number} out of range")
    return host, port_number


def join_host_port(host: str, port: int) -> str:
    """Build a ``host:port`` address, bracketing IPv6 literals."""
    if ":" in host:
        return f"[{host}]:{port}"
    return f"{host}:{port}"


def is_multicast(host: str) -> bool:
    """Check whether *host* is a multicast IP literal."""
    try:
        return ipaddress.ip_address(host).is_multicast
    except ValueError:
        return False
