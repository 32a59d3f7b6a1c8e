"""Tests for the discovery listener over loopback UDP."""

import queue
import socket
import threading

import pytest

from upstream_discovery import Announcer, DiscoveryError, DiscoveryListener, UpstreamRegistry, encode_announcement


@pytest.fixture
def registry():
    return UpstreamRegistry()


@pytest.fixture
def running_listener(registry):
    listener = DiscoveryListener("127.0.0.1:0", registry, poll_interval=0.1)
    ready = threading.Event()
    errors: list[BaseException] = []

    def run():
        try:
            listener.listen(ready)
        except Exception as exc:
            errors.append(exc)

    thread = threading.Thread(target=run, daemon=True)
    thread.start()
    assert ready.wait(timeout=5.0)
    yield listener
    listener.stop()
    thread.join(timeout=5.0)
    assert not thread.is_alive()
    assert errors == []


def _send(payload: bytes, target: tuple[str, int]) -> None:
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.sendto(payload, target)


def test_announcement_registers_source_ip_and_port(running_listener, registry):
    events = registry.subscribe()

    _send(encode_announcement(1111), running_listener.bound_address)

    assert events.get(timeout=5.0) == "127.0.0.1:1111"
    assert registry.snapshot() == ["127.0.0.1:1111"]


def test_malformed_datagrams_are_skipped(running_listener, registry):
    events = registry.subscribe()

    _send(b"\x04", running_listener.bound_address)
    _send(b"\x00\x00\x04\x57", running_listener.bound_address)
    _send(b"\x00\x00", running_listener.bound_address)
    _send(encode_announcement(2222), running_listener.bound_address)

    # Datagrams are handled in order, so the valid one arrives last
    assert events.get(timeout=5.0) == "127.0.0.1:2222"
    assert registry.snapshot() == ["127.0.0.1:2222"]


def test_ready_is_set_after_bind(running_listener):
    host, port = running_listener.bound_address
    assert host == "127.0.0.1"
    assert port != 0


def test_stop_before_listen_returns_immediately(registry):
    listener = DiscoveryListener("127.0.0.1:0", registry, poll_interval=0.1)
    ready = threading.Event()
    listener.stop()

    listener.listen(ready)

    assert ready.is_set()


def test_invalid_address_raises_discovery_error(registry):
    listener = DiscoveryListener("127.0.0.1:port", registry)
    ready = threading.Event()

    with pytest.raises(DiscoveryError):
        listener.listen(ready)
    assert not ready.is_set()


def test_bind_failure_raises_discovery_error(registry):
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as taken:
        taken.bind(("127.0.0.1", 0))
        port = taken.getsockname()[1]
        listener = DiscoveryListener(f"127.0.0.1:{port}", registry)

        with pytest.raises(DiscoveryError) as exc:
            listener.listen()

    assert isinstance(exc.value.__cause__, OSError)
    assert exc.value.address == f"127.0.0.1:{port}"


def _free_udp_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.bind(("", 0))
        return sock.getsockname()[1]


def test_multicast_group_round_trip(registry):
    port = _free_udp_port()
    group = f"224.0.0.1:{port}"
    listener = DiscoveryListener(group, registry, poll_interval=0.1)
    ready = threading.Event()
    thread = threading.Thread(target=listener.listen, args=(ready,), daemon=True)
    thread.start()
    assert ready.wait(timeout=5.0)
    events = registry.subscribe()

    try:
        announcer = Announcer(group, port=1111)
        address = None
        # Datagrams may be lost; a few announcements are enough on loopback
        for _ in range(3):
            announcer.announce()
            try:
                address = events.get(timeout=1.5)
                break
            except queue.Empty:
                continue
    finally:
        listener.stop()
        thread.join(timeout=5.0)

    assert address is not None
    assert address.endswith(":1111")
    assert registry.snapshot() == [address]
