"""Tests for the upstream client failure taxonomy against a local HTTP server."""

import json
import socket
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from client_handler import ClientHandler
from managed_exceptions import (
    UnexpectedContentTypeException,
    UnexpectedResponseException,
    UnexpectedStatusException,
    UpstreamException,
    UpstreamUnreachableException,
)

ROUTES = {
    "/ok": (200, "application/json", json.dumps({"table_names": ["a", "b"]})),
    "/charset": (200, "application/json; charset=utf-8", json.dumps({"ok": True})),
    "/error": (500, "application/json", json.dumps({"error": "boom"})),
    "/text": (200, "text/plain", "hello"),
    "/array": (200, "application/json", json.dumps(["a", "b"])),
    "/garbage": (200, "application/json", "{not json"),
}


class _RouteHandler(BaseHTTPRequestHandler):
    def do_GET(self):
        status, content_type, body = ROUTES.get(self.path, (404, "text/plain", "not found"))
        payload = body.encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    def log_message(self, format, *args):
        pass


class SampleClient(ClientHandler):
    pass


@pytest.fixture(scope="module")
def upstream_address():
    server = ThreadingHTTPServer(("127.0.0.1", 0), _RouteHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    host, port = server.server_address[:2]
    yield f"{host}:{port}"
    server.shutdown()
    server.server_close()


@pytest.fixture
def client():
    client = SampleClient(default_timeout=5.0)
    yield client
    client.close()


def _unused_address() -> str:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return f"127.0.0.1:{sock.getsockname()[1]}"


def test_url_for(client):
    assert client.url_for("10.0.0.1:8080", "tables") == "http://10.0.0.1:8080/tables"
    assert client.url_for("10.0.0.1:8080", "/tables/x") == "http://10.0.0.1:8080/tables/x"


def test_invoke_returns_document(client, upstream_address):
    assert client.invoke(upstream_address, "ok") == {"table_names": ["a", "b"]}


def test_content_type_parameters_are_ignored(client, upstream_address):
    assert client.invoke(upstream_address, "charset") == {"ok": True}


def test_unexpected_status(client, upstream_address):
    with pytest.raises(UnexpectedStatusException) as exc:
        client.invoke(upstream_address, "error")
    assert exc.value.diagnostic_details["status_code"] == "500"


def test_unexpected_content_type(client, upstream_address):
    with pytest.raises(UnexpectedContentTypeException):
        client.invoke(upstream_address, "text")


@pytest.mark.parametrize("api", ["array", "garbage"])
def test_unexpected_response(client, upstream_address, api):
    with pytest.raises(UnexpectedResponseException):
        client.invoke(upstream_address, api)


def test_unreachable_upstream(client):
    with pytest.raises(UpstreamUnreachableException):
        client.invoke(_unused_address(), "ok")


def test_failures_share_a_base_class(client, upstream_address):
    for api in ["error", "text", "garbage"]:
        with pytest.raises(UpstreamException):
            client.invoke(upstream_address, api)
