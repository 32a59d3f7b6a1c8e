import json
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Optional
from urllib.parse import unquote

import pytest
from fastapi.testclient import TestClient
from request_handler import RequestThreadPool
from upstream_discovery import UpstreamRegistry

from policy_aggregator.configs import AggregatorConfig
from policy_aggregator.server import create_app, create_injector


class FakePolicyEngine:
    """A local HTTP server answering like a policy engine."""

    def __init__(self, tables: list[str], status: int = 200, content_type: str = "application/json",
                 document: Optional[dict] = None):
        self.tables = tables
        self.status = status
        self.content_type = content_type
        self.document = document
        self.paths: list[str] = []

        engine = self

        class _Handler(BaseHTTPRequestHandler):
            def do_GET(self):
                engine.paths.append(self.path)
                payload = json.dumps(engine.respond(self.path)).encode("utf-8")
                self.send_response(engine.status)
                self.send_header("Content-Type", engine.content_type)
                self.send_header("Content-Length", str(len(payload)))
                self.end_headers()
                self.wfile.write(payload)

            def log_message(self, format, *args):
                pass

        self._server = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
        self._thread = threading.Thread(target=self._server.serve_forever, daemon=True)
        self._thread.start()

    @property
    def address(self) -> str:
        host, port = self._server.server_address[:2]
        return f"{host}:{port}"

    def respond(self, path: str) -> dict:
        if self.document is not None:
            return self.document
        if path.startswith("/tables/"):
            table_name = unquote(path[len("/tables/"):])
            return {"table": table_name, "rows": [{"engine": self.address}]}
        return {"table_names": self.tables}

    def close(self) -> None:
        self._server.shutdown()
        self._server.server_close()


@pytest.fixture
def policy_engines():
    engines: list[FakePolicyEngine] = []

    def start(**kwargs) -> FakePolicyEngine:
        kwargs.setdefault("tables", ["policies"])
        engine = FakePolicyEngine(**kwargs)
        engines.append(engine)
        return engine

    yield start
    for engine in engines:
        engine.close()


@pytest.fixture
def registry():
    return UpstreamRegistry()


@pytest.fixture
def config():
    config = AggregatorConfig()
    config.upstreams_timeout = 5.0
    return config


@pytest.fixture
def client(config, registry):
    RequestThreadPool.init(max_workers=8)
    injector = create_injector(config, registry)
    with TestClient(create_app(injector)) as test_client:
        yield test_client
    RequestThreadPool.shutdown()
