"""Tests for the request handler base class and the CORS guard."""

from typing import Optional

import pytest
from fastapi import FastAPI, Request, Response
from fastapi.testclient import TestClient
from managed_exceptions import UnexpectedStatusException
from pydantic import BaseModel

from request_handler import CorsGuardMiddleware, RequestHandler, RequestThreadPool


class EchoRequest(BaseModel):
    name: str
    count: Optional[int] = None


class EchoResponse(BaseModel):
    greeting: str


class EchoHandler(RequestHandler[EchoRequest, EchoResponse]):

    def _on_validate(self, request: EchoRequest):
        if request.name == "upstream":
            raise UnexpectedStatusException(url="http://10.0.0.1:8080/tables", status_code=503)

    def _on_invoke(self, request: EchoRequest) -> EchoResponse:
        if request.name == "crash":
            raise RuntimeError("unexpected")
        return EchoResponse(greeting=f"hello {request.name} x{request.count or 1}")


@pytest.fixture(scope="module")
def client():
    RequestThreadPool.init(max_workers=4)
    handler = EchoHandler()
    app = FastAPI()
    app.add_middleware(CorsGuardMiddleware, allow_methods=["GET"])

    @app.get("/echo/{name}")
    async def echo(request: Request) -> Response:
        return await handler.invoke(request)

    @app.get("/echo")
    async def echo_query(request: Request) -> Response:
        return await handler.invoke(request)

    with TestClient(app) as test_client:
        yield test_client
    RequestThreadPool.shutdown()


def test_path_and_query_parameters_build_the_request(client):
    response = client.get("/echo/world", params={"count": "3"})

    assert response.status_code == 200
    assert response.json() == {"greeting": "hello world x3"}


def test_path_parameter_wins_over_query(client):
    response = client.get("/echo/world", params={"name": "other"})

    assert response.json() == {"greeting": "hello world x1"}


def test_invalid_parameters_are_bad_request(client):
    response = client.get("/echo")

    assert response.status_code == 400
    body = response.json()
    assert body["diagnostic_code"] == "00400"
    assert "name" in body["diagnostic_details"]


def test_managed_exception_keeps_its_status(client):
    response = client.get("/echo/upstream")

    assert response.status_code == 502
    assert response.json()["diagnostic_code"] == "20002"


def test_unexpected_exception_is_internal_error(client):
    response = client.get("/echo/crash")

    assert response.status_code == 500
    assert response.json()["diagnostic_code"] == "10500"


def test_options_is_answered_for_any_path(client):
    response = client.options("/anything")

    assert response.status_code == 200
    assert response.headers["Access-Control-Allow-Origin"] == "*"
    assert response.headers["Access-Control-Allow-Methods"] == "GET, OPTIONS"


@pytest.mark.parametrize("method", ["POST", "PUT", "DELETE", "PATCH"])
def test_other_methods_are_not_allowed(client, method):
    response = client.request(method, "/echo/world")

    assert response.status_code == 405
    assert response.headers["Allow"] == "GET, OPTIONS"
    assert response.headers["Access-Control-Allow-Origin"] == "*"


def test_cors_headers_on_successful_responses(client):
    response = client.get("/echo/world")

    assert response.headers["Access-Control-Allow-Origin"] == "*"
    assert response.headers["Access-Control-Allow-Methods"] == "GET, OPTIONS"
