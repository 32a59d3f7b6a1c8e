"""Tests for the managed exception hierarchy."""

from http import HTTPStatus

import pytest
from pydantic import ValidationError

from managed_exceptions import (
    ErrorDetails,
    InvalidArgumentException,
    ManagedException,
    UnexpectedDocumentException,
    UpstreamException,
    UpstreamUnreachableException,
)


def test_upstream_failures_are_bad_gateway():
    error = UpstreamUnreachableException(url="http://10.0.0.1:8080/tables", reason="refused")

    assert isinstance(error, UpstreamException)
    assert isinstance(error, ManagedException)
    assert error.status_code == HTTPStatus.BAD_GATEWAY
    assert error.diagnostic_details["url"] == "http://10.0.0.1:8080/tables"


def test_summary_includes_status_and_code():
    error = UnexpectedDocumentException(url="http://10.0.0.1:8080/tables", invalid_key="table_names")

    assert error.summary().startswith("502 | 20005 | ")
    assert "table_names" in error.summary()


def test_validation_errors_become_field_details():
    errors = [
        {"loc": ("table_name",), "msg": "Field required"},
        {"loc": ("filter", "limit"), "msg": "Input should be a valid integer"},
    ]

    error = InvalidArgumentException.from_validation_errors(errors)

    assert error.status_code == HTTPStatus.BAD_REQUEST
    assert error.diagnostic_details == {
        "table_name": "Field required",
        "filter.limit": "Input should be a valid integer",
    }


def test_diagnostic_code_must_have_five_digits():
    with pytest.raises(ValidationError):
        ErrorDetails(status_code=HTTPStatus.BAD_REQUEST, diagnostic_code="400", message="bad")
