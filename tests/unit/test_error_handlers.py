"""Tests for the JSON error envelope installed by register_error_handlers."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from countrydex.api.errors import register_error_handlers
from countrydex.core.errors import (
    CountrydexError,
    EntryNotFoundError,
    MissingFieldsError,
    PayloadTooLargeError,
    StoreError,
    UnsupportedFileTypeError,
)


@pytest.fixture
def error_client() -> TestClient:
    """A bare application whose routes raise each error type."""
    app = FastAPI()
    register_error_handlers(app)

    errors = {
        "missing": MissingFieldsError("Country name and image are required"),
        "type": UnsupportedFileTypeError("Only image files are allowed"),
        "large": PayloadTooLargeError("too big"),
        "notfound": EntryNotFoundError("Country not found"),
        "store": StoreError("database is locked"),
        "disk": PermissionError("Permission denied: 'uploads/x.png'"),
    }

    @app.get("/raise/{kind}")
    async def raise_error(kind: str):
        raise errors[kind]

    @app.get("/number/{value}")
    async def number(value: int):
        return {"value": value}

    return TestClient(app)


@pytest.mark.parametrize(
    "kind,status",
    [
        ("missing", 400),
        ("type", 400),
        ("large", 413),
        ("notfound", 404),
        ("store", 500),
        ("disk", 500),
    ],
)
def test_error_status_codes(error_client, kind, status):
    """Each error type should map to its HTTP status."""
    resp = error_client.get(f"/raise/{kind}")
    assert resp.status_code == status
    assert list(resp.json()) == ["error"]


def test_message_is_passed_through(error_client):
    """The exception message should become the error text."""
    resp = error_client.get("/raise/store")
    assert resp.json() == {"error": "database is locked"}


def test_validation_error_uses_envelope(error_client):
    """Request validation failures should use the same envelope."""
    resp = error_client.get("/number/abc")
    assert resp.status_code == 422
    assert "value" in resp.json()["error"]


def test_unknown_route_uses_envelope(error_client):
    """Framework 404s should use the same envelope."""
    resp = error_client.get("/nowhere")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Not Found"}


def test_all_errors_share_base_class():
    """Every core error should derive from CountrydexError."""
    for cls in (MissingFieldsError, UnsupportedFileTypeError, PayloadTooLargeError, EntryNotFoundError, StoreError):
        assert issubclass(cls, CountrydexError)
