import logging

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from invoicing.api.errors import status_for
from invoicing.core import messages
from invoicing.core.config import Settings
from invoicing.core.exceptions import (
    ConflictError,
    DomainError,
    FieldError,
    ResourceNotFoundError,
    UnauthorizedError,
    ValidationError,
)
from invoicing.logging import REDACTED
from invoicing.main import create_app


class _SubclassedNotFound(ResourceNotFoundError):
    pass


@pytest.mark.parametrize(
    "exc, expected",
    [
        (ValidationError("bad"), 422),
        (ResourceNotFoundError("gone"), 404),
        (_SubclassedNotFound("gone"), 404),
        (UnauthorizedError("who"), 401),
        (ConflictError("dup"), 409),
        (DomainError("unclassified"), 500),
        (RuntimeError("boom"), 500),
    ],
)
def test_status_for_is_total(exc, expected):
    assert status_for(exc) == expected


def test_validation_error_carries_field_list():
    exc = ValidationError("Invalid", [FieldError("take", "must be >= 0")])
    assert [e.as_dict() for e in exc.errors] == [{"field": "take", "message": "must be >= 0"}]
    assert exc.message == "Invalid"


@pytest_asyncio.fixture
async def fake_client(fake_wiring):
    services, repos = fake_wiring
    settings = Settings(app_env="test", log_format="json", _env_file=None)
    app = create_app(settings=settings, services=services)

    @app.api_route("/__boom", methods=["GET", "POST"])
    async def boom():
        raise RuntimeError("secret internals")

    # Unhandled errors must be answered by the app itself, not re-raised
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac, repos


@pytest.mark.asyncio
async def test_health(fake_client):
    client, _ = fake_client
    r = await client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_request_id_echoes_back(fake_client):
    client, _ = fake_client
    r = await client.get("/health", headers={"X-Request-ID": "test-123"})
    assert r.headers.get("X-Request-ID") == "test-123"


@pytest.mark.asyncio
async def test_request_id_generated_when_missing(fake_client):
    client, _ = fake_client
    r = await client.get("/health")
    assert r.headers.get("X-Request-ID")


@pytest.mark.asyncio
async def test_unhandled_error_is_generic_500(fake_client):
    client, _ = fake_client
    r = await client.get("/__boom")
    assert r.status_code == 500
    assert r.json() == {"status": "error", "message": messages.INTERNAL_ERROR}
    assert "secret internals" not in r.text


@pytest.mark.asyncio
async def test_repository_failure_is_generic_500(fake_client):
    client, repos = fake_client

    async def explode(flt, *, skip, take):
        raise RuntimeError("connection reset")

    repos["tax_profiles"].find_many = explode

    r = await client.get("/tax-profile", headers={"Authorization": "Bearer token::u1"})
    assert r.status_code == 500
    assert r.json()["message"] == messages.INTERNAL_ERROR


@pytest.mark.asyncio
async def test_unknown_route_uses_error_body(fake_client):
    client, _ = fake_client
    r = await client.get("/nope")
    assert r.status_code == 404
    assert r.json()["status"] == "error"


@pytest.mark.asyncio
async def test_malformed_json_is_422(fake_client):
    client, _ = fake_client
    r = await client.post(
        "/user/signup", content=b"{not json", headers={"Content-Type": "application/json"}
    )
    assert r.status_code == 422
    assert r.json()["message"] == messages.VALIDATION_ERROR


def _events(caplog) -> list[dict]:
    # structlog hands the processed event dict to stdlib logging as the record message
    return [r.msg for r in caplog.records if isinstance(r.msg, dict)]


@pytest.mark.asyncio
async def test_unhandled_error_keeps_request_context(fake_client, caplog):
    client, _ = fake_client
    caplog.set_level(logging.INFO)

    r = await client.post(
        "/__boom",
        json={"email": "a@b.com", "password": "hunter2"},
        headers={"X-Request-ID": "rid-500"},
    )

    assert r.status_code == 500
    assert r.headers.get("X-Request-ID") == "rid-500"
    assert r.json() == {"status": "error", "message": messages.INTERNAL_ERROR}

    (event,) = [e for e in _events(caplog) if e["event"] == "unhandled_exception"]
    assert event["level"] == "error"
    assert event["request_id"] == "rid-500"
    assert event["path"] == "/__boom"
    assert event["method"] == "POST"
    assert event["body"] == {"email": "a@b.com", "password": REDACTED}
    assert "hunter2" not in caplog.text


@pytest.mark.asyncio
async def test_unhandled_error_gets_generated_request_id(fake_client):
    client, _ = fake_client
    r = await client.get("/__boom")
    assert r.status_code == 500
    assert r.headers.get("X-Request-ID")


@pytest.mark.asyncio
async def test_classified_errors_are_not_logged_as_errors(fake_client, caplog):
    client, _ = fake_client
    caplog.set_level(logging.INFO)
    auth = {"Authorization": "Bearer token::u1"}
    signup = {"email": "dup@example.com", "password": "password123"}

    assert (await client.get("/tax-profile/missing", headers=auth)).status_code == 404
    assert (await client.get("/user")).status_code == 401
    assert (await client.post("/user/signup", json=signup)).status_code == 201
    assert (await client.post("/user/signup", json=signup)).status_code == 409

    events = _events(caplog)
    assert [e["status"] for e in events if e["event"] == "http_request"] == [404, 401, 201, 409]
    assert not [e for e in events if e["level"] in ("error", "critical")]


@pytest.mark.asyncio
async def test_validation_failure_logs_a_warning(fake_client, caplog):
    client, _ = fake_client
    caplog.set_level(logging.INFO)

    r = await client.post("/user/signup", json={"email": "nope", "password": "x"})
    assert r.status_code == 422

    events = _events(caplog)
    (warning,) = [e for e in events if e["event"] == "validation_failed"]
    assert warning["level"] == "warning"
    assert {e["field"] for e in warning["errors"]} >= {"email", "password"}
    assert not [e for e in events if e["level"] in ("error", "critical")]
