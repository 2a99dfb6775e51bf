# tests/conftest.py
import os

import pytest
import pytest_asyncio
from dotenv import load_dotenv
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import NullPool

from invoicing.core.config import Settings
from invoicing.core.security import JwtTokenIssuer, WerkzeugPasswordHasher
from invoicing.db import create_engine, create_session_factory
from invoicing.main import create_app
from invoicing.models import Base
from invoicing.services.container import ServiceContainer
from tests.factories import InMemoryStore, build_fake_services

# Load .env.test if available; TEST_DATABASE_URL selects a real Postgres,
# otherwise every test gets its own SQLite file.
load_dotenv(".env.test", override=False)
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL")
TEST_JWT_SECRET = "test-secret-key"


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def fake_wiring(store):
    """(services, repositories) over one in-memory store."""
    return build_fake_services(store)


@pytest.fixture
def fake_services(fake_wiring):
    return fake_wiring[0]


@pytest_asyncio.fixture(scope="function")
async def engine(tmp_path):
    url = TEST_DATABASE_URL or f"sqlite+aiosqlite:///{tmp_path / 'invoicing_test.db'}"
    # NullPool avoids connections crossing event loops
    eng = create_engine(url, poolclass=NullPool)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield eng
    finally:
        await eng.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def token_issuer() -> JwtTokenIssuer:
    return JwtTokenIssuer(TEST_JWT_SECRET, expires_in_seconds=600)


@pytest.fixture
def services(session_factory, token_issuer) -> ServiceContainer:
    # Cheap hash rounds keep the suite fast
    return ServiceContainer.from_session_factory(
        session_factory,
        hasher=WerkzeugPasswordHasher(method="pbkdf2:sha256:1000"),
        tokens=token_issuer,
    )


@pytest_asyncio.fixture
async def app_client(services):
    settings = Settings(jwt_secret=TEST_JWT_SECRET, app_env="test")
    app = create_app(settings=settings, services=services)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def signup(app_client):
    """Register a user through the API and return its Authorization header."""

    async def _signup(email: str, password: str = "password123") -> dict[str, str]:
        r = await app_client.post("/user/signup", json={"email": email, "password": password})
        assert r.status_code == 201, r.text
        return {"Authorization": f"Bearer {r.json()['jwt']}"}

    return _signup


TAX_PROFILE_PAYLOAD = {
    "legalName": "Acme S.r.l.",
    "vatNumber": "IT01234567890",
    "address": "Via Roma 1",
    "city": "Milano",
    "zipCode": "20100",
    "country": "Italy",
}


@pytest.fixture
def create_tax_profile(app_client):
    async def _create(headers: dict[str, str], **overrides) -> dict:
        payload = {**TAX_PROFILE_PAYLOAD, **overrides}
        r = await app_client.post("/tax-profile", json=payload, headers=headers)
        assert r.status_code == 201, r.text
        return r.json()["taxProfile"]

    return _create


@pytest.fixture
def create_invoice(app_client):
    async def _create(
        headers: dict[str, str],
        tax_profile_id: str,
        *,
        amount: float = 100.0,
        status: str = "PENDING",
        currency: str = "EUR",
    ) -> dict:
        r = await app_client.post(
            "/invoice",
            json={
                "taxProfileId": tax_profile_id,
                "amount": amount,
                "status": status,
                "currency": currency,
            },
            headers=headers,
        )
        assert r.status_code == 201, r.text
        return r.json()["invoice"]

    return _create
