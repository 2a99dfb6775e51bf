"""In-memory stand-ins for the repository layer plus small auth fakes.

Services receive these through their constructors, exactly like the real
SQLAlchemy unit of work, so no global patching is involved.
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from datetime import UTC, datetime, timedelta
from typing import Any

from invoicing.models import Invoice, TaxProfile, User
from invoicing.repositories.interfaces import DateRange, InvoiceFilter, OwnedKey, TaxProfileFilter
from invoicing.services.container import ServiceContainer


class InMemoryStore:
    def __init__(self) -> None:
        self.users: dict[str, User] = {}
        self.tax_profiles: dict[str, TaxProfile] = {}
        self.invoices: dict[str, Invoice] = {}
        self.writes = 0
        self.commits = 0
        self.rollbacks = 0
        self._clock = datetime(2024, 1, 1, tzinfo=UTC)

    def tick(self) -> datetime:
        # Strictly increasing timestamps keep recency ordering deterministic
        self._clock += timedelta(seconds=1)
        return self._clock


def _in_range(value: datetime, rng: DateRange | None) -> bool:
    if rng is None:
        return True
    if rng.gte is not None and value < rng.gte:
        return False
    if rng.lte is not None and value > rng.lte:
        return False
    return True


def _contains(value: str, needle: str | None) -> bool:
    return needle is None or needle in value


class FakeUserRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def create(self, data: Mapping[str, Any]) -> User:
        now = self._store.tick()
        user = User(id=str(uuid.uuid4()), created_at=now, updated_at=now, **data)
        self._store.users[user.id] = user
        self._store.writes += 1
        return user

    async def find_one(self, *, id: str | None = None, email: str | None = None) -> User | None:
        for user in self._store.users.values():
            if id is not None and user.id != id:
                continue
            if email is not None and user.email != email:
                continue
            return user
        return None

    async def update(self, user_id: str, data: Mapping[str, Any]) -> User | None:
        user = self._store.users.get(user_id)
        if user is None:
            return None
        for k, v in data.items():
            setattr(user, k, v)
        user.updated_at = self._store.tick()
        self._store.writes += 1
        return user

    async def delete(self, user_id: str) -> bool:
        self._store.writes += 1
        return self._store.users.pop(user_id, None) is not None


class FakeTaxProfileRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store
        self.last_filter: TaxProfileFilter | None = None
        self.last_page: tuple[int, int] | None = None

    def _matches_key(self, profile: TaxProfile, key: OwnedKey) -> bool:
        return profile.id == key.id and profile.user_id == key.user_id

    async def create(self, data: Mapping[str, Any]) -> TaxProfile:
        now = self._store.tick()
        profile = TaxProfile(id=str(uuid.uuid4()), created_at=now, updated_at=now, **data)
        self._store.tax_profiles[profile.id] = profile
        self._store.writes += 1
        return profile

    async def find_many(self, flt: TaxProfileFilter, *, skip: int, take: int) -> list[TaxProfile]:
        self.last_filter = flt
        self.last_page = (skip, take)
        rows = [
            p
            for p in self._store.tax_profiles.values()
            if p.user_id == flt.user_id
            and _contains(p.legal_name, flt.legal_name)
            and _contains(p.vat_number, flt.vat_number)
            and _contains(p.address, flt.address)
            and _contains(p.city, flt.city)
            and _contains(p.country, flt.country)
            and _contains(p.zip_code, flt.zip_code)
            and _in_range(p.created_at, flt.created_at)
            and _in_range(p.updated_at, flt.updated_at)
        ]
        rows.sort(key=lambda p: p.updated_at, reverse=True)
        return rows[skip : skip + take]

    async def find_one(self, key: OwnedKey) -> TaxProfile | None:
        profile = self._store.tax_profiles.get(key.id)
        return profile if profile is not None and self._matches_key(profile, key) else None

    async def update(self, key: OwnedKey, data: Mapping[str, Any]) -> TaxProfile | None:
        profile = await self.find_one(key)
        if profile is None:
            return None
        for k, v in data.items():
            setattr(profile, k, v)
        profile.updated_at = self._store.tick()
        self._store.writes += 1
        return profile

    async def delete(self, key: OwnedKey) -> bool:
        if await self.find_one(key) is None:
            return False
        del self._store.tax_profiles[key.id]
        self._store.writes += 1
        return True


class FakeInvoiceRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store
        self.last_filter: InvoiceFilter | None = None

    def _owner(self, invoice: Invoice) -> str | None:
        profile = self._store.tax_profiles.get(invoice.tax_profile_id)
        return profile.user_id if profile is not None else None

    async def create(self, data: Mapping[str, Any]) -> Invoice:
        now = self._store.tick()
        invoice = Invoice(id=str(uuid.uuid4()), created_at=now, updated_at=now, **data)
        self._store.invoices[invoice.id] = invoice
        self._store.writes += 1
        return invoice

    async def find_many(self, flt: InvoiceFilter, *, skip: int, take: int) -> list[Invoice]:
        self.last_filter = flt
        rows = [
            i
            for i in self._store.invoices.values()
            if self._owner(i) == flt.user_id
            and (flt.tax_profile_id is None or i.tax_profile_id == flt.tax_profile_id)
            and (flt.amount is None or i.amount == flt.amount)
            and (flt.status is None or i.status == flt.status)
            and (flt.currency is None or i.currency == flt.currency)
            and _in_range(i.created_at, flt.created_at)
            and _in_range(i.updated_at, flt.updated_at)
        ]
        rows.sort(key=lambda i: i.created_at, reverse=True)
        return rows[skip : skip + take]

    async def find_one(self, key: OwnedKey) -> Invoice | None:
        invoice = self._store.invoices.get(key.id)
        if invoice is None or self._owner(invoice) != key.user_id:
            return None
        return invoice

    async def update(self, key: OwnedKey, data: Mapping[str, Any]) -> Invoice | None:
        invoice = await self.find_one(key)
        if invoice is None:
            return None
        for k, v in data.items():
            setattr(invoice, k, v)
        invoice.updated_at = self._store.tick()
        self._store.writes += 1
        return invoice

    async def delete(self, key: OwnedKey) -> bool:
        if await self.find_one(key) is None:
            return False
        del self._store.invoices[key.id]
        self._store.writes += 1
        return True


class StubUnitOfWork:
    def __init__(self, store: InMemoryStore, repos: dict[str, Any]) -> None:
        self._store = store
        self.users = repos["users"]
        self.tax_profiles = repos["tax_profiles"]
        self.invoices = repos["invoices"]

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if exc_type:
            self._store.rollbacks += 1
        else:
            self._store.commits += 1
        return False

    async def commit(self) -> None:  # pragma: no cover - not used
        return None

    async def rollback(self) -> None:  # pragma: no cover - not used
        return None


class FakeHasher:
    def hash(self, plaintext: str) -> str:
        return f"hashed::{plaintext}"

    def compare(self, plaintext: str, digest: str) -> bool:
        return digest == f"hashed::{plaintext}"


class FakeTokens:
    def sign(self, user_id: str) -> str:
        return f"token::{user_id}"

    def verify(self, token: str) -> str | None:
        prefix = "token::"
        return token[len(prefix) :] if token.startswith(prefix) else None


def build_fake_services(store: InMemoryStore) -> tuple[ServiceContainer, dict[str, Any]]:
    repos = {
        "users": FakeUserRepository(store),
        "tax_profiles": FakeTaxProfileRepository(store),
        "invoices": FakeInvoiceRepository(store),
    }
    services = ServiceContainer.build(
        lambda: StubUnitOfWork(store, repos), hasher=FakeHasher(), tokens=FakeTokens()
    )
    return services, repos
