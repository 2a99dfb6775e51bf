"""Repository abstractions for the service layer.

Repositories translate to and from the store and nothing more: no ownership
decisions and no response shaping. A compound key such as ``OwnedKey(id,
user_id)`` is applied verbatim, so callers decide which predicates to pass.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol

from invoicing.models import Currency, Invoice, InvoiceStatus, TaxProfile, User


@dataclass(frozen=True)
class DateRange:
    gte: datetime | None = None
    lte: datetime | None = None


@dataclass(frozen=True)
class OwnedKey:
    id: str
    user_id: str


@dataclass(frozen=True)
class TaxProfileFilter:
    user_id: str
    legal_name: str | None = None
    vat_number: str | None = None
    address: str | None = None
    city: str | None = None
    country: str | None = None
    zip_code: str | None = None
    created_at: DateRange | None = None
    updated_at: DateRange | None = None


@dataclass(frozen=True)
class InvoiceFilter:
    user_id: str
    tax_profile_id: str | None = None
    amount: float | None = None
    status: InvoiceStatus | None = None
    currency: Currency | None = None
    created_at: DateRange | None = None
    updated_at: DateRange | None = None


class UserRepository(Protocol):
    async def create(self, data: Mapping[str, Any]) -> User: ...

    async def find_one(self, *, id: str | None = None, email: str | None = None) -> User | None: ...

    async def update(self, user_id: str, data: Mapping[str, Any]) -> User | None: ...

    async def delete(self, user_id: str) -> bool: ...


class TaxProfileRepository(Protocol):
    async def create(self, data: Mapping[str, Any]) -> TaxProfile: ...

    async def find_many(
        self, flt: TaxProfileFilter, *, skip: int, take: int
    ) -> list[TaxProfile]: ...

    async def find_one(self, key: OwnedKey) -> TaxProfile | None: ...

    async def update(self, key: OwnedKey, data: Mapping[str, Any]) -> TaxProfile | None: ...

    async def delete(self, key: OwnedKey) -> bool: ...


class InvoiceRepository(Protocol):
    async def create(self, data: Mapping[str, Any]) -> Invoice: ...

    async def find_many(self, flt: InvoiceFilter, *, skip: int, take: int) -> list[Invoice]: ...

    async def find_one(self, key: OwnedKey) -> Invoice | None: ...

    async def update(self, key: OwnedKey, data: Mapping[str, Any]) -> Invoice | None: ...

    async def delete(self, key: OwnedKey) -> bool: ...
