from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from invoicing.models import Invoice, TaxProfile
from invoicing.repositories.interfaces import InvoiceFilter, OwnedKey
from invoicing.repositories.sqlalchemy._common import equals, within


def _owned_by(user_id: str):
    # Invoices carry no user column: ownership is one hop away, via the tax profile
    return Invoice.tax_profile_id.in_(select(TaxProfile.id).where(TaxProfile.user_id == user_id))


def _key_conditions(key: OwnedKey):
    return [Invoice.id == key.id, _owned_by(key.user_id)]


def _filter_conditions(flt: InvoiceFilter):
    return [
        _owned_by(flt.user_id),
        *equals(Invoice.tax_profile_id, flt.tax_profile_id),
        *equals(Invoice.amount, flt.amount),
        *equals(Invoice.status, flt.status),
        *equals(Invoice.currency, flt.currency),
        *within(Invoice.created_at, flt.created_at),
        *within(Invoice.updated_at, flt.updated_at),
    ]


class SqlAlchemyInvoiceRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, data: Mapping[str, Any]) -> Invoice:
        invoice = Invoice(**data)
        self._session.add(invoice)
        await self._session.flush()
        return invoice

    async def find_many(self, flt: InvoiceFilter, *, skip: int, take: int) -> list[Invoice]:
        stmt = (
            select(Invoice)
            .where(*_filter_conditions(flt))
            .order_by(Invoice.created_at.desc(), Invoice.id.desc())
            .offset(skip)
            .limit(take)
        )
        return list((await self._session.execute(stmt)).scalars().all())

    async def find_one(self, key: OwnedKey) -> Invoice | None:
        stmt = select(Invoice).where(*_key_conditions(key))
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def update(self, key: OwnedKey, data: Mapping[str, Any]) -> Invoice | None:
        if not data:
            return await self.find_one(key)
        stmt = (
            update(Invoice)
            .where(*_key_conditions(key))
            .values(**data)
            .returning(Invoice)
            .execution_options(synchronize_session="fetch")
        )
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def delete(self, key: OwnedKey) -> bool:
        stmt = (
            delete(Invoice)
            .where(*_key_conditions(key))
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return bool(result.rowcount)
