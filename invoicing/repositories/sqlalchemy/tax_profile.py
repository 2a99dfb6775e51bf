from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from invoicing.models import TaxProfile
from invoicing.repositories.interfaces import OwnedKey, TaxProfileFilter
from invoicing.repositories.sqlalchemy._common import contains, within


def _key_conditions(key: OwnedKey):
    return [TaxProfile.id == key.id, TaxProfile.user_id == key.user_id]


def _filter_conditions(flt: TaxProfileFilter):
    return [
        TaxProfile.user_id == flt.user_id,
        *contains(TaxProfile.legal_name, flt.legal_name),
        *contains(TaxProfile.vat_number, flt.vat_number),
        *contains(TaxProfile.address, flt.address),
        *contains(TaxProfile.city, flt.city),
        *contains(TaxProfile.country, flt.country),
        *contains(TaxProfile.zip_code, flt.zip_code),
        *within(TaxProfile.created_at, flt.created_at),
        *within(TaxProfile.updated_at, flt.updated_at),
    ]


class SqlAlchemyTaxProfileRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, data: Mapping[str, Any]) -> TaxProfile:
        profile = TaxProfile(**data)
        self._session.add(profile)
        await self._session.flush()
        return profile

    async def find_many(self, flt: TaxProfileFilter, *, skip: int, take: int) -> list[TaxProfile]:
        stmt = (
            select(TaxProfile)
            .where(*_filter_conditions(flt))
            .order_by(TaxProfile.updated_at.desc(), TaxProfile.id.desc())
            .offset(skip)
            .limit(take)
        )
        return list((await self._session.execute(stmt)).scalars().all())

    async def find_one(self, key: OwnedKey) -> TaxProfile | None:
        stmt = select(TaxProfile).where(*_key_conditions(key))
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def update(self, key: OwnedKey, data: Mapping[str, Any]) -> TaxProfile | None:
        """Apply ``data`` to the row matching the whole key; None when nothing matched."""
        if not data:
            return await self.find_one(key)
        stmt = (
            update(TaxProfile)
            .where(*_key_conditions(key))
            .values(**data)
            .returning(TaxProfile)
        )
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def delete(self, key: OwnedKey) -> bool:
        stmt = (
            delete(TaxProfile)
            .where(*_key_conditions(key))
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return bool(result.rowcount)
