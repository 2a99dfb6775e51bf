"""Tax profile use cases.

``get_one`` is the ownership checkpoint: update and delete go through it first,
and a profile owned by someone else is reported exactly like a missing one.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

import structlog

from invoicing.core import messages
from invoicing.core.exceptions import ResourceNotFoundError
from invoicing.dto import TaxProfileDTO
from invoicing.dto.mappers import map_tax_profile
from invoicing.infra.unit_of_work import UnitOfWork
from invoicing.repositories.interfaces import OwnedKey
from invoicing.services.filters import (
    TaxProfileListOptions,
    build_tax_profile_filter,
    resolve_page,
)

logger = structlog.get_logger(__name__)

_MUTABLE_FIELDS = ("legal_name", "vat_number", "address", "city", "zip_code", "country")


@dataclass(frozen=True)
class CreateTaxProfileInput:
    user_id: str
    legal_name: str
    vat_number: str
    address: str
    city: str
    zip_code: str
    country: str


@dataclass(frozen=True)
class UpdateTaxProfileInput:
    id: str
    user_id: str
    legal_name: str | None = None
    vat_number: str | None = None
    address: str | None = None
    city: str | None = None
    zip_code: str | None = None
    country: str | None = None

    def changes(self) -> dict[str, str]:
        return {f: getattr(self, f) for f in _MUTABLE_FIELDS if getattr(self, f) is not None}


class TaxProfileService:
    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def create(self, dto: CreateTaxProfileInput) -> TaxProfileDTO:
        async with self._uow_factory() as uow:
            profile = await uow.tax_profiles.create(
                {
                    "user_id": dto.user_id,
                    "legal_name": dto.legal_name,
                    "vat_number": dto.vat_number,
                    "address": dto.address,
                    "city": dto.city,
                    "zip_code": dto.zip_code,
                    "country": dto.country,
                }
            )
            result = map_tax_profile(profile)
        logger.info("tax_profile_created", tax_profile_id=result.id, user_id=dto.user_id)
        return result

    async def list(self, options: TaxProfileListOptions) -> list[TaxProfileDTO]:
        flt = build_tax_profile_filter(options)
        page = resolve_page(options.skip, options.take)
        async with self._uow_factory() as uow:
            profiles = await uow.tax_profiles.find_many(flt, skip=page.skip, take=page.take)
            return [map_tax_profile(p) for p in profiles]

    async def get_one(self, id: str, user_id: str) -> TaxProfileDTO:
        async with self._uow_factory() as uow:
            profile = await uow.tax_profiles.find_one(OwnedKey(id=id, user_id=user_id))
            if profile is None:
                raise ResourceNotFoundError(messages.TAX_PROFILE_NOT_FOUND)
            return map_tax_profile(profile)

    async def update(self, dto: UpdateTaxProfileInput) -> TaxProfileDTO:
        await self.get_one(dto.id, dto.user_id)
        async with self._uow_factory() as uow:
            # Ownership is part of the UPDATE filter too: a row that vanished
            # after the checkpoint yields NotFound, never a foreign write.
            profile = await uow.tax_profiles.update(
                OwnedKey(id=dto.id, user_id=dto.user_id), dto.changes()
            )
            if profile is None:
                raise ResourceNotFoundError(messages.TAX_PROFILE_NOT_FOUND)
            return map_tax_profile(profile)

    async def delete(self, id: str, user_id: str) -> None:
        await self.get_one(id, user_id)
        async with self._uow_factory() as uow:
            deleted = await uow.tax_profiles.delete(OwnedKey(id=id, user_id=user_id))
            if not deleted:
                raise ResourceNotFoundError(messages.TAX_PROFILE_NOT_FOUND)
        logger.info("tax_profile_deleted", tax_profile_id=id, user_id=user_id)
