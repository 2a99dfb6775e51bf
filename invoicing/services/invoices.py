"""Invoice use cases.

Invoices have no user column. Every lookup is scoped through the owning tax
profile, and creation first asks the tax profile service whether the
referenced profile belongs to the caller.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import structlog

from invoicing.core import messages
from invoicing.core.exceptions import ResourceNotFoundError
from invoicing.dto import InvoiceDTO
from invoicing.dto.mappers import map_invoice
from invoicing.infra.unit_of_work import UnitOfWork
from invoicing.models import Currency, InvoiceStatus
from invoicing.repositories.interfaces import OwnedKey
from invoicing.services.filters import InvoiceListOptions, build_invoice_filter, resolve_page
from invoicing.services.tax_profiles import TaxProfileService

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CreateInvoiceInput:
    user_id: str
    tax_profile_id: str
    amount: float
    status: InvoiceStatus
    currency: Currency


@dataclass(frozen=True)
class UpdateInvoiceInput:
    id: str
    user_id: str
    amount: float | None = None
    status: InvoiceStatus | None = None
    currency: Currency | None = None

    def changes(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.amount is not None:
            out["amount"] = float(self.amount)
        if self.status is not None:
            out["status"] = InvoiceStatus(self.status)
        if self.currency is not None:
            out["currency"] = Currency(self.currency)
        return out


class InvoiceService:
    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        tax_profiles: TaxProfileService,
    ) -> None:
        self._uow_factory = uow_factory
        self._tax_profiles = tax_profiles

    async def create(self, dto: CreateInvoiceInput) -> InvoiceDTO:
        # Foreign or unknown profile: NotFound propagates and nothing is written
        await self._tax_profiles.get_one(dto.tax_profile_id, dto.user_id)
        async with self._uow_factory() as uow:
            invoice = await uow.invoices.create(
                {
                    "tax_profile_id": dto.tax_profile_id,
                    "amount": float(dto.amount),
                    "status": InvoiceStatus(dto.status),
                    "currency": Currency(dto.currency),
                }
            )
            result = map_invoice(invoice)
        logger.info(
            "invoice_created",
            invoice_id=result.id,
            tax_profile_id=dto.tax_profile_id,
            user_id=dto.user_id,
        )
        return result

    async def list(self, options: InvoiceListOptions) -> list[InvoiceDTO]:
        flt = build_invoice_filter(options)
        page = resolve_page(options.skip, options.take)
        async with self._uow_factory() as uow:
            invoices = await uow.invoices.find_many(flt, skip=page.skip, take=page.take)
            return [map_invoice(i) for i in invoices]

    async def get_one(self, id: str, user_id: str) -> InvoiceDTO:
        async with self._uow_factory() as uow:
            invoice = await uow.invoices.find_one(OwnedKey(id=id, user_id=user_id))
            if invoice is None:
                raise ResourceNotFoundError(messages.INVOICE_NOT_FOUND)
            return map_invoice(invoice)

    async def update(self, dto: UpdateInvoiceInput) -> InvoiceDTO:
        await self.get_one(dto.id, dto.user_id)
        async with self._uow_factory() as uow:
            invoice = await uow.invoices.update(
                OwnedKey(id=dto.id, user_id=dto.user_id), dto.changes()
            )
            if invoice is None:
                raise ResourceNotFoundError(messages.INVOICE_NOT_FOUND)
            return map_invoice(invoice)

    async def delete(self, id: str, user_id: str) -> None:
        await self.get_one(id, user_id)
        async with self._uow_factory() as uow:
            deleted = await uow.invoices.delete(OwnedKey(id=id, user_id=user_id))
            if not deleted:
                raise ResourceNotFoundError(messages.INVOICE_NOT_FOUND)
        logger.info("invoice_deleted", invoice_id=id, user_id=user_id)
