from __future__ import annotations

from pydantic import Field, constr

from invoicing.dto import InvoiceDTO
from invoicing.dto._base import CamelModel
from invoicing.models import Currency, InvoiceStatus


class InvoiceCreateRequest(CamelModel):
    tax_profile_id: constr(strip_whitespace=True, min_length=1) = Field(
        description="Tax profile the invoice is issued against"
    )
    amount: float = Field(ge=0, description="Non-negative amount")
    status: InvoiceStatus
    currency: Currency


class InvoiceUpdateRequest(CamelModel):
    # taxProfileId is fixed at creation
    amount: float | None = Field(default=None, ge=0)
    status: InvoiceStatus | None = None
    currency: Currency | None = None


class InvoiceResponse(CamelModel):
    invoice: InvoiceDTO


class InvoiceListResponse(CamelModel):
    invoices: list[InvoiceDTO] = Field(default_factory=list)
