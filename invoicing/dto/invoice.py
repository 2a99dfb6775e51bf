"""DTOs for invoices exposed via the public API."""

from __future__ import annotations

from invoicing.dto._base import CamelModel
from invoicing.models import Currency, InvoiceStatus


class InvoiceDTO(CamelModel):
    id: str
    tax_profile_id: str
    amount: float
    status: InvoiceStatus
    currency: Currency
    created_at: str
    updated_at: str
