"""Entity -> response projection mappers."""

from __future__ import annotations

from invoicing.dto.invoice import InvoiceDTO
from invoicing.dto.tax_profile import TaxProfileDTO
from invoicing.dto.user import UserDTO
from invoicing.models import Currency, Invoice, InvoiceStatus, TaxProfile, User
from invoicing.utils.datetime import to_iso


def map_user(user: User) -> UserDTO:
    # password is deliberately absent from the projection
    return UserDTO(
        id=str(user.id),
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        birth_date=user.birth_date.isoformat() if user.birth_date else None,
        created_at=to_iso(user.created_at),
        updated_at=to_iso(user.updated_at),
    )


def map_tax_profile(profile: TaxProfile) -> TaxProfileDTO:
    return TaxProfileDTO(
        id=str(profile.id),
        user_id=str(profile.user_id),
        legal_name=profile.legal_name,
        vat_number=profile.vat_number,
        address=profile.address,
        city=profile.city,
        zip_code=profile.zip_code,
        country=profile.country,
        created_at=to_iso(profile.created_at),
        updated_at=to_iso(profile.updated_at),
    )


def map_invoice(invoice: Invoice) -> InvoiceDTO:
    return InvoiceDTO(
        id=str(invoice.id),
        tax_profile_id=str(invoice.tax_profile_id),
        amount=float(invoice.amount),
        status=InvoiceStatus(invoice.status),
        currency=Currency(invoice.currency),
        created_at=to_iso(invoice.created_at),
        updated_at=to_iso(invoice.updated_at),
    )
