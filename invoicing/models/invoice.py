from __future__ import annotations

from enum import Enum

from sqlalchemy import Column, DateTime, Float, ForeignKey, String
from sqlalchemy import Enum as SQLEnum

from invoicing.models.base import Base
from invoicing.models.user import _new_id
from invoicing.utils.datetime import utcnow


class InvoiceStatus(str, Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    CANCELLED = "CANCELLED"


class Currency(str, Enum):
    EUR = "EUR"
    USD = "USD"
    GBP = "GBP"


class Invoice(Base):
    __tablename__ = "invoices"

    id = Column(String(36), primary_key=True, default=_new_id)
    # No direct user reference: ownership goes through the tax profile
    tax_profile_id = Column(
        String(36), ForeignKey("tax_profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    amount = Column(Float, nullable=False)
    status = Column(
        SQLEnum(InvoiceStatus, name="invoice_status", native_enum=False, length=16),
        nullable=False,
        default=InvoiceStatus.PENDING,
    )
    currency = Column(
        SQLEnum(Currency, name="invoice_currency", native_enum=False, length=3),
        nullable=False,
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
