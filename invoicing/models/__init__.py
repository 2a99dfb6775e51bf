# invoicing/models/__init__.py
# Module imports so Alembic finds every table
from .base import Base
from .invoice import Currency, Invoice, InvoiceStatus
from .tax_profile import TaxProfile
from .user import User

__all__ = [
    "Base",
    "User",
    "TaxProfile",
    "Invoice",
    "InvoiceStatus",
    "Currency",
]
