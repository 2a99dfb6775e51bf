"""SQLAlchemy-backed repository implementations."""

from .invoice import SqlAlchemyInvoiceRepository
from .tax_profile import SqlAlchemyTaxProfileRepository
from .user import SqlAlchemyUserRepository

__all__ = [
    "SqlAlchemyInvoiceRepository",
    "SqlAlchemyTaxProfileRepository",
    "SqlAlchemyUserRepository",
]
