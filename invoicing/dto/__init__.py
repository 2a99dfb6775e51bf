"""Public DTO exports for FastAPI response models."""

from .invoice import InvoiceDTO
from .tax_profile import TaxProfileDTO
from .user import UserDTO

__all__ = [
    "InvoiceDTO",
    "TaxProfileDTO",
    "UserDTO",
]
