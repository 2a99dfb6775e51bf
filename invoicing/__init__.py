"""Multi-tenant invoicing backend: users, tax profiles and invoices."""

__all__ = []
