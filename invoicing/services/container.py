"""Service wiring, built once per process and handed to the API layer."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from invoicing.core.security import PasswordHasher, TokenIssuer
from invoicing.infra.unit_of_work import SqlAlchemyUnitOfWork, UnitOfWork
from invoicing.services.invoices import InvoiceService
from invoicing.services.tax_profiles import TaxProfileService
from invoicing.services.users import UserService


@dataclass(frozen=True)
class ServiceContainer:
    users: UserService
    tax_profiles: TaxProfileService
    invoices: InvoiceService
    tokens: TokenIssuer

    @classmethod
    def build(
        cls,
        uow_factory: Callable[[], UnitOfWork],
        *,
        hasher: PasswordHasher,
        tokens: TokenIssuer,
    ) -> ServiceContainer:
        tax_profiles = TaxProfileService(uow_factory)
        return cls(
            users=UserService(uow_factory, hasher, tokens),
            tax_profiles=tax_profiles,
            invoices=InvoiceService(uow_factory, tax_profiles),
            tokens=tokens,
        )

    @classmethod
    def from_session_factory(
        cls,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        hasher: PasswordHasher,
        tokens: TokenIssuer,
    ) -> ServiceContainer:
        return cls.build(
            lambda: SqlAlchemyUnitOfWork(session_factory), hasher=hasher, tokens=tokens
        )
