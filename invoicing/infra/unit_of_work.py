"""Transaction boundary handed to the services.

One ``async with uow:`` block is one database transaction. The three
repositories share the block's session, so a service can read a tax profile
and write an invoice atomically.
"""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from invoicing.repositories.interfaces import (
    InvoiceRepository,
    TaxProfileRepository,
    UserRepository,
)
from invoicing.repositories.sqlalchemy import (
    SqlAlchemyInvoiceRepository,
    SqlAlchemyTaxProfileRepository,
    SqlAlchemyUserRepository,
)


class UnitOfWork(Protocol, AbstractAsyncContextManager["UnitOfWork"]):
    users: UserRepository
    tax_profiles: TaxProfileRepository
    invoices: InvoiceRepository

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class SqlAlchemyUnitOfWork(UnitOfWork):
    """Opens a session on enter; commits on clean exit, rolls back when the block raises."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: AsyncSession | None = None

    async def __aenter__(self) -> SqlAlchemyUnitOfWork:
        if self._session is not None:
            raise RuntimeError("SqlAlchemyUnitOfWork is not re-entrant")
        self._session = session = self._session_factory()
        self.users = SqlAlchemyUserRepository(session)
        self.tax_profiles = SqlAlchemyTaxProfileRepository(session)
        self.invoices = SqlAlchemyInvoiceRepository(session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        session, self._session = self._session, None
        if session is None:
            return
        try:
            if exc_type is None:
                await session.commit()
            else:
                await session.rollback()
        finally:
            await session.close()

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError("no active session; use the unit of work as a context manager")
        return self._session
