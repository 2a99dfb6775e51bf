from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from invoicing.models import User


class SqlAlchemyUserRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, data: Mapping[str, Any]) -> User:
        user = User(**data)
        self._session.add(user)
        await self._session.flush()
        return user

    async def find_one(self, *, id: str | None = None, email: str | None = None) -> User | None:
        if id is None and email is None:
            raise ValueError("find_one needs id or email")
        stmt = select(User)
        if id is not None:
            stmt = stmt.where(User.id == id)
        if email is not None:
            # Exact, case-sensitive match
            stmt = stmt.where(User.email == email)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def update(self, user_id: str, data: Mapping[str, Any]) -> User | None:
        if not data:
            return await self.find_one(id=user_id)
        stmt = update(User).where(User.id == user_id).values(**data).returning(User)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def delete(self, user_id: str) -> bool:
        stmt = delete(User).where(User.id == user_id).execution_options(synchronize_session=False)
        result = await self._session.execute(stmt)
        return bool(result.rowcount)
