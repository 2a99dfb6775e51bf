"""User account use cases: signup, login and profile maintenance."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from typing import Any

import structlog
from sqlalchemy.exc import IntegrityError

from invoicing.core import messages
from invoicing.core.exceptions import ConflictError, ResourceNotFoundError, UnauthorizedError
from invoicing.core.security import PasswordHasher, TokenIssuer
from invoicing.dto import UserDTO
from invoicing.dto.mappers import map_user
from invoicing.infra.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class UpdateUserInput:
    id: str
    email: str | None = None
    password: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    birth_date: date | None = None


class UserService:
    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        hasher: PasswordHasher,
        tokens: TokenIssuer,
    ) -> None:
        self._uow_factory = uow_factory
        self._hasher = hasher
        self._tokens = tokens

    async def signup(self, email: str, password: str) -> str:
        """Register ``email`` and return a session token for the new user."""
        try:
            async with self._uow_factory() as uow:
                if await uow.users.find_one(email=email) is not None:
                    raise ConflictError(messages.USER_ALREADY_REGISTERED)
                user = await uow.users.create(
                    {"email": email, "password": self._hasher.hash(password)}
                )
                user_id = str(user.id)
        except IntegrityError as exc:
            # Lost a race against a concurrent signup with the same email
            raise ConflictError(messages.USER_ALREADY_REGISTERED) from exc
        logger.info("user_signed_up", user_id=user_id)
        return self._tokens.sign(user_id)

    async def login(self, email: str, password: str) -> str:
        async with self._uow_factory() as uow:
            user = await uow.users.find_one(email=email)
        # Same error for unknown email and wrong password
        if user is None or not self._hasher.compare(password, user.password):
            raise UnauthorizedError(messages.INVALID_CREDENTIALS)
        return self._tokens.sign(str(user.id))

    async def get_profile(self, user_id: str) -> UserDTO:
        async with self._uow_factory() as uow:
            user = await uow.users.find_one(id=user_id)
            if user is None:
                raise ResourceNotFoundError(messages.USER_NOT_FOUND)
            return map_user(user)

    async def update(self, dto: UpdateUserInput) -> UserDTO:
        changes: dict[str, Any] = {}
        if dto.email is not None:
            changes["email"] = dto.email
        if dto.password is not None:
            changes["password"] = self._hasher.hash(dto.password)
        if dto.first_name is not None:
            changes["first_name"] = dto.first_name
        if dto.last_name is not None:
            changes["last_name"] = dto.last_name
        if dto.birth_date is not None:
            changes["birth_date"] = dto.birth_date

        try:
            async with self._uow_factory() as uow:
                current = await uow.users.find_one(id=dto.id)
                if current is None:
                    raise ResourceNotFoundError(messages.USER_NOT_FOUND)
                if dto.email is not None and dto.email != current.email:
                    if await uow.users.find_one(email=dto.email) is not None:
                        raise ConflictError(messages.USER_ALREADY_REGISTERED)
                user = await uow.users.update(dto.id, changes)
                if user is None:
                    raise ResourceNotFoundError(messages.USER_NOT_FOUND)
                result = map_user(user)
        except IntegrityError as exc:
            raise ConflictError(messages.USER_ALREADY_REGISTERED) from exc
        return result

    async def delete(self, user_id: str) -> None:
        async with self._uow_factory() as uow:
            if await uow.users.find_one(id=user_id) is None:
                raise ResourceNotFoundError(messages.USER_NOT_FOUND)
            if not await uow.users.delete(user_id):
                raise ResourceNotFoundError(messages.USER_NOT_FOUND)
        logger.info("user_deleted", user_id=user_id)
