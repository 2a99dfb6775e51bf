from __future__ import annotations

import uuid

from sqlalchemy import Column, Date, DateTime, String

from invoicing.models.base import Base
from invoicing.utils.datetime import utcnow


def _new_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_new_id)
    email = Column(String, nullable=False, unique=True, index=True)
    # Hashed; never serialized outward
    password = Column(String, nullable=False)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    birth_date = Column(Date, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
