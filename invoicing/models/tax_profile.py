from __future__ import annotations

from sqlalchemy import Column, DateTime, ForeignKey, String

from invoicing.models.base import Base
from invoicing.models.user import _new_id
from invoicing.utils.datetime import utcnow


class TaxProfile(Base):
    __tablename__ = "tax_profiles"

    id = Column(String(36), primary_key=True, default=_new_id)
    # Owning user; immutable after creation
    user_id = Column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    legal_name = Column(String, nullable=False)
    vat_number = Column(String, nullable=False)
    address = Column(String, nullable=False)
    city = Column(String, nullable=False)
    zip_code = Column(String, nullable=False)
    country = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow, index=True
    )
