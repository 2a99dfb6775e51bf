"""DTOs for tax profiles exposed via the public API."""

from __future__ import annotations

from pydantic import ConfigDict

from invoicing.dto._base import CamelModel


class TaxProfileDTO(CamelModel):
    id: str
    user_id: str
    legal_name: str
    vat_number: str
    address: str
    city: str
    zip_code: str
    country: str
    created_at: str
    updated_at: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "b7f9d0c2-6a43-4f3c-9a55-0c3f7cbe1d2a",
                "userId": "3c1d0a0e-6a43-4f3c-9a55-0c3f7cbe1d2a",
                "legalName": "Acme S.r.l.",
                "vatNumber": "IT01234567890",
                "address": "Via Roma 1",
                "city": "Milano",
                "zipCode": "20100",
                "country": "Italy",
                "createdAt": "2024-01-01T12:00:00.000Z",
                "updatedAt": "2024-01-01T12:00:00.000Z",
            }
        },
    )
