"""DTOs for the user profile exposed via the public API."""

from __future__ import annotations

from pydantic import ConfigDict, Field

from invoicing.dto._base import CamelModel


class UserDTO(CamelModel):
    id: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    birth_date: str | None = Field(default=None, description="YYYY-MM-DD")
    created_at: str
    updated_at: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "3c1d0a0e-6a43-4f3c-9a55-0c3f7cbe1d2a",
                "email": "jane@example.com",
                "firstName": "Jane",
                "lastName": "Doe",
                "birthDate": "1990-04-01",
                "createdAt": "2024-01-01T12:00:00.000Z",
                "updatedAt": "2024-01-01T12:00:00.000Z",
            }
        },
    )
