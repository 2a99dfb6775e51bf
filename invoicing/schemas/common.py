from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class FieldErrorItem(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    status: Literal["error"] = "error"
    message: str
    errors: list[FieldErrorItem] | None = None


class MessageResponse(BaseModel):
    message: str
