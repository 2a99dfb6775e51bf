from __future__ import annotations

from datetime import date

from pydantic import BaseModel, EmailStr, Field, constr

from invoicing.dto import UserDTO
from invoicing.dto._base import CamelModel


class SignupRequest(BaseModel):
    email: EmailStr = Field(description="Login e-mail (unique)")
    password: constr(strip_whitespace=True, min_length=8) = Field(
        description="At least 8 characters"
    )


class LoginRequest(BaseModel):
    email: EmailStr
    password: constr(min_length=1)


class UpdateUserRequest(CamelModel):
    email: EmailStr | None = None
    password: constr(strip_whitespace=True, min_length=8) | None = None
    first_name: constr(strip_whitespace=True, min_length=2) | None = None
    last_name: constr(strip_whitespace=True, min_length=2) | None = None
    birth_date: date | None = None


class AuthResponse(BaseModel):
    message: str
    jwt: str


class UserResponse(BaseModel):
    user: UserDTO
