"""Domain-level exception hierarchy for the service layer.

Every failure the API is expected to report to a client is one of the four
kinds below. Anything else reaching the error mapper is an internal failure.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str

    def as_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


class DomainError(Exception):
    """Base class for domain-specific failures: carries a message and a kind."""

    kind = "domain"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(DomainError):
    """Raised when input validation fails at the domain/service layer."""

    kind = "validation"

    def __init__(
        self,
        message: str,
        errors: list[FieldError] | None = None,
        *,
        code: str | None = None,
    ) -> None:
        super().__init__(message)
        self.errors = list(errors or [])
        self.code = code


class ResourceNotFoundError(DomainError):
    """Raised when an entity does not exist or is not owned by the caller."""

    kind = "not_found"


class UnauthorizedError(DomainError):
    """Raised when a credential is missing or invalid."""

    kind = "unauthorized"


class ConflictError(DomainError):
    """Raised when a uniqueness constraint would be violated (e.g. duplicate email)."""

    kind = "conflict"
