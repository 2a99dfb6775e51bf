"""API dependency helpers and service providers."""

from __future__ import annotations

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from invoicing.core import messages
from invoicing.core.exceptions import UnauthorizedError
from invoicing.services.container import ServiceContainer
from invoicing.services.invoices import InvoiceService
from invoicing.services.tax_profiles import TaxProfileService
from invoicing.services.users import UserService

__all__ = [
    "get_services",
    "get_user_service",
    "get_tax_profile_service",
    "get_invoice_service",
    "get_current_user_id",
]

_bearer = HTTPBearer(auto_error=False)


def get_services(request: Request) -> ServiceContainer:
    return request.app.state.services


def get_user_service(services: ServiceContainer = Depends(get_services)) -> UserService:
    return services.users


def get_tax_profile_service(
    services: ServiceContainer = Depends(get_services),
) -> TaxProfileService:
    return services.tax_profiles


def get_invoice_service(services: ServiceContainer = Depends(get_services)) -> InvoiceService:
    return services.invoices


async def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    services: ServiceContainer = Depends(get_services),
) -> str:
    """Resolve the authenticated user id from ``Authorization: Bearer <jwt>``.

    The id comes from the token only; request bodies and query strings never
    influence which user a request is scoped to.
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError(messages.UNAUTHORIZED)
    user_id = services.tokens.verify(credentials.credentials)
    if not user_id:
        raise UnauthorizedError(messages.UNAUTHORIZED)
    return user_id
