from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, Query

from invoicing.api.deps import get_current_user_id, get_invoice_service
from invoicing.core import messages
from invoicing.models import Currency, InvoiceStatus
from invoicing.schemas.common import ErrorResponse, MessageResponse
from invoicing.schemas.invoice import (
    InvoiceCreateRequest,
    InvoiceListResponse,
    InvoiceResponse,
    InvoiceUpdateRequest,
)
from invoicing.services.filters import InvoiceListOptions
from invoicing.services.invoices import CreateInvoiceInput, InvoiceService, UpdateInvoiceInput

router = APIRouter(prefix="/invoice", tags=["invoice"])

_NOT_FOUND = {404: {"model": ErrorResponse, "description": messages.INVOICE_NOT_FOUND}}


@router.get(
    "",
    response_model=InvoiceListResponse,
    responses={422: {"model": ErrorResponse}},
    summary="List the caller's invoices",
)
async def list_invoices(
    tax_profile_id: str | None = Query(None, alias="taxProfileId"),
    amount: float | None = Query(None, ge=0, description="Exact match"),
    status: InvoiceStatus | None = Query(None),
    currency: Currency | None = Query(None),
    gte_created_at: datetime | None = Query(None, alias="gteCreatedAt"),
    lte_created_at: datetime | None = Query(None, alias="lteCreatedAt"),
    gte_updated_at: datetime | None = Query(None, alias="gteUpdatedAt"),
    lte_updated_at: datetime | None = Query(None, alias="lteUpdatedAt"),
    skip: int | None = Query(None, ge=0, description="Default 0"),
    take: int | None = Query(None, ge=0, le=messages.MAX_TAKE, description="Default 10"),
    user_id: str = Depends(get_current_user_id),
    svc: InvoiceService = Depends(get_invoice_service),
):
    options = InvoiceListOptions(
        user_id=user_id,
        tax_profile_id=tax_profile_id,
        amount=amount,
        status=status,
        currency=currency,
        gte_created_at=gte_created_at,
        lte_created_at=lte_created_at,
        gte_updated_at=gte_updated_at,
        lte_updated_at=lte_updated_at,
        skip=skip,
        take=take,
    )
    return InvoiceListResponse(invoices=await svc.list(options))


@router.get(
    "/{invoice_id}",
    response_model=InvoiceResponse,
    responses=_NOT_FOUND,
    summary="Get one of the caller's invoices",
)
async def get_invoice(
    invoice_id: str,
    user_id: str = Depends(get_current_user_id),
    svc: InvoiceService = Depends(get_invoice_service),
):
    return InvoiceResponse(invoice=await svc.get_one(invoice_id, user_id))


@router.post(
    "",
    status_code=201,
    response_model=InvoiceResponse,
    responses={
        404: {"model": ErrorResponse, "description": messages.TAX_PROFILE_NOT_FOUND},
        422: {"model": ErrorResponse},
    },
    summary="Issue an invoice against one of the caller's tax profiles",
)
async def create_invoice(
    payload: InvoiceCreateRequest,
    user_id: str = Depends(get_current_user_id),
    svc: InvoiceService = Depends(get_invoice_service),
):
    dto = CreateInvoiceInput(user_id=user_id, **payload.model_dump())
    return InvoiceResponse(invoice=await svc.create(dto))


@router.put(
    "/{invoice_id}",
    response_model=InvoiceResponse,
    responses={**_NOT_FOUND, 422: {"model": ErrorResponse}},
    summary="Update one of the caller's invoices",
)
async def update_invoice(
    invoice_id: str,
    payload: InvoiceUpdateRequest,
    user_id: str = Depends(get_current_user_id),
    svc: InvoiceService = Depends(get_invoice_service),
):
    dto = UpdateInvoiceInput(id=invoice_id, user_id=user_id, **payload.model_dump())
    return InvoiceResponse(invoice=await svc.update(dto))


@router.delete(
    "/{invoice_id}",
    response_model=MessageResponse,
    responses=_NOT_FOUND,
    summary="Delete one of the caller's invoices",
)
async def delete_invoice(
    invoice_id: str,
    user_id: str = Depends(get_current_user_id),
    svc: InvoiceService = Depends(get_invoice_service),
):
    await svc.delete(invoice_id, user_id)
    return MessageResponse(message=messages.INVOICE_DELETED)
