from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, Query

from invoicing.api.deps import get_current_user_id, get_tax_profile_service
from invoicing.core import messages
from invoicing.schemas.common import ErrorResponse, MessageResponse
from invoicing.schemas.tax_profile import (
    TaxProfileCreateRequest,
    TaxProfileListResponse,
    TaxProfileResponse,
    TaxProfileUpdateRequest,
)
from invoicing.services.filters import TaxProfileListOptions
from invoicing.services.tax_profiles import (
    CreateTaxProfileInput,
    TaxProfileService,
    UpdateTaxProfileInput,
)

router = APIRouter(prefix="/tax-profile", tags=["tax-profile"])

_NOT_FOUND = {404: {"model": ErrorResponse, "description": messages.TAX_PROFILE_NOT_FOUND}}


@router.get(
    "",
    response_model=TaxProfileListResponse,
    responses={422: {"model": ErrorResponse}},
    summary="List the caller's tax profiles",
)
async def list_tax_profiles(
    legal_name: str | None = Query(None, alias="legalName", description="Substring match"),
    vat_number: str | None = Query(None, alias="vatNumber", description="Substring match"),
    address: str | None = Query(None, description="Substring match"),
    city: str | None = Query(None, description="Substring match"),
    country: str | None = Query(None, description="Substring match"),
    zip_code: str | None = Query(None, alias="zipCode", description="Substring match"),
    gte_created_at: datetime | None = Query(None, alias="gteCreatedAt"),
    lte_created_at: datetime | None = Query(None, alias="lteCreatedAt"),
    gte_updated_at: datetime | None = Query(None, alias="gteUpdatedAt"),
    lte_updated_at: datetime | None = Query(None, alias="lteUpdatedAt"),
    skip: int | None = Query(None, ge=0, description="Default 0"),
    take: int | None = Query(None, ge=0, le=messages.MAX_TAKE, description="Default 10"),
    user_id: str = Depends(get_current_user_id),
    svc: TaxProfileService = Depends(get_tax_profile_service),
):
    options = TaxProfileListOptions(
        user_id=user_id,
        legal_name=legal_name,
        vat_number=vat_number,
        address=address,
        city=city,
        country=country,
        zip_code=zip_code,
        gte_created_at=gte_created_at,
        lte_created_at=lte_created_at,
        gte_updated_at=gte_updated_at,
        lte_updated_at=lte_updated_at,
        skip=skip,
        take=take,
    )
    return TaxProfileListResponse(tax_profiles=await svc.list(options))


@router.get(
    "/{tax_profile_id}",
    response_model=TaxProfileResponse,
    responses=_NOT_FOUND,
    summary="Get one of the caller's tax profiles",
)
async def get_tax_profile(
    tax_profile_id: str,
    user_id: str = Depends(get_current_user_id),
    svc: TaxProfileService = Depends(get_tax_profile_service),
):
    return TaxProfileResponse(tax_profile=await svc.get_one(tax_profile_id, user_id))


@router.post(
    "",
    status_code=201,
    response_model=TaxProfileResponse,
    responses={422: {"model": ErrorResponse}},
    summary="Create a tax profile for the caller",
)
async def create_tax_profile(
    payload: TaxProfileCreateRequest,
    user_id: str = Depends(get_current_user_id),
    svc: TaxProfileService = Depends(get_tax_profile_service),
):
    dto = CreateTaxProfileInput(user_id=user_id, **payload.model_dump())
    return TaxProfileResponse(tax_profile=await svc.create(dto))


@router.put(
    "/{tax_profile_id}",
    response_model=TaxProfileResponse,
    responses={**_NOT_FOUND, 422: {"model": ErrorResponse}},
    summary="Update one of the caller's tax profiles",
)
async def update_tax_profile(
    tax_profile_id: str,
    payload: TaxProfileUpdateRequest,
    user_id: str = Depends(get_current_user_id),
    svc: TaxProfileService = Depends(get_tax_profile_service),
):
    dto = UpdateTaxProfileInput(id=tax_profile_id, user_id=user_id, **payload.model_dump())
    return TaxProfileResponse(tax_profile=await svc.update(dto))


@router.delete(
    "/{tax_profile_id}",
    response_model=MessageResponse,
    responses=_NOT_FOUND,
    summary="Delete one of the caller's tax profiles",
)
async def delete_tax_profile(
    tax_profile_id: str,
    user_id: str = Depends(get_current_user_id),
    svc: TaxProfileService = Depends(get_tax_profile_service),
):
    await svc.delete(tax_profile_id, user_id)
    return MessageResponse(message=messages.TAX_PROFILE_DELETED)
