from __future__ import annotations

from pydantic import ConfigDict, Field, constr

from invoicing.dto import TaxProfileDTO
from invoicing.dto._base import CamelModel

_Text = constr(strip_whitespace=True, min_length=2)


class TaxProfileCreateRequest(CamelModel):
    legal_name: _Text
    vat_number: _Text
    address: _Text
    city: _Text
    zip_code: _Text
    country: _Text

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "legalName": "Acme S.r.l.",
                "vatNumber": "IT01234567890",
                "address": "Via Roma 1",
                "city": "Milano",
                "zipCode": "20100",
                "country": "Italy",
            }
        }
    )


class TaxProfileUpdateRequest(CamelModel):
    legal_name: _Text | None = None
    vat_number: _Text | None = None
    address: _Text | None = None
    city: _Text | None = None
    zip_code: _Text | None = None
    country: _Text | None = None


class TaxProfileResponse(CamelModel):
    tax_profile: TaxProfileDTO


class TaxProfileListResponse(CamelModel):
    tax_profiles: list[TaxProfileDTO] = Field(default_factory=list)
