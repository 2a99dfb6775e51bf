"""Ownership-scoped query construction shared by the tax profile and invoice services.

Callers hand in a typed options object whose ``user_id`` comes from the
authenticated principal. The builders return explicit filter structs for the
repository layer, in which an absent option contributes no predicate.
Text options are matched as substrings; everything else must match exactly.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from invoicing.core import messages
from invoicing.core.exceptions import FieldError, ValidationError
from invoicing.models import Currency, InvoiceStatus
from invoicing.repositories.interfaces import DateRange, InvoiceFilter, TaxProfileFilter
from invoicing.utils.datetime import as_utc


@dataclass(frozen=True)
class Page:
    skip: int = messages.DEFAULT_SKIP
    take: int = messages.DEFAULT_TAKE


@dataclass(frozen=True)
class TaxProfileListOptions:
    user_id: str
    legal_name: str | None = None
    vat_number: str | None = None
    address: str | None = None
    city: str | None = None
    country: str | None = None
    zip_code: str | None = None
    gte_created_at: datetime | None = None
    lte_created_at: datetime | None = None
    gte_updated_at: datetime | None = None
    lte_updated_at: datetime | None = None
    skip: int | None = None
    take: int | None = None


@dataclass(frozen=True)
class InvoiceListOptions:
    user_id: str
    tax_profile_id: str | None = None
    amount: float | None = None
    status: InvoiceStatus | None = None
    currency: Currency | None = None
    gte_created_at: datetime | None = None
    lte_created_at: datetime | None = None
    gte_updated_at: datetime | None = None
    lte_updated_at: datetime | None = None
    skip: int | None = None
    take: int | None = None


def _text(value: str | None) -> str | None:
    # Empty strings mean "no filter", never "match empty"
    return value or None


def build_date_range(
    gte: datetime | None, lte: datetime | None, *, field: str
) -> DateRange | None:
    """Range over one timestamp column; open-ended on whichever side is missing."""
    gte, lte = as_utc(gte), as_utc(lte)
    if gte is None and lte is None:
        return None
    if gte is not None and lte is not None and gte > lte:
        raise ValidationError(
            messages.INVALID_DATE_RANGE,
            [FieldError(field, f"{field} lower bound must not be later than its upper bound")],
            code="INVALID_DATE_RANGE",
        )
    return DateRange(gte=gte, lte=lte)


def resolve_page(skip: int | None, take: int | None) -> Page:
    """Apply pagination defaults; negative or non-integer values are rejected, not coerced."""
    skip = messages.DEFAULT_SKIP if skip is None else skip
    take = messages.DEFAULT_TAKE if take is None else take
    errors: list[FieldError] = []
    if isinstance(skip, bool) or not isinstance(skip, int) or skip < 0:
        errors.append(FieldError("skip", "skip must be a non-negative integer"))
    if isinstance(take, bool) or not isinstance(take, int) or take < 0:
        errors.append(FieldError("take", "take must be a non-negative integer"))
    if errors:
        raise ValidationError(messages.INVALID_PAGINATION, errors, code="INVALID_PAGINATION")
    return Page(skip=skip, take=take)


def build_tax_profile_filter(options: TaxProfileListOptions) -> TaxProfileFilter:
    if not options.user_id:
        raise ValueError("user_id is required to scope a tax profile query")
    return TaxProfileFilter(
        user_id=options.user_id,
        legal_name=_text(options.legal_name),
        vat_number=_text(options.vat_number),
        address=_text(options.address),
        city=_text(options.city),
        country=_text(options.country),
        zip_code=_text(options.zip_code),
        created_at=build_date_range(
            options.gte_created_at, options.lte_created_at, field="createdAt"
        ),
        updated_at=build_date_range(
            options.gte_updated_at, options.lte_updated_at, field="updatedAt"
        ),
    )


def build_invoice_filter(options: InvoiceListOptions) -> InvoiceFilter:
    if not options.user_id:
        raise ValueError("user_id is required to scope an invoice query")
    return InvoiceFilter(
        user_id=options.user_id,
        tax_profile_id=_text(options.tax_profile_id),
        amount=options.amount,
        status=InvoiceStatus(options.status) if options.status is not None else None,
        currency=Currency(options.currency) if options.currency is not None else None,
        created_at=build_date_range(
            options.gte_created_at, options.lte_created_at, field="createdAt"
        ),
        updated_at=build_date_range(
            options.gte_updated_at, options.lte_updated_at, field="updatedAt"
        ),
    )
