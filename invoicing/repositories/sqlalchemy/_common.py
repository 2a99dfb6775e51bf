from __future__ import annotations

from sqlalchemy import ColumnElement
from sqlalchemy.orm import InstrumentedAttribute

from invoicing.repositories.interfaces import DateRange


def contains(column: InstrumentedAttribute, value: str | None) -> list[ColumnElement[bool]]:
    if value is None:
        return []
    return [column.contains(value, autoescape=True)]


def equals(column: InstrumentedAttribute, value) -> list[ColumnElement[bool]]:
    if value is None:
        return []
    return [column == value]


def within(column: InstrumentedAttribute, rng: DateRange | None) -> list[ColumnElement[bool]]:
    if rng is None:
        return []
    conds: list[ColumnElement[bool]] = []
    if rng.gte is not None:
        conds.append(column >= rng.gte)
    if rng.lte is not None:
        conds.append(column <= rng.lte)
    return conds
