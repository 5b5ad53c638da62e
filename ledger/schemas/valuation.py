"""Pydantic schemas for Valuation API."""

import datetime as dt

from pydantic import BaseModel, Field

from ledger.models.entry import Entry
from ledger.models.valuation import Valuation
from ledger.models.valuation_name import ValuationKind


class ReconciliationCreate(BaseModel):
    amount: float
    date: dt.date | None = None  # Defaults to today
    notes: str | None = Field(default=None, max_length=1000)


class AnchorUpdate(BaseModel):
    amount: float
    date: dt.date | None = None
    notes: str | None = Field(default=None, max_length=1000)


class ValuationRead(BaseModel):
    entry_id: int
    valuation_id: int
    account_id: int
    kind: ValuationKind
    name: str
    date: dt.date
    amount: float
    currency: str
    notes: str | None

    @classmethod
    def from_row(cls, entry: Entry, valuation: Valuation) -> "ValuationRead":
        return cls(
            entry_id=entry.id,
            valuation_id=valuation.id,
            account_id=entry.account_id,
            kind=valuation.kind,
            name=entry.name,
            date=entry.date,
            amount=entry.amount,
            currency=entry.currency,
            notes=entry.notes,
        )


class ValuationNames(BaseModel):
    accountable_type: str
    reconciliation: str
    opening_anchor: str
    current_anchor: str
