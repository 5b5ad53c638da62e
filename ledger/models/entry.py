"""Entry model — dated ledger line that carries an entryable record."""

from datetime import date, datetime, timezone

from sqlalchemy import Index
from sqlmodel import SQLModel, Field

from ledger.config import settings


class Entry(SQLModel, table=True):
    __tablename__ = "entry"
    __table_args__ = (Index("ix_entry_entryable", "entryable_type", "entryable_id"),)

    id: int | None = Field(default=None, primary_key=True)
    account_id: int = Field(foreign_key="account.id", index=True)
    entryable_type: str  # Class name of the carried record, e.g. "Valuation"
    entryable_id: int
    date: date
    amount: float
    currency: str = Field(default_factory=lambda: settings.default_currency)
    name: str
    notes: str | None = None
    excluded: bool = False
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
