"""Valuation model — point-in-time balance record for an account."""

from datetime import datetime, timezone

from sqlalchemy import Column, Enum as SAEnum
from sqlmodel import SQLModel, Field

from ledger.models.entryable import Entryable
from ledger.models.valuation_name import ValuationKind, ValuationName


class Valuation(Entryable, SQLModel, table=True):
    __tablename__ = "valuation"

    id: int | None = Field(default=None, primary_key=True)
    kind: ValuationKind = Field(
        default=ValuationKind.RECONCILIATION,
        sa_column=Column(
            SAEnum(
                ValuationKind,
                native_enum=False,
                length=32,
                values_callable=lambda kinds: [k.value for k in kinds],
            ),
            nullable=False,
            index=True,
            server_default=ValuationKind.RECONCILIATION.value,
        ),
    )
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def build_name(cls, kind: ValuationKind | str, accountable_type: str) -> str:
        return str(ValuationName(kind, accountable_type))

    @classmethod
    def build_reconciliation_name(cls, accountable_type: str) -> str:
        return cls.build_name(ValuationKind.RECONCILIATION, accountable_type)

    @classmethod
    def build_opening_anchor_name(cls, accountable_type: str) -> str:
        return cls.build_name(ValuationKind.OPENING_ANCHOR, accountable_type)

    @classmethod
    def build_current_anchor_name(cls, accountable_type: str) -> str:
        return cls.build_name(ValuationKind.CURRENT_ANCHOR, accountable_type)
