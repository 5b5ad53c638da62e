"""Account model — a financial account that valuations are attached to."""

from datetime import datetime, timezone
from sqlmodel import SQLModel, Field

from ledger.config import settings
from ledger.utils.constants import LIABILITY_TYPES


class Account(SQLModel, table=True):
    __tablename__ = "account"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(index=True)
    accountable_type: str = Field(index=True)  # "Depository", "Loan", ...
    currency: str = Field(default_factory=lambda: settings.default_currency)
    balance: float = 0.0  # Last known balance, refreshed from valuations
    is_active: bool = True
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def classification(self) -> str:
        return "liability" if self.accountable_type in LIABILITY_TYPES else "asset"
