"""Database models."""

from ledger.models.account import Account
from ledger.models.entry import Entry
from ledger.models.valuation import Valuation
from ledger.models.valuation_name import ValuationKind, ValuationName
from ledger.models.user import User

__all__ = [
    "Account",
    "Entry",
    "Valuation",
    "ValuationKind",
    "ValuationName",
    "User",
]
