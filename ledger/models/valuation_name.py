"""Canonical display names for special valuation entries."""

from enum import Enum


class ValuationKind(str, Enum):
    RECONCILIATION = "reconciliation"
    OPENING_ANCHOR = "opening_anchor"
    CURRENT_ANCHOR = "current_anchor"


_OPENING_ANCHOR_NAMES = {
    "Property": "Original purchase price",
    "Vehicle": "Original purchase price",
    "Loan": "Original principal",
    "Investment": "Opening account value",
    "Crypto": "Opening account value",
    "OtherAsset": "Opening account value",
}

_CURRENT_ANCHOR_NAMES = {
    "Property": "Current market value",
    "Vehicle": "Current market value",
    "Loan": "Current loan balance",
    "Investment": "Current account value",
    "Crypto": "Current account value",
    "OtherAsset": "Current account value",
}

_RECONCILIATION_NAMES = {
    "Property": "Manual value update",
    "Investment": "Manual value update",
    "Vehicle": "Manual value update",
    "Crypto": "Manual value update",
    "OtherAsset": "Manual value update",
    "Loan": "Manual principal update",
}

_NAMES: dict[ValuationKind, tuple[dict[str, str], str]] = {
    ValuationKind.OPENING_ANCHOR: (_OPENING_ANCHOR_NAMES, "Opening balance"),
    ValuationKind.CURRENT_ANCHOR: (_CURRENT_ANCHOR_NAMES, "Current balance"),
    ValuationKind.RECONCILIATION: (_RECONCILIATION_NAMES, "Manual balance update"),
}


class ValuationName:
    """Name for a valuation of a given kind on a given type of account.

    ``kind`` must be one of ``ValuationKind`` (raises ``ValueError`` otherwise).
    ``accountable_type`` is not validated; types without a specific wording
    get the generic "balance" names.
    """

    def __init__(self, kind: ValuationKind | str, accountable_type: str):
        self.kind = ValuationKind(kind)
        self.accountable_type = accountable_type

    def __str__(self) -> str:
        names, default = _NAMES[self.kind]
        return names.get(self.accountable_type, default)

    def __repr__(self) -> str:
        return f"ValuationName({self.kind.value!r}, {self.accountable_type!r})"
