"""Shared constants for accounts and valuations."""

ASSET_TYPES = ["Depository", "Investment", "Crypto", "Property", "Vehicle", "OtherAsset"]
LIABILITY_TYPES = ["CreditCard", "Loan", "OtherLiability"]
ACCOUNTABLE_TYPES = ASSET_TYPES + LIABILITY_TYPES

# Opening anchor fallback when an account has no other entries
OPENING_ANCHOR_LOOKBACK_YEARS = 2
