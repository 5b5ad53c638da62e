"""Pydantic schemas for Account API."""

from datetime import date, datetime
from pydantic import BaseModel, Field, field_validator

from ledger.utils.constants import ACCOUNTABLE_TYPES


def _check_accountable_type(value: str) -> str:
    if value not in ACCOUNTABLE_TYPES:
        allowed = ", ".join(ACCOUNTABLE_TYPES)
        raise ValueError(f"must be one of: {allowed}")
    return value


def _check_currency(value: str) -> str:
    code = value.strip().upper()
    if len(code) != 3 or not code.isalpha():
        raise ValueError("must be a 3-letter ISO currency code")
    return code


class AccountCreate(BaseModel):
    name: str = Field(min_length=1, max_length=120)
    accountable_type: str
    currency: str | None = None  # Falls back to settings.default_currency
    balance: float = 0.0
    opening_date: date | None = None

    @field_validator("name")
    @classmethod
    def _trim_name(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("must not be empty")
        return text

    @field_validator("accountable_type")
    @classmethod
    def _validate_accountable_type(cls, value: str) -> str:
        return _check_accountable_type(value)

    @field_validator("currency")
    @classmethod
    def _validate_currency(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return _check_currency(value)


class AccountUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=120)
    balance: float | None = None  # Sets the current anchor
    is_active: bool | None = None

    @field_validator("name")
    @classmethod
    def _trim_optional_name(cls, value: str | None) -> str | None:
        if value is None:
            return None
        text = value.strip()
        if not text:
            raise ValueError("must not be empty")
        return text


class AccountRead(BaseModel):
    id: int
    name: str
    accountable_type: str
    classification: str
    currency: str
    balance: float
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
