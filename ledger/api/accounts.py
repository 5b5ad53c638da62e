"""CRUD API for accounts."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from ledger.config import settings
from ledger.database import get_session
from ledger.models.account import Account
from ledger.schemas.account import AccountCreate, AccountUpdate, AccountRead
from ledger.services import valuations
from ledger.api.deps import get_account, get_current_user

router = APIRouter(prefix="/api/accounts", tags=["accounts"], dependencies=[Depends(get_current_user)])


@router.get("", response_model=list[AccountRead])
def list_accounts(
    accountable_type: str | None = None,
    active: bool | None = None,
    session: Session = Depends(get_session),
):
    stmt = select(Account).order_by(Account.name)
    if accountable_type is not None:
        stmt = stmt.where(Account.accountable_type == accountable_type)
    if active is not None:
        stmt = stmt.where(Account.is_active == active)
    return session.exec(stmt).all()


@router.post("", response_model=AccountRead, status_code=201)
def create_account(
    data: AccountCreate,
    session: Session = Depends(get_session),
):
    account = Account(
        name=data.name,
        accountable_type=data.accountable_type,
        currency=data.currency or settings.default_currency,
        balance=data.balance,
    )
    session.add(account)
    session.commit()
    session.refresh(account)

    # Every account starts from an opening anchor
    valuations.set_opening_balance(session, account, data.balance, data.opening_date)
    session.refresh(account)
    return account


@router.get("/{account_id}", response_model=AccountRead)
def read_account(account: Account = Depends(get_account)):
    return account


@router.put("/{account_id}", response_model=AccountRead)
def update_account(
    data: AccountUpdate,
    account: Account = Depends(get_account),
    session: Session = Depends(get_session),
):
    update_data = data.model_dump(exclude_unset=True, exclude={"balance"})
    for key, value in update_data.items():
        setattr(account, key, value)
    account.updated_at = datetime.now(timezone.utc)
    session.add(account)

    # Field changes and the current anchor commit together
    if data.balance is not None:
        try:
            valuations.set_current_balance(session, account, data.balance)
        except valuations.ValuationError as e:
            session.rollback()
            raise HTTPException(status_code=422, detail=str(e))
    else:
        session.commit()

    session.refresh(account)
    return account


@router.delete("/{account_id}", status_code=204)
def delete_account(
    account: Account = Depends(get_account),
    session: Session = Depends(get_session),
):
    valuations.delete_account_valuations(session, account)
    session.delete(account)
    session.commit()
