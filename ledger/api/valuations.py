"""Valuations API — reconciliations and balance anchors per account."""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session

from ledger.database import get_session
from ledger.models.account import Account
from ledger.models.valuation import Valuation
from ledger.models.valuation_name import ValuationKind
from ledger.schemas.valuation import AnchorUpdate, ReconciliationCreate, ValuationNames, ValuationRead
from ledger.services import valuations
from ledger.api.deps import get_account, get_current_user

router = APIRouter(prefix="/api", tags=["valuations"], dependencies=[Depends(get_current_user)])


@router.get("/valuations/names", response_model=ValuationNames)
def valuation_names(accountable_type: str = Query(min_length=1)):
    """Names the ledger gives to special valuations for an account type."""
    return ValuationNames(
        accountable_type=accountable_type,
        reconciliation=Valuation.build_reconciliation_name(accountable_type),
        opening_anchor=Valuation.build_opening_anchor_name(accountable_type),
        current_anchor=Valuation.build_current_anchor_name(accountable_type),
    )


@router.get("/accounts/{account_id}/valuations", response_model=list[ValuationRead])
def list_account_valuations(
    kind: ValuationKind | None = None,
    account: Account = Depends(get_account),
    session: Session = Depends(get_session),
):
    rows = valuations.list_valuations(session, account.id, kind)
    return [ValuationRead.from_row(entry, valuation) for entry, valuation in rows]


@router.post("/accounts/{account_id}/valuations", response_model=ValuationRead, status_code=201)
def reconcile_account(
    data: ReconciliationCreate,
    account: Account = Depends(get_account),
    session: Session = Depends(get_session),
):
    try:
        entry, valuation = valuations.create_reconciliation(
            session, account, data.amount, data.date, data.notes
        )
    except valuations.ValuationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return ValuationRead.from_row(entry, valuation)


@router.put("/accounts/{account_id}/valuations/opening-balance", response_model=ValuationRead)
def update_opening_balance(
    data: AnchorUpdate,
    account: Account = Depends(get_account),
    session: Session = Depends(get_session),
):
    try:
        entry, valuation = valuations.set_opening_balance(
            session, account, data.amount, data.date, data.notes
        )
    except valuations.ValuationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return ValuationRead.from_row(entry, valuation)


@router.put("/accounts/{account_id}/valuations/current-balance", response_model=ValuationRead)
def update_current_balance(
    data: AnchorUpdate,
    account: Account = Depends(get_account),
    session: Session = Depends(get_session),
):
    try:
        entry, valuation = valuations.set_current_balance(
            session, account, data.amount, data.date, data.notes
        )
    except valuations.ValuationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return ValuationRead.from_row(entry, valuation)


@router.delete("/accounts/{account_id}/valuations/{entry_id}", status_code=204)
def delete_account_valuation(
    entry_id: int,
    account: Account = Depends(get_account),
    session: Session = Depends(get_session),
):
    try:
        valuations.delete_valuation(session, account, entry_id)
    except valuations.ValuationNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
