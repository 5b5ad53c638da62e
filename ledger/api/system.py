"""System API — health check and ledger statistics."""

from fastapi import APIRouter, Depends
from sqlmodel import Session, select, func

from ledger.database import get_session
from ledger.models.account import Account
from ledger.models.valuation import Valuation
from ledger.api.deps import get_current_user

router = APIRouter(prefix="/api/system", tags=["system"])


@router.get("/health")
def health_check():
    return {"status": "ok"}


@router.get("/stats", dependencies=[Depends(get_current_user)])
def ledger_stats(session: Session = Depends(get_session)):
    """Account count and valuation counts per kind."""
    accounts = session.exec(select(func.count()).select_from(Account)).one()
    rows = session.exec(
        select(Valuation.kind, func.count()).group_by(Valuation.kind)
    ).all()
    return {
        "accounts": accounts,
        "valuations": {kind.value: count for kind, count in rows},
    }
