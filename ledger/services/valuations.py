"""Valuation bookkeeping: reconciliations and opening/current balance anchors.

Every valuation is written as a ``Valuation`` row plus the ``Entry`` that
carries it on the account. Entry names come from the canonical
``Valuation.build_*_name`` helpers so they follow the account type.

Rules:
    - at most one opening anchor and one current anchor per account
    - at most one reconciliation per account and date (later writes update it)
    - the opening anchor is dated before every other entry of the account
    - after each write the account balance is the amount of the latest entry
"""

import logging
from datetime import date, datetime, timedelta, timezone

from sqlmodel import Session, select, func

from ledger.models.account import Account
from ledger.models.entry import Entry
from ledger.models.valuation import Valuation
from ledger.models.valuation_name import ValuationKind
from ledger.utils.constants import OPENING_ANCHOR_LOOKBACK_YEARS

logger = logging.getLogger(__name__)

ValuationRow = tuple[Entry, Valuation]


class ValuationError(ValueError):
    """A valuation write broke one of the ledger rules."""


class ValuationNotFound(ValuationError):
    pass


def _valuation_rows(account_id: int, kind: ValuationKind | str | None = None):
    stmt = (
        select(Entry, Valuation)
        .join(Valuation, Valuation.id == Entry.entryable_id)
        .where(
            Entry.entryable_type == Valuation.entryable_type(),
            Entry.account_id == account_id,
        )
    )
    if kind is not None:
        stmt = stmt.where(Valuation.kind == ValuationKind(kind))
    return stmt


def _newest_first(stmt):
    return stmt.order_by(Entry.date.desc(), Entry.updated_at.desc(), Entry.id.desc())


def list_valuations(
    session: Session,
    account_id: int,
    kind: ValuationKind | str | None = None,
) -> list[ValuationRow]:
    rows = session.exec(_newest_first(_valuation_rows(account_id, kind))).all()
    return [(entry, valuation) for entry, valuation in rows]


def _single(session: Session, account: Account, kind: ValuationKind) -> ValuationRow | None:
    row = session.exec(_newest_first(_valuation_rows(account.id, kind))).first()
    return (row[0], row[1]) if row else None


def opening_anchor(session: Session, account: Account) -> ValuationRow | None:
    return _single(session, account, ValuationKind.OPENING_ANCHOR)


def current_anchor(session: Session, account: Account) -> ValuationRow | None:
    return _single(session, account, ValuationKind.CURRENT_ANCHOR)


def _years_ago(today: date, years: int) -> date:
    try:
        return today.replace(year=today.year - years)
    except ValueError:  # Feb 29
        return today.replace(year=today.year - years, day=28)


def _oldest_entry_date(session: Session, account: Account, exclude_entry_id: int | None) -> date | None:
    stmt = select(func.min(Entry.date)).where(Entry.account_id == account.id)
    if exclude_entry_id is not None:
        stmt = stmt.where(Entry.id != exclude_entry_id)
    return session.exec(stmt).one()


def _check_after_opening(session: Session, account: Account, on_date: date, label: str):
    anchor = opening_anchor(session, account)
    if anchor and on_date <= anchor[0].date:
        raise ValuationError(
            f"{label} date must be after the opening balance date ({anchor[0].date.isoformat()})"
        )


def _refresh_balance(session: Session, account: Account):
    """Copy the latest valuation amount onto the account, 0.0 when none are left."""
    latest = session.exec(_newest_first(_valuation_rows(account.id))).first()
    account.balance = latest[0].amount if latest else 0.0
    account.updated_at = datetime.now(timezone.utc)
    session.add(account)


def _write(
    session: Session,
    account: Account,
    kind: ValuationKind,
    amount: float,
    on_date: date,
    notes: str | None,
    existing: ValuationRow | None,
) -> ValuationRow:
    now = datetime.now(timezone.utc)
    name = Valuation.build_name(kind, account.accountable_type)

    if existing is None:
        valuation = Valuation(kind=kind)
        session.add(valuation)
        session.flush()
        entry = Entry(
            account_id=account.id,
            entryable_type=Valuation.entryable_type(),
            entryable_id=valuation.id,
            date=on_date,
            amount=amount,
            currency=account.currency,
            name=name,
            notes=notes,
        )
        action = "Created"
    else:
        entry, valuation = existing
        entry.date = on_date
        entry.amount = amount
        entry.name = name
        if notes is not None:
            entry.notes = notes
        entry.updated_at = now
        valuation.updated_at = now
        action = "Updated"

    session.add(entry)
    session.add(valuation)
    session.flush()
    _refresh_balance(session, account)
    session.commit()
    session.refresh(entry)
    session.refresh(valuation)

    logger.info(
        f"{action} {kind.value} for account {account.id} on {on_date.isoformat()}: {amount}"
    )
    return entry, valuation


def create_reconciliation(
    session: Session,
    account: Account,
    amount: float,
    on_date: date | None = None,
    notes: str | None = None,
) -> ValuationRow:
    """Record the user-confirmed balance of ``account`` on ``on_date`` (default today)."""
    on_date = on_date or date.today()
    _check_after_opening(session, account, on_date, "Reconciliation")

    existing = session.exec(
        _valuation_rows(account.id, ValuationKind.RECONCILIATION).where(Entry.date == on_date)
    ).first()
    existing = (existing[0], existing[1]) if existing else None
    return _write(session, account, ValuationKind.RECONCILIATION, amount, on_date, notes, existing)


def set_opening_balance(
    session: Session,
    account: Account,
    amount: float,
    on_date: date | None = None,
    notes: str | None = None,
) -> ValuationRow:
    """Create or move the opening anchor of ``account``.

    Without an explicit date an existing anchor keeps its date; a new one is
    placed the day before the oldest entry, or ``OPENING_ANCHOR_LOOKBACK_YEARS``
    back when the account has no entries yet.
    """
    existing = opening_anchor(session, account)
    oldest = _oldest_entry_date(session, account, existing[0].id if existing else None)

    if on_date is None:
        if existing:
            on_date = existing[0].date
        elif oldest:
            on_date = oldest - timedelta(days=1)
        else:
            on_date = _years_ago(date.today(), OPENING_ANCHOR_LOOKBACK_YEARS)

    if oldest and on_date >= oldest:
        raise ValuationError(
            f"Opening balance date must be before the oldest entry date ({oldest.isoformat()})"
        )
    return _write(session, account, ValuationKind.OPENING_ANCHOR, amount, on_date, notes, existing)


def set_current_balance(
    session: Session,
    account: Account,
    amount: float,
    on_date: date | None = None,
    notes: str | None = None,
) -> ValuationRow:
    """Create or move the current anchor of ``account`` (default today)."""
    on_date = on_date or date.today()
    _check_after_opening(session, account, on_date, "Current balance")
    existing = current_anchor(session, account)
    return _write(session, account, ValuationKind.CURRENT_ANCHOR, amount, on_date, notes, existing)


def delete_valuation(session: Session, account: Account, entry_id: int):
    entry = session.get(Entry, entry_id)
    if (
        entry is None
        or entry.account_id != account.id
        or entry.entryable_type != Valuation.entryable_type()
    ):
        raise ValuationNotFound(f"Valuation entry {entry_id} not found")

    valuation = session.get(Valuation, entry.entryable_id)
    session.delete(entry)
    if valuation is not None:
        session.delete(valuation)
    session.flush()
    _refresh_balance(session, account)
    session.commit()
    logger.info(f"Deleted valuation entry {entry_id} from account {account.id}")


def delete_account_valuations(session: Session, account: Account) -> int:
    """Remove every valuation of ``account``. Does not commit."""
    rows = list_valuations(session, account.id)
    for entry, valuation in rows:
        session.delete(entry)
        session.delete(valuation)
    session.flush()
    return len(rows)
