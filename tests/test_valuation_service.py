"""Tests for valuation bookkeeping: reconciliations, anchors, balance refresh."""

import logging
from datetime import date, timedelta

import pytest

from ledger.models.entry import Entry
from ledger.models.valuation import Valuation
from ledger.models.valuation_name import ValuationKind
from ledger.services import valuations
from ledger.services.valuations import ValuationError, ValuationNotFound


def _count(session, account, kind=None):
    return len(valuations.list_valuations(session, account.id, kind))


# ---------------------------------------------------------------------------
# 1. Opening anchor
# ---------------------------------------------------------------------------

class TestOpeningBalance:
    def test_defaults_to_lookback_when_account_is_empty(self, session, make_account):
        account = make_account("Depository")
        entry, valuation = valuations.set_opening_balance(session, account, 1000.0)

        today = date.today()
        assert entry.date.year == today.year - 2
        assert entry.date.month == today.month
        assert entry.name == "Opening balance"
        assert entry.amount == 1000.0
        assert valuation.kind is ValuationKind.OPENING_ANCHOR
        assert account.balance == 1000.0

    def test_defaults_to_day_before_oldest_entry(self, session, make_account):
        account = make_account("Investment")
        valuations.create_reconciliation(session, account, 500.0, date(2024, 3, 10))

        entry, _ = valuations.set_opening_balance(session, account, 400.0)

        assert entry.date == date(2024, 3, 9)
        assert entry.name == "Opening account value"

    def test_rejects_date_on_or_after_oldest_entry(self, session, make_account):
        account = make_account()
        valuations.create_reconciliation(session, account, 500.0, date(2024, 3, 10))

        with pytest.raises(ValuationError, match="before the oldest entry"):
            valuations.set_opening_balance(session, account, 400.0, date(2024, 3, 10))

    def test_update_keeps_single_anchor_and_date(self, session, make_account):
        account = make_account("Loan")
        first, _ = valuations.set_opening_balance(session, account, -20000.0, date(2022, 1, 1))
        second, _ = valuations.set_opening_balance(session, account, -25000.0)

        assert second.id == first.id
        assert second.date == date(2022, 1, 1)
        assert second.amount == -25000.0
        assert second.name == "Original principal"
        assert _count(session, account, ValuationKind.OPENING_ANCHOR) == 1

    def test_anchor_lookup(self, session, make_account):
        account = make_account()
        assert valuations.opening_anchor(session, account) is None
        entry, valuation = valuations.set_opening_balance(session, account, 10.0)

        found_entry, found_valuation = valuations.opening_anchor(session, account)
        assert found_entry.id == entry.id
        assert found_valuation.id == valuation.id


# ---------------------------------------------------------------------------
# 2. Reconciliations
# ---------------------------------------------------------------------------

class TestReconciliation:
    def test_creates_named_entry(self, session, make_account):
        account = make_account("Property", currency="EUR")
        entry, valuation = valuations.create_reconciliation(
            session, account, 350000.0, date(2025, 6, 1), notes="appraisal"
        )

        assert valuation.kind is ValuationKind.RECONCILIATION
        assert entry.entryable_type == "Valuation"
        assert entry.entryable_id == valuation.id
        assert entry.name == Valuation.build_reconciliation_name("Property")
        assert entry.currency == "EUR"
        assert entry.notes == "appraisal"

    def test_same_date_updates_in_place(self, session, make_account):
        account = make_account()
        first, _ = valuations.create_reconciliation(session, account, 100.0, date(2025, 1, 5))
        second, _ = valuations.create_reconciliation(session, account, 150.0, date(2025, 1, 5))

        assert second.id == first.id
        assert second.amount == 150.0
        assert _count(session, account) == 1

    def test_defaults_to_today(self, session, make_account):
        account = make_account()
        entry, _ = valuations.create_reconciliation(session, account, 100.0)
        assert entry.date == date.today()

    def test_must_follow_opening_anchor(self, session, make_account):
        account = make_account()
        valuations.set_opening_balance(session, account, 0.0, date(2024, 1, 1))

        with pytest.raises(ValuationError, match="after the opening balance date"):
            valuations.create_reconciliation(session, account, 100.0, date(2023, 12, 31))

    def test_logs_write(self, session, make_account, caplog):
        account = make_account()
        with caplog.at_level(logging.INFO, logger="ledger.services.valuations"):
            valuations.create_reconciliation(session, account, 100.0, date(2025, 1, 5))
        assert f"Created reconciliation for account {account.id}" in caplog.text


# ---------------------------------------------------------------------------
# 3. Current anchor and balance refresh
# ---------------------------------------------------------------------------

class TestCurrentBalance:
    def test_upserts_anchor_dated_today(self, session, make_account):
        account = make_account("Loan")
        first, _ = valuations.set_current_balance(session, account, -9000.0)
        second, valuation = valuations.set_current_balance(session, account, -8800.0)

        assert second.id == first.id
        assert second.date == date.today()
        assert second.name == "Current loan balance"
        assert valuation.kind is ValuationKind.CURRENT_ANCHOR
        assert account.balance == -8800.0
        assert valuations.current_anchor(session, account)[0].id == first.id

    def test_must_follow_opening_anchor(self, session, make_account):
        account = make_account()
        valuations.set_opening_balance(session, account, 0.0, date(2024, 1, 1))

        with pytest.raises(ValuationError, match="after the opening balance date"):
            valuations.set_current_balance(session, account, 50.0, date(2024, 1, 1))
        session.rollback()
        with pytest.raises(ValuationError, match="after the opening balance date"):
            valuations.set_current_balance(session, account, 50.0, date(2023, 6, 1))
        session.rollback()

        assert valuations.current_anchor(session, account) is None

    def test_balance_follows_latest_dated_entry(self, session, make_account):
        account = make_account()
        today = date.today()
        valuations.set_current_balance(session, account, 700.0, today)
        valuations.create_reconciliation(session, account, 650.0, today - timedelta(days=10))

        assert account.balance == 700.0

    def test_same_day_tie_goes_to_latest_write(self, session, make_account):
        account = make_account()
        today = date.today()
        valuations.set_current_balance(session, account, 700.0, today)
        valuations.create_reconciliation(session, account, 710.0, today)
        assert account.balance == 710.0

        valuations.set_current_balance(session, account, 720.0, today)
        assert account.balance == 720.0


# ---------------------------------------------------------------------------
# 4. Listing and deletion
# ---------------------------------------------------------------------------

class TestListAndDelete:
    def test_list_newest_first_and_filtered(self, session, make_account):
        account = make_account()
        valuations.set_opening_balance(session, account, 10.0, date(2023, 1, 1))
        valuations.create_reconciliation(session, account, 20.0, date(2024, 1, 1))
        valuations.create_reconciliation(session, account, 30.0, date(2025, 1, 1))

        rows = valuations.list_valuations(session, account.id)
        assert [entry.amount for entry, _ in rows] == [30.0, 20.0, 10.0]

        recons = valuations.list_valuations(session, account.id, "reconciliation")
        assert len(recons) == 2
        assert all(v.kind is ValuationKind.RECONCILIATION for _, v in recons)

    def test_delete_refreshes_balance(self, session, make_account):
        account = make_account()
        valuations.create_reconciliation(session, account, 20.0, date(2024, 1, 1))
        latest, valuation = valuations.create_reconciliation(session, account, 30.0, date(2025, 1, 1))
        entry_id, valuation_id = latest.id, valuation.id

        valuations.delete_valuation(session, account, entry_id)

        assert account.balance == 20.0
        assert session.get(Entry, entry_id) is None
        assert session.get(Valuation, valuation_id) is None

    def test_deleting_last_valuation_zeroes_balance(self, session, make_account):
        account = make_account()
        entry, _ = valuations.set_opening_balance(session, account, 1200.0)

        valuations.delete_valuation(session, account, entry.id)

        assert _count(session, account) == 0
        assert account.balance == 0.0

    def test_delete_missing_entry(self, session, make_account):
        account = make_account()
        with pytest.raises(ValuationNotFound):
            valuations.delete_valuation(session, account, 999)

    def test_delete_rejects_other_accounts_entry(self, session, make_account):
        mine = make_account(name="Mine")
        theirs = make_account(name="Theirs")
        entry, _ = valuations.create_reconciliation(session, theirs, 5.0, date(2025, 1, 1))

        with pytest.raises(ValuationNotFound):
            valuations.delete_valuation(session, mine, entry.id)

    def test_delete_account_valuations(self, session, make_account):
        account = make_account()
        valuations.set_opening_balance(session, account, 10.0, date(2023, 1, 1))
        valuations.create_reconciliation(session, account, 20.0, date(2024, 1, 1))

        removed = valuations.delete_account_valuations(session, account)
        session.commit()

        assert removed == 2
        assert _count(session, account) == 0
