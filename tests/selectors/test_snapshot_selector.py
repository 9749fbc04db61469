"""
SnapshotSelector tests against an in-memory SQLite database.

The selector is the only place ORM rows become domain records: labels
are parsed, amounts validated and date windows applied.
"""

from datetime import date
from decimal import Decimal
from unittest.mock import patch

import pytest

from ledger_kernel.domain.records import AccountType, CashflowActivity, TxType
from ledger_kernel.exceptions import InvalidRecordError, MalformedAmountError
from ledger_kernel.models import AccountModel, CashflowCategoryModel, TransactionModel
from ledger_kernel.selectors import SnapshotSelector

AS_OF = date(2024, 6, 30)


class TestCumulativeSnapshot:

    def test_counts(self, seeded_session):
        snapshot = SnapshotSelector(seeded_session).load(AS_OF)

        assert len(snapshot.accounts) == 12
        assert len(snapshot.transactions) == 12
        assert len(snapshot.fixed_assets) == 1
        (project,) = snapshot.projects
        assert len(project.costs) == 1
        assert len(project.billings) == 1
        assert snapshot.as_of == AS_OF
        assert snapshot.period_start is None

    def test_labels_parsed(self, seeded_session):
        snapshot = SnapshotSelector(seeded_session).load(AS_OF)
        types = {a.code: a.account_type for a in snapshot.accounts}

        assert types["1501"] is AccountType.FIXED_ASSET
        assert types["1601"] is AccountType.CONTRA_ASSET
        assert types["2101"] is AccountType.LIABILITY
        assert {t.tx_type for t in snapshot.transactions} >= {
            TxType.WIP_INCREASE, TxType.WIP_DECREASE, TxType.INCOME,
        }

    def test_amounts_are_decimal(self, seeded_session):
        snapshot = SnapshotSelector(seeded_session).load(AS_OF)

        assert all(isinstance(t.amount, Decimal) for t in snapshot.transactions)
        (asset,) = snapshot.fixed_assets
        assert asset.book_value == Decimal("30000")
        (project,) = snapshot.projects
        assert project.costs[0].amount == Decimal("6000")
        assert project.billings[0].percentage == Decimal("10")

    def test_accounts_ordered_by_code(self, seeded_session):
        codes = [a.code for a in SnapshotSelector(seeded_session).accounts()]
        assert codes == sorted(codes)

    def test_projects_not_yet_started_excluded(self, seeded_session):
        snapshot = SnapshotSelector(seeded_session).load(date(2024, 1, 15))
        assert snapshot.projects == ()
        assert len(snapshot.transactions) == 2

    def test_logs_load(self, seeded_session, captured_logs):
        SnapshotSelector(seeded_session).load(AS_OF)
        (record,) = [r for r in captured_logs() if r["message"] == "snapshot_loaded"]
        assert record["transactions"] == 12
        assert record["as_of"] == "2024-06-30"


class TestPeriodSnapshot:

    def test_period_window(self, seeded_session):
        snapshot = SnapshotSelector(seeded_session).load(
            AS_OF, period_start=date(2024, 4, 1),
        )

        assert len(snapshot.transactions) == 8
        assert all(t.date >= date(2024, 4, 1) for t in snapshot.transactions)
        assert snapshot.fixed_assets == ()
        (project,) = snapshot.projects
        assert len(project.costs) == 1
        assert snapshot.period_start == date(2024, 4, 1)

    def test_costs_outside_window_dropped(self, seeded_session):
        snapshot = SnapshotSelector(seeded_session).load(
            AS_OF, period_start=date(2024, 4, 10),
        )
        (project,) = snapshot.projects
        assert project.costs == ()
        assert len(project.billings) == 1


class TestCashflowCategories:

    def test_label_normalized(self, seeded_session):
        seeded_session.add(
            CashflowCategoryModel(account_code="1201", category=" Investing ")
        )
        seeded_session.flush()

        (category,) = SnapshotSelector(seeded_session).cashflow_categories()
        assert category.category is CashflowActivity.INVESTING

    def test_unknown_category(self, seeded_session):
        seeded_session.add(CashflowCategoryModel(account_code="1201", category="other"))
        seeded_session.flush()

        with pytest.raises(InvalidRecordError):
            SnapshotSelector(seeded_session).cashflow_categories()


class TestBadRows:

    def test_unknown_account_type_label(self, seeded_session):
        seeded_session.add(
            AccountModel(code="1401", name="Persediaan", account_type="Persediaan")
        )
        seeded_session.flush()

        with pytest.raises(InvalidRecordError) as exc_info:
            SnapshotSelector(seeded_session).load(AS_OF)
        assert exc_info.value.record_id == "1401"

    def test_unknown_transaction_type_label(self, seeded_session):
        seeded_session.add(
            TransactionModel(
                date=date(2024, 5, 1), transaction_type="transfer",
                account_code="1101", amount=Decimal("10"),
            )
        )
        seeded_session.flush()

        with pytest.raises(InvalidRecordError) as exc_info:
            SnapshotSelector(seeded_session).transactions(AS_OF)
        assert exc_info.value.record_type == "transaction"

    def test_negative_stored_amount(self, seeded_session):
        seeded_session.add(
            TransactionModel(
                date=date(2024, 5, 1), transaction_type="debit",
                account_code="1101", amount=Decimal("-10"),
            )
        )
        seeded_session.flush()

        with pytest.raises(MalformedAmountError):
            SnapshotSelector(seeded_session).load(AS_OF)


class TestSnapshotIsolation:

    def test_isolation_pinned_before_first_read(self, seeded_session):
        selector = SnapshotSelector(seeded_session)
        read_accounts = selector.accounts
        calls = []

        def accounts():
            calls.append("accounts")
            return read_accounts()

        with patch(
            "ledger_kernel.selectors.snapshot_selector.begin_snapshot_read",
            side_effect=lambda session: calls.append("pin"),
        ) as pin, patch.object(selector, "accounts", side_effect=accounts):
            snapshot = selector.load(AS_OF)

        pin.assert_called_once_with(seeded_session)
        assert calls == ["pin", "accounts"]
        assert len(snapshot.accounts) == 12
