"""
Tests for the ledger balance calculator.

Covers natural-balance folding, per-account activity, unknown accounts
and order independence (property-based).
"""

from datetime import date
from decimal import Decimal

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from ledger_kernel.domain.records import Transaction, TxType
from ledger_kernel.exceptions import UnknownAccountError
from ledger_engines.accounts import AccountRegistry
from ledger_engines.balances import account_activity, balance, compute_balances

from conftest import STANDARD_CHART


@pytest.fixture
def registry(chart) -> AccountRegistry:
    return AccountRegistry(chart)


class TestBalance:

    def test_liability_credit_normal(self, registry, make_tx):
        txs = [
            make_tx("2101", TxType.CREDIT, "1000"),
            make_tx("2101", TxType.DEBIT, "200"),
        ]
        assert balance(registry, "2101", txs) == Decimal("800")

    def test_contra_asset_credit_is_positive(self, registry, make_tx):
        txs = [make_tx("1601", TxType.CREDIT, "500")]
        assert balance(registry, "1601", txs) == Decimal("500")

    def test_asset_debit_minus_credit(self, registry, make_tx):
        txs = [
            make_tx("1101", TxType.DEBIT, "5000"),
            make_tx("1101", TxType.CREDIT, "1250.50"),
            make_tx("1102", TxType.DEBIT, "999"),
        ]
        assert balance(registry, "1101", txs) == Decimal("3749.50")

    def test_unused_account_is_zero(self, registry):
        assert balance(registry, "3101", []) == Decimal("0")

    def test_unknown_account_code(self, registry):
        with pytest.raises(UnknownAccountError):
            balance(registry, "9999", [])

    def test_unknown_code_on_other_account_fails(self, registry, make_tx):
        good = make_tx("1101", TxType.DEBIT, "10")
        bad = make_tx("9999", TxType.DEBIT, "10")
        with pytest.raises(UnknownAccountError) as exc_info:
            balance(registry, "1101", [good, bad])
        assert exc_info.value.account_code == "9999"
        assert exc_info.value.record_id == bad.id


class TestComputeBalances:

    def test_every_account_present(self, registry, make_tx):
        balances = compute_balances(
            registry, transactions=[make_tx("4101", TxType.INCOME, "700")],
        )
        assert set(balances) == set(registry.codes())
        assert balances["4101"] == Decimal("700")
        assert balances["5101"] == Decimal("0")

    def test_unknown_account_names_transaction(self, registry, make_tx):
        bad = make_tx("9999", TxType.DEBIT, "10")
        with pytest.raises(UnknownAccountError) as exc_info:
            compute_balances(registry, transactions=[bad])
        assert exc_info.value.account_code == "9999"
        assert exc_info.value.record_id == bad.id

    def test_matches_single_account_balance(self, registry, make_tx):
        txs = [
            make_tx("5101", TxType.EXPENSE, "300"),
            make_tx("5101", TxType.CREDIT, "50"),
            make_tx("1301", TxType.WIP_INCREASE, "800"),
            make_tx("1301", TxType.WIP_DECREASE, "300"),
        ]
        balances = compute_balances(registry, transactions=txs)
        for code in ("5101", "1301"):
            assert balances[code] == balance(registry, code, txs)
        assert balances["1301"] == Decimal("500")


class TestAccountActivity:

    def test_debit_and_credit_totals(self, registry, make_tx):
        txs = [
            make_tx("2101", TxType.CREDIT, "1000"),
            make_tx("2101", TxType.DEBIT, "200"),
            make_tx("1101", TxType.DEBIT, "75"),
        ]
        rows = {r.account_code: r for r in account_activity(registry, txs)}
        assert rows["2101"].debit_total == Decimal("200")
        assert rows["2101"].credit_total == Decimal("1000")
        assert rows["2101"].balance == Decimal("800")
        assert rows["1101"].balance == Decimal("75")

    def test_rows_sorted_by_code(self, registry):
        codes = [r.account_code for r in account_activity(registry, [])]
        assert codes == sorted(codes)


# =========================================================================
# Property: balances do not depend on transaction order
# =========================================================================

_CODES = [a.code for a in STANDARD_CHART]

_transactions = st.lists(
    st.tuples(
        st.sampled_from(_CODES),
        st.sampled_from(list(TxType)),
        st.decimals(min_value=0, max_value=10**9, places=2, allow_nan=False),
    ),
    max_size=30,
).map(
    lambda rows: [
        Transaction(f"h-{i}", date(2024, 1, 1), tx_type, code, amount)
        for i, (code, tx_type, amount) in enumerate(rows)
    ]
)


class TestOrderIndependence:

    @given(txs=_transactions, data=st.data())
    @settings(max_examples=50, deadline=None)
    def test_permutation_gives_same_balances(self, txs, data):
        registry = AccountRegistry(STANDARD_CHART)
        shuffled = data.draw(st.permutations(txs))
        assert compute_balances(registry, transactions=txs) == compute_balances(
            registry, transactions=shuffled,
        )

    @given(txs=_transactions)
    @settings(max_examples=50, deadline=None)
    def test_activity_balance_equals_fold(self, txs):
        registry = AccountRegistry(STANDARD_CHART)
        balances = compute_balances(registry, transactions=txs)
        for row in account_activity(registry, txs):
            assert row.balance == balances[row.account_code]
