"""
Tests for the account registry and its sign table.

The registry is the only place an unsigned amount becomes a balance
effect, so every (account type, transaction class) cell is checked.
"""

from decimal import Decimal

import pytest

from ledger_kernel.domain.records import Account, AccountType, NormalBalance, TxType
from ledger_kernel.exceptions import InvalidRecordError, UnknownAccountError
from ledger_engines.accounts import (
    CREDIT_CLASS,
    DEBIT_CLASS,
    AccountRegistry,
    normal_side,
    tx_class,
)

AMOUNT = Decimal("100")


@pytest.fixture
def registry(chart) -> AccountRegistry:
    return AccountRegistry(chart)


class TestSignTable:

    @pytest.mark.parametrize(
        "account_type, side",
        [
            (AccountType.ASSET, NormalBalance.DEBIT),
            (AccountType.FIXED_ASSET, NormalBalance.DEBIT),
            (AccountType.EXPENSE, NormalBalance.DEBIT),
            (AccountType.CONTRA_ASSET, NormalBalance.CREDIT),
            (AccountType.LIABILITY, NormalBalance.CREDIT),
            (AccountType.EQUITY, NormalBalance.CREDIT),
            (AccountType.REVENUE, NormalBalance.CREDIT),
        ],
    )
    def test_normal_side(self, account_type, side):
        assert normal_side(account_type) is side

    def test_transaction_classes_partition_all_types(self):
        assert DEBIT_CLASS | CREDIT_CLASS == set(TxType)
        assert not DEBIT_CLASS & CREDIT_CLASS

    @pytest.mark.parametrize("tx_type", [TxType.DEBIT, TxType.EXPENSE, TxType.WIP_INCREASE])
    def test_debit_class(self, tx_type):
        assert tx_class(tx_type) is NormalBalance.DEBIT

    @pytest.mark.parametrize(
        "tx_type",
        [TxType.CREDIT, TxType.INCOME, TxType.WIP_DECREASE, TxType.REVENUE],
    )
    def test_credit_class(self, tx_type):
        assert tx_class(tx_type) is NormalBalance.CREDIT

    @pytest.mark.parametrize(
        "code, debit_effect",
        [
            ("1101", AMOUNT),    # Asset
            ("1501", AMOUNT),    # FixedAsset
            ("5101", AMOUNT),    # Expense
            ("1601", -AMOUNT),   # ContraAsset
            ("2101", -AMOUNT),   # Liability
            ("3101", -AMOUNT),   # Equity
            ("4101", -AMOUNT),   # Revenue
        ],
    )
    def test_signed_amount(self, registry, code, debit_effect):
        assert registry.signed_amount(code, TxType.DEBIT, AMOUNT) == debit_effect
        assert registry.signed_amount(code, TxType.CREDIT, AMOUNT) == -debit_effect

    def test_income_on_revenue_is_positive(self, registry):
        assert registry.signed_amount("4101", TxType.INCOME, AMOUNT) == AMOUNT
        assert registry.signed_amount("4101", TxType.REVENUE, AMOUNT) == AMOUNT

    def test_wip_increase_on_wip_asset(self, registry):
        assert registry.signed_amount("1301", TxType.WIP_INCREASE, AMOUNT) == AMOUNT
        assert registry.signed_amount("1301", TxType.WIP_DECREASE, AMOUNT) == -AMOUNT


class TestLookup:

    def test_unknown_code(self, registry):
        with pytest.raises(UnknownAccountError) as exc_info:
            registry.account("9999", "tx-42")
        assert exc_info.value.account_code == "9999"
        assert exc_info.value.record_id == "tx-42"

    def test_signed_amount_unknown_code(self, registry):
        with pytest.raises(UnknownAccountError):
            registry.signed_amount("9999", TxType.DEBIT, AMOUNT, "tx-1")

    def test_duplicate_code_rejected(self):
        accounts = [
            Account("1101", "Kas", AccountType.ASSET),
            Account("1101", "Kas Kecil", AccountType.ASSET),
        ]
        with pytest.raises(InvalidRecordError):
            AccountRegistry(accounts)

    def test_iteration_sorted_by_code(self, chart):
        registry = AccountRegistry(reversed(chart))
        assert [a.code for a in registry] == sorted(a.code for a in chart)
        assert registry.codes() == tuple(sorted(a.code for a in chart))
        assert len(registry) == len(chart)
        assert "1101" in registry

    def test_accounts_of_type(self, registry):
        codes = [a.code for a in registry.accounts_of_type(AccountType.EXPENSE)]
        assert codes == ["5101", "6101"]


class TestRegisterCodes:

    def test_fixed_asset_codes_by_type(self, registry):
        assert registry.fixed_asset_codes() == frozenset({"1501"})

    def test_asset_typed_15xx_counts_as_fixed_asset(self):
        registry = AccountRegistry([
            Account("1510", "Kendaraan", AccountType.ASSET),
            Account("1101", "Kas", AccountType.ASSET),
            Account("1520", "Gedung", AccountType.FIXED_ASSET),
        ])
        assert registry.fixed_asset_codes(("15",)) == frozenset({"1510", "1520"})

    def test_wip_codes_only_existing(self, registry):
        assert registry.wip_codes(("1301", "1399")) == frozenset({"1301"})
