"""
Account Registry -- the single source of the sign convention.

Responsibility:
    Resolve account codes to account types, account types to their normal
    side, and (account, transaction type, amount) triples to the signed
    effect of one posting on the account's natural balance.

Architecture position:
    Engines -- pure calculation, zero I/O.  Built from the ``Account``
    records of a ``LedgerSnapshot``.

Sign convention:

    ===========  ======  ================  =================
    Type         Normal  Debit-class tx    Credit-class tx
    ===========  ======  ================  =================
    Asset        Debit   +amount           -amount
    FixedAsset   Debit   +amount           -amount
    ContraAsset  Credit  -amount           +amount
    Liability    Credit  -amount           +amount
    Equity       Credit  -amount           +amount
    Revenue      Credit  -amount           +amount
    Expense      Debit   +amount           -amount
    ===========  ======  ================  =================

    Debit-class transaction types: debit, expense, WIP_INCREASE.
    Credit-class transaction types: credit, income, WIP_DECREASE, REVENUE.

Failure modes:
    - UnknownAccountError for a code that is not in the registry.
    - InvalidRecordError when two accounts share a code.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from decimal import Decimal
from types import MappingProxyType

from ledger_kernel.domain.records import Account, AccountType, NormalBalance, TxType
from ledger_kernel.exceptions import InvalidRecordError, UnknownAccountError

NORMAL_SIDE: MappingProxyType[AccountType, NormalBalance] = MappingProxyType({
    AccountType.ASSET: NormalBalance.DEBIT,
    AccountType.FIXED_ASSET: NormalBalance.DEBIT,
    AccountType.CONTRA_ASSET: NormalBalance.CREDIT,
    AccountType.LIABILITY: NormalBalance.CREDIT,
    AccountType.EQUITY: NormalBalance.CREDIT,
    AccountType.REVENUE: NormalBalance.CREDIT,
    AccountType.EXPENSE: NormalBalance.DEBIT,
})

DEBIT_CLASS: frozenset[TxType] = frozenset({
    TxType.DEBIT,
    TxType.EXPENSE,
    TxType.WIP_INCREASE,
})

CREDIT_CLASS: frozenset[TxType] = frozenset({
    TxType.CREDIT,
    TxType.INCOME,
    TxType.WIP_DECREASE,
    TxType.REVENUE,
})


def normal_side(account_type: AccountType) -> NormalBalance:
    """Normal balance side of an account type."""
    return NORMAL_SIDE[account_type]


def tx_class(tx_type: TxType) -> NormalBalance:
    """Whether a transaction type is debit-class or credit-class."""
    if tx_type in DEBIT_CLASS:
        return NormalBalance.DEBIT
    return NormalBalance.CREDIT


def is_credit_class(tx_type: TxType) -> bool:
    return tx_type in CREDIT_CLASS


class AccountRegistry:
    """
    Lookup of the chart of accounts by code.

    Contract:
        Immutable after construction.  ``signed_amount`` is the only
        function that turns an unsigned amount into a balance effect.
    """

    def __init__(self, accounts: Iterable[Account]):
        by_code: dict[str, Account] = {}
        for account in accounts:
            if account.code in by_code:
                raise InvalidRecordError(
                    "account", account.code, "duplicate account code",
                )
            by_code[account.code] = account
        self._accounts = MappingProxyType(by_code)

    def __contains__(self, code: object) -> bool:
        return code in self._accounts

    def __len__(self) -> int:
        return len(self._accounts)

    def __iter__(self) -> Iterator[Account]:
        return iter(sorted(self._accounts.values(), key=lambda a: a.code))

    def codes(self) -> tuple[str, ...]:
        return tuple(sorted(self._accounts))

    def account(self, code: str, record_id: str | None = None) -> Account:
        """
        Get the account for a code.

        Raises:
            UnknownAccountError: If the code is absent.
        """
        try:
            return self._accounts[code]
        except KeyError:
            raise UnknownAccountError(code, record_id) from None

    def account_type(self, code: str, record_id: str | None = None) -> AccountType:
        return self.account(code, record_id).account_type

    def normal_side(self, code: str) -> NormalBalance:
        return normal_side(self.account_type(code))

    def accounts_of_type(self, *types: AccountType) -> tuple[Account, ...]:
        return tuple(a for a in self if a.account_type in types)

    def signed_amount(
        self,
        code: str,
        tx_type: TxType,
        amount: Decimal,
        record_id: str | None = None,
    ) -> Decimal:
        """
        Effect of one posting on the natural balance of ``code``.

        Positive when the posting's class matches the account's normal
        side, negative otherwise.
        """
        side = normal_side(self.account_type(code, record_id))
        return amount if tx_class(tx_type) == side else -amount

    def fixed_asset_codes(self, prefixes: tuple[str, ...] = ("15",)) -> frozenset[str]:
        """
        Codes carried by the fixed-asset register.

        FixedAsset-typed accounts plus Asset-typed accounts whose code
        starts with one of ``prefixes``.
        """
        return frozenset(
            a.code for a in self._accounts.values()
            if a.account_type == AccountType.FIXED_ASSET
            or (
                a.account_type == AccountType.ASSET
                and a.code.startswith(prefixes)
            )
        )

    def wip_codes(self, configured: tuple[str, ...] = ("1301",)) -> frozenset[str]:
        """Configured WIP codes that exist in the chart."""
        return frozenset(code for code in configured if code in self._accounts)
