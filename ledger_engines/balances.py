"""
Ledger Balance Calculator.

Responsibility:
    Fold unsigned, typed transactions into natural (signed) account
    balances using the account registry's sign table.

Architecture position:
    Engines -- pure calculation, zero I/O.

Invariants enforced:
    - Balances are order-independent: folding is a plain sum.
    - ``compute_balances`` visits each transaction once and returns a
      balance for every registry code (zero when unused).
    - Amounts were validated (finite, non-negative) when the
      ``Transaction`` record was built.

Failure modes:
    - UnknownAccountError naming the transaction whose code is absent.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal

from ledger_kernel.domain.records import NormalBalance, Transaction
from ledger_kernel.domain.values import ZERO
from ledger_engines.accounts import AccountRegistry, tx_class
from ledger_engines.tracer import traced_engine


@dataclass(frozen=True)
class AccountActivity:
    """Debit-class and credit-class totals of one account, plus its balance."""

    account_code: str
    debit_total: Decimal
    credit_total: Decimal
    balance: Decimal


def balance(
    registry: AccountRegistry,
    account_code: str,
    transactions: Iterable[Transaction],
) -> Decimal:
    """
    Natural balance of one account.

    Every transaction is checked against the registry, so an unknown code
    fails here exactly as it does in ``compute_balances``.

    Raises:
        UnknownAccountError: If ``account_code`` or any transaction's code
            is not in the registry.
    """
    registry.account(account_code)
    total = ZERO
    for tx in transactions:
        registry.account(tx.account_code, tx.id)
        if tx.account_code == account_code:
            total += registry.signed_amount(
                tx.account_code, tx.tx_type, tx.amount, tx.id,
            )
    return total


@traced_engine("balances", "1.0", fingerprint_fields=("transactions",))
def compute_balances(
    registry: AccountRegistry,
    transactions: Iterable[Transaction],
) -> Mapping[str, Decimal]:
    """
    Natural balances of every registry account in one pass.

    Raises:
        UnknownAccountError: For the first transaction with an unknown code.
    """
    balances = {code: ZERO for code in registry.codes()}
    for tx in transactions:
        balances[tx.account_code] = balances.get(tx.account_code, ZERO) + (
            registry.signed_amount(tx.account_code, tx.tx_type, tx.amount, tx.id)
        )
    return balances


def account_activity(
    registry: AccountRegistry,
    transactions: Iterable[Transaction],
) -> tuple[AccountActivity, ...]:
    """Per-account debit-class/credit-class totals, sorted by code."""
    debits = {code: ZERO for code in registry.codes()}
    credits = dict(debits)
    for tx in transactions:
        registry.account(tx.account_code, tx.id)
        if tx_class(tx.tx_type) == NormalBalance.DEBIT:
            debits[tx.account_code] += tx.amount
        else:
            credits[tx.account_code] += tx.amount

    rows = []
    for code in registry.codes():
        if registry.normal_side(code) == NormalBalance.DEBIT:
            natural = debits[code] - credits[code]
        else:
            natural = credits[code] - debits[code]
        rows.append(AccountActivity(code, debits[code], credits[code], natural))
    return tuple(rows)
