"""
Ledger Engines - Pure calculation layer.

All engines are pure functions over immutable domain records:
- accounts: account registry and sign convention
- balances: natural account balances from typed transactions
- reconciliation: ledger versus fixed-asset and WIP registers
"""

from ledger_engines.accounts import (
    CREDIT_CLASS,
    DEBIT_CLASS,
    AccountRegistry,
    normal_side,
    tx_class,
)
from ledger_engines.balances import (
    AccountActivity,
    account_activity,
    balance,
    compute_balances,
)

__all__ = [
    "CREDIT_CLASS",
    "DEBIT_CLASS",
    "AccountRegistry",
    "normal_side",
    "tx_class",
    "AccountActivity",
    "account_activity",
    "balance",
    "compute_balances",
]
