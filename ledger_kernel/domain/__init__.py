"""
Pure domain layer.

Immutable input records, monetary helpers and the clock abstraction,
with NO dependencies on the ORM, the database or I/O.
"""

from ledger_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from ledger_kernel.domain.records import (
    Account,
    AccountType,
    Billing,
    CashflowActivity,
    CashflowCategory,
    FixedAsset,
    LedgerSnapshot,
    NormalBalance,
    Project,
    ProjectCost,
    Transaction,
    TxType,
)
from ledger_kernel.domain.values import (
    CENT,
    ZERO,
    parse_amount,
    percent_change,
    round_money,
)

__all__ = [
    "Clock",
    "DeterministicClock",
    "SystemClock",
    "Account",
    "AccountType",
    "Billing",
    "CashflowActivity",
    "CashflowCategory",
    "FixedAsset",
    "LedgerSnapshot",
    "NormalBalance",
    "Project",
    "ProjectCost",
    "Transaction",
    "TxType",
    "CENT",
    "ZERO",
    "parse_amount",
    "percent_change",
    "round_money",
]
