"""
Reconciliation - ledger versus derived registers.

Pure domain types and the checker engine.
"""

from ledger_engines.reconciliation.types import (
    CheckSeverity,
    CheckStatus,
    DriftFinding,
    ReconciliationArea,
    ReconciliationReport,
    ReconciliationResult,
)

from ledger_engines.reconciliation.checker import (
    DEFAULT_TOLERANCE,
    RegisterReconciliationChecker,
    reconcile,
)

__all__ = [
    "CheckSeverity",
    "CheckStatus",
    "DriftFinding",
    "ReconciliationArea",
    "ReconciliationReport",
    "ReconciliationResult",
    "DEFAULT_TOLERANCE",
    "RegisterReconciliationChecker",
    "reconcile",
]
