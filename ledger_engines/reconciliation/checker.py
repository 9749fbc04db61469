"""
RegisterReconciliationChecker -- Pure engine comparing ledger and registers.

The fixed-asset register and the per-project WIP computation are the
authoritative figures for their balance-sheet lines.  The ledger
balances of the matching accounts are informational; this engine
measures the drift between the two and reports it.

Architecture: ledger_engines -- pure calculation, zero I/O, zero DB access.

Invariants enforced:
    - drift = ledger_balance - register_total.
    - A drift within tolerance is ok; beyond it is a WARNING finding.
    - Nothing is corrected; in strict mode the first drift raises.
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal

from ledger_kernel.domain.values import ZERO
from ledger_kernel.exceptions import ReconciliationDriftError
from ledger_kernel.logging_config import get_logger

from ledger_engines.reconciliation.types import (
    ReconciliationArea,
    ReconciliationReport,
    ReconciliationResult,
)

logger = get_logger("engines.reconciliation.checker")

DEFAULT_TOLERANCE = Decimal("100")


def reconcile(
    ledger_balance: Decimal,
    register_total: Decimal,
    tolerance: Decimal = DEFAULT_TOLERANCE,
    area: ReconciliationArea | None = None,
) -> ReconciliationResult:
    """Compare one ledger figure with its register total."""
    drift = ledger_balance - register_total
    return ReconciliationResult(
        ledger_balance=ledger_balance,
        register_total=register_total,
        drift=drift,
        tolerance=tolerance,
        ok=abs(drift) <= tolerance,
        area=area,
    )


class RegisterReconciliationChecker:
    """Pure engine for ledger-versus-register reconciliation.

    Usage:
        checker = RegisterReconciliationChecker(tolerance=Decimal("100"))
        report = checker.run_all_checks(
            balances, fixed_asset_codes, total_book_value,
            wip_codes, net_wip,
        )
    """

    def __init__(self, tolerance: Decimal = DEFAULT_TOLERANCE, strict: bool = False):
        self.tolerance = tolerance
        self.strict = strict

    def check_fixed_assets(
        self,
        balances: Mapping[str, Decimal],
        fixed_asset_codes: frozenset[str],
        total_book_value: Decimal,
    ) -> ReconciliationResult:
        """Ledger Σ of fixed-asset codes versus register book value."""
        ledger = sum((balances.get(c, ZERO) for c in fixed_asset_codes), ZERO)
        return self._check(ReconciliationArea.FIXED_ASSETS, ledger, total_book_value)

    def check_wip(
        self,
        balances: Mapping[str, Decimal],
        wip_codes: frozenset[str],
        net_wip: Decimal,
    ) -> ReconciliationResult:
        """Ledger WIP balance versus net project WIP (costs - billings)."""
        ledger = sum((balances.get(c, ZERO) for c in wip_codes), ZERO)
        return self._check(ReconciliationArea.WIP, ledger, net_wip)

    def run_all_checks(
        self,
        balances: Mapping[str, Decimal],
        fixed_asset_codes: frozenset[str],
        total_book_value: Decimal,
        wip_codes: frozenset[str],
        net_wip: Decimal,
    ) -> ReconciliationReport:
        results = (
            self.check_fixed_assets(balances, fixed_asset_codes, total_book_value),
            self.check_wip(balances, wip_codes, net_wip),
        )
        return ReconciliationReport.from_results(results)

    def _check(
        self,
        area: ReconciliationArea,
        ledger: Decimal,
        register_total: Decimal,
    ) -> ReconciliationResult:
        result = reconcile(ledger, register_total, self.tolerance, area)
        if not result.ok:
            logger.warning(
                "reconciliation_drift_detected",
                extra={
                    "area": area.value,
                    "ledger_balance": str(ledger),
                    "register_total": str(register_total),
                    "drift": str(result.drift),
                    "tolerance": str(self.tolerance),
                },
            )
            if self.strict:
                raise ReconciliationDriftError(
                    area.value, str(result.drift), str(self.tolerance),
                )
        return result
