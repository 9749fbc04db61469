"""
Register reconciliation domain types.

Pure frozen dataclasses and enums describing how far the general ledger
has drifted from the derived registers (fixed-asset book values and
project WIP).

Architecture: ledger_engines/reconciliation -- pure domain, zero I/O.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


# =============================================================================
# Enums
# =============================================================================


class CheckSeverity(str, Enum):
    """Severity level of a reconciliation finding."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class CheckStatus(str, Enum):
    """Overall status of a reconciliation run."""

    PASSED = "passed"
    WARNING = "warning"     # Drift findings present


class ReconciliationArea(str, Enum):
    """Statement line whose register is compared with the ledger."""

    FIXED_ASSETS = "fixed_assets"
    WIP = "wip"


# =============================================================================
# Output types
# =============================================================================


@dataclass(frozen=True)
class ReconciliationResult:
    """
    Comparison of one ledger figure with its register total.

    ``drift = ledger_balance - register_total``; ``ok`` when
    ``|drift| <= tolerance``.
    """

    ledger_balance: Decimal
    register_total: Decimal
    drift: Decimal
    tolerance: Decimal
    ok: bool
    area: ReconciliationArea | None = None


@dataclass(frozen=True)
class DriftFinding:
    """
    A ledger/register drift beyond tolerance.

    Attached to statements as a warning.  Never turned into a correcting
    entry.
    """

    area: ReconciliationArea
    ledger_balance: Decimal
    register_total: Decimal
    drift: Decimal
    tolerance: Decimal
    message: str
    code: str = "RECONCILIATION_DRIFT"
    severity: CheckSeverity = CheckSeverity.WARNING


@dataclass(frozen=True)
class ReconciliationReport:
    """All reconciliation results of one statement run."""

    status: CheckStatus
    results: tuple[ReconciliationResult, ...] = ()
    findings: tuple[DriftFinding, ...] = ()

    @property
    def is_clean(self) -> bool:
        return len(self.findings) == 0

    def result_for(self, area: ReconciliationArea) -> ReconciliationResult | None:
        for result in self.results:
            if result.area == area:
                return result
        return None

    @classmethod
    def from_results(
        cls, results: tuple[ReconciliationResult, ...],
    ) -> ReconciliationReport:
        """Factory that derives findings and status from results."""
        findings = tuple(
            DriftFinding(
                area=r.area,
                ledger_balance=r.ledger_balance,
                register_total=r.register_total,
                drift=r.drift,
                tolerance=r.tolerance,
                message=(
                    f"Ledger {r.area.value} balance {r.ledger_balance} differs "
                    f"from register total {r.register_total} by {r.drift} "
                    f"(tolerance {r.tolerance})"
                ),
            )
            for r in results
            if not r.ok
        )
        status = CheckStatus.WARNING if findings else CheckStatus.PASSED
        return cls(status=status, results=results, findings=findings)
