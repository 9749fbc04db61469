"""
WIP Valuation Value Objects (``ledger_modules.wip.models``).

Frozen dataclasses for per-project work in progress and its totals.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ledger_kernel.domain.values import ZERO


@dataclass(frozen=True)
class ProjectWip:
    """Costs, billings and WIP of one project."""

    project_id: str
    project_code: str
    project_name: str
    status: str
    total_costs: Decimal
    total_billed: Decimal

    @property
    def wip(self) -> Decimal:
        return self.total_costs - self.total_billed

    @property
    def is_overbilled(self) -> bool:
        return self.wip < ZERO

    @property
    def asset_amount(self) -> Decimal:
        """Contribution to the WIP asset line."""
        return max(ZERO, self.wip)

    @property
    def overbilling_amount(self) -> Decimal:
        """Contribution to the advance-from-customers liability."""
        return max(ZERO, -self.wip)


@dataclass(frozen=True)
class WipSummary:
    """
    WIP totals over a set of projects.

    Over-billing on one project is never netted against WIP on another.
    """

    projects: tuple[ProjectWip, ...]
    total_wip_asset: Decimal
    total_overbilling: Decimal

    @property
    def net_wip(self) -> Decimal:
        return self.total_wip_asset - self.total_overbilling
