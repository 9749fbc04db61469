"""
WIP Valuation (``ledger_modules.wip.valuation``).

Responsibility
--------------
Derive work in progress per project as costs incurred minus amounts
billed, and split the totals into the WIP asset (under-billed projects)
and the advance-from-customers liability (over-billed projects).

Architecture position
---------------------
**Modules layer** -- pure functions over frozen ``Project`` records.
These figures are authoritative for the WIP line; the ledger balance of
the WIP account is only compared by reconciliation.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable
from decimal import Decimal

from ledger_kernel.domain.records import Project
from ledger_kernel.domain.values import ZERO
from ledger_modules.wip.models import ProjectWip, WipSummary


def wip(project: Project) -> Decimal:
    """Σ cost amounts - Σ billing amounts."""
    costs = sum((c.amount for c in project.costs), ZERO)
    billed = sum((b.amount for b in project.billings), ZERO)
    return costs - billed


def project_wip(project: Project) -> ProjectWip:
    return ProjectWip(
        project_id=project.id,
        project_code=project.project_code,
        project_name=project.name,
        status=project.status,
        total_costs=sum((c.amount for c in project.costs), ZERO),
        total_billed=sum((b.amount for b in project.billings), ZERO),
    )


def summarize_wip(
    projects: Iterable[Project],
    statuses: Collection[str] | None = None,
) -> WipSummary:
    """
    WIP per project and the asset / over-billing totals.

    Args:
        projects: Projects with their costs and billings.
        statuses: When given, only projects with one of these statuses
            contribute.  ``None`` means every project.
    """
    rows = tuple(
        project_wip(p) for p in projects
        if statuses is None or p.status in statuses
    )
    return WipSummary(
        projects=rows,
        total_wip_asset=sum((r.asset_amount for r in rows), ZERO),
        total_overbilling=sum((r.overbilling_amount for r in rows), ZERO),
    )
