"""
Fixed Asset Register (``ledger_modules.assets.register``).

Responsibility
--------------
Totals and depreciation recomputation over the fixed-asset register.
The register's book value is the authoritative figure for the Fixed
Asset line of the balance sheet; ledger balances of fixed-asset codes
are informational and only compared by reconciliation.

Architecture position
---------------------
**Modules layer** -- pure functions over frozen ``FixedAsset`` records.
Recomputation returns new records; nothing is written back.

Invariants enforced
-------------------
* ``book_value == value - accumulated_depreciation`` on every returned
  record (checked by ``FixedAsset`` itself).
* Useful life 0 keeps ``book_value == value``.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace
from datetime import date
from decimal import Decimal

from ledger_kernel.domain.records import FixedAsset
from ledger_kernel.domain.values import CENT, ZERO
from ledger_kernel.logging_config import get_logger
from ledger_modules.assets.helpers import (
    depreciation_schedule,
    straight_line_accumulated,
)
from ledger_modules.assets.models import (
    DepreciationChange,
    DepreciationRunSummary,
    DepreciationScheduleLine,
)

logger = get_logger("modules.assets.register")


def total_book_value(fixed_assets: Iterable[FixedAsset]) -> Decimal:
    """Sum of book values across the register."""
    return sum((asset.book_value for asset in fixed_assets), ZERO)


def recalculate_depreciation(asset: FixedAsset, as_of: date) -> FixedAsset:
    """Return ``asset`` with straight-line depreciation recomputed at ``as_of``."""
    accumulated = straight_line_accumulated(
        asset.value, asset.acquisition_date, asset.useful_life, as_of,
    )
    return replace(asset, accumulated_depreciation=accumulated, book_value=None)


def schedule_for(asset: FixedAsset) -> tuple[DepreciationScheduleLine, ...]:
    return depreciation_schedule(asset.value, asset.acquisition_date, asset.useful_life)


def recalculate_register(
    fixed_assets: Iterable[FixedAsset],
    as_of: date,
) -> DepreciationRunSummary:
    """
    Recompute depreciation for every asset at ``as_of``.

    Assets whose accumulated depreciation moves by more than one cent
    are reported in ``changes``.  The returned ``assets`` tuple holds the
    recomputed record for every asset, in input order.
    """
    assets: list[FixedAsset] = []
    changes: list[DepreciationChange] = []
    for asset in fixed_assets:
        updated = recalculate_depreciation(asset, as_of)
        assets.append(updated)
        if abs(updated.accumulated_depreciation - asset.accumulated_depreciation) > CENT:
            changes.append(
                DepreciationChange(
                    asset_id=asset.id,
                    asset_name=asset.asset_name,
                    previous_accumulated_depreciation=asset.accumulated_depreciation,
                    new_accumulated_depreciation=updated.accumulated_depreciation,
                    previous_book_value=asset.book_value,
                    new_book_value=updated.book_value,
                )
            )

    summary = DepreciationRunSummary(
        processed=len(assets),
        updated=len(changes),
        assets=tuple(assets),
        changes=tuple(changes),
    )
    logger.info(
        "depreciation_recalculated",
        extra={
            "as_of": as_of,
            "processed": summary.processed,
            "updated": summary.updated,
        },
    )
    return summary
