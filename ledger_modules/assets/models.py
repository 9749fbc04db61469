"""
Fixed Asset Register Value Objects (``ledger_modules.assets.models``).

Frozen dataclasses for depreciation schedules and batch depreciation
recalculation results.  Pure data, zero I/O.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ledger_kernel.domain.records import FixedAsset


@dataclass(frozen=True)
class DepreciationScheduleLine:
    """One calendar year of a straight-line depreciation schedule."""

    year: int
    beginning_value: Decimal
    depreciation: Decimal
    accumulated_depreciation: Decimal
    ending_value: Decimal
    depreciation_ratio: Decimal  # percent of a full year's charge


@dataclass(frozen=True)
class DepreciationChange:
    """An asset whose recomputed depreciation moved by more than a cent."""

    asset_id: str
    asset_name: str
    previous_accumulated_depreciation: Decimal
    new_accumulated_depreciation: Decimal
    previous_book_value: Decimal
    new_book_value: Decimal


@dataclass(frozen=True)
class DepreciationRunSummary:
    """Result of recomputing depreciation over a whole register."""

    processed: int
    updated: int
    assets: tuple[FixedAsset, ...] = ()
    changes: tuple[DepreciationChange, ...] = ()
