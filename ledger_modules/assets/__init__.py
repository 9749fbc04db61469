"""
Fixed Asset Register.

Straight-line depreciation, schedules and register totals.
"""

from ledger_modules.assets.helpers import (
    depreciation_schedule,
    straight_line_accumulated,
)
from ledger_modules.assets.models import (
    DepreciationChange,
    DepreciationRunSummary,
    DepreciationScheduleLine,
)
from ledger_modules.assets.register import (
    recalculate_depreciation,
    recalculate_register,
    schedule_for,
    total_book_value,
)

__all__ = [
    "depreciation_schedule",
    "straight_line_accumulated",
    "DepreciationChange",
    "DepreciationRunSummary",
    "DepreciationScheduleLine",
    "recalculate_depreciation",
    "recalculate_register",
    "schedule_for",
    "total_book_value",
]
