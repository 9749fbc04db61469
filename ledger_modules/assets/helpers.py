"""
Fixed Assets Helpers (``ledger_modules.assets.helpers``).

Responsibility
--------------
Pure straight-line depreciation formulas: accumulated depreciation at a
date and the year-by-year schedule of one asset.

Architecture position
---------------------
**Modules layer** -- pure helper functions.  No I/O, no session, no
clock, no database access.  Called by the register functions or from
tests.

Invariants enforced
-------------------
* All numeric inputs and outputs use ``Decimal`` -- NEVER ``float``.
* ``0 <= accumulated <= value``.
* Useful life 0 never depreciates.
* Results are quantized to 2 decimal places.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from ledger_kernel.domain.values import ZERO, round_money
from ledger_modules.assets.models import DepreciationScheduleLine

DAYS_PER_YEAR = Decimal("365")


def age_in_years(acquisition_date: date, as_of: date) -> Decimal:
    """Fractional age on a 365-day year.  Negative before acquisition."""
    return Decimal((as_of - acquisition_date).days) / DAYS_PER_YEAR


def annual_depreciation(value: Decimal, useful_life: int) -> Decimal:
    """Unrounded full-year straight-line charge (zero for life 0)."""
    if useful_life <= 0:
        return ZERO
    return value / Decimal(useful_life)


def straight_line_accumulated(
    value: Decimal,
    acquisition_date: date,
    useful_life: int,
    as_of: date,
) -> Decimal:
    """
    Accumulated straight-line depreciation at ``as_of``.

    Postconditions:
        - ``min(value, max(0, age / useful_life) * value)``, rounded.
        - ``Decimal("0")`` when ``useful_life`` is 0.
    """
    if useful_life <= 0:
        return ZERO
    fraction = max(ZERO, age_in_years(acquisition_date, as_of) / Decimal(useful_life))
    return min(value, round_money(fraction * value))


def depreciation_schedule(
    value: Decimal,
    acquisition_date: date,
    useful_life: int,
) -> tuple[DepreciationScheduleLine, ...]:
    """
    Year-by-year straight-line schedule.

    The first calendar year is charged by months held, counting the
    acquisition month.  Full years follow; whatever book value remains
    after ``useful_life`` years is charged in one final residual year.
    Returns an empty schedule for a non-depreciating asset.
    """
    if useful_life <= 0:
        return ()

    annual = annual_depreciation(value, useful_life)
    hundred = Decimal("100")

    first_months = 13 - acquisition_date.month
    first_ratio = Decimal(first_months) / Decimal("12")
    first_charge = min(value, annual * first_ratio)
    accumulated = first_charge
    book = value - first_charge

    lines = [
        DepreciationScheduleLine(
            year=acquisition_date.year,
            beginning_value=round_money(value),
            depreciation=round_money(first_charge),
            accumulated_depreciation=round_money(accumulated),
            ending_value=round_money(book),
            depreciation_ratio=round_money(first_ratio * hundred),
        )
    ]

    for offset in range(1, useful_life):
        if book <= ZERO:
            break
        charge = min(annual, book)
        beginning = book
        accumulated += charge
        book = max(ZERO, book - charge)
        lines.append(
            DepreciationScheduleLine(
                year=acquisition_date.year + offset,
                beginning_value=round_money(beginning),
                depreciation=round_money(charge),
                accumulated_depreciation=round_money(accumulated),
                ending_value=round_money(book),
                depreciation_ratio=hundred,
            )
        )

    if book > ZERO:
        accumulated += book
        lines.append(
            DepreciationScheduleLine(
                year=acquisition_date.year + len(lines),
                beginning_value=round_money(book),
                depreciation=round_money(book),
                accumulated_depreciation=round_money(accumulated),
                ending_value=ZERO,
                depreciation_ratio=round_money(book / annual * hundred),
            )
        )

    return tuple(lines)
