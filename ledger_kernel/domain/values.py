"""
Module: ledger_kernel.domain.values
Responsibility: Monetary value helpers shared by every layer -- amount
    parsing/validation at the record boundary and the one sanctioned
    rounding function.
Architecture position: Kernel > Domain.  Pure, zero I/O.

Invariants enforced:
    - Amounts are non-negative, finite ``Decimal`` values.  The sign of a
      posting is derived from its type, never stored.
    - No floats in results.  Float inputs are converted through ``str`` so
      that ``0.1`` becomes ``Decimal("0.1")``, not its binary expansion.

Failure modes:
    - MalformedAmountError on negative, NaN/infinite or non-numeric input.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from ledger_kernel.exceptions import MalformedAmountError

ZERO = Decimal("0")
CENT = Decimal("0.01")

MONEY_DECIMAL_PLACES = 2
DEFAULT_ROUNDING = ROUND_HALF_UP


def to_decimal(value: object) -> Decimal:
    """
    Convert a raw numeric value to ``Decimal``.

    Raises:
        InvalidOperation: if ``value`` is not numeric.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise InvalidOperation(f"boolean is not an amount: {value!r}")
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, str):
        return Decimal(value.strip())
    raise InvalidOperation(f"unsupported amount type: {type(value).__name__}")


def parse_amount(
    value: object,
    record_type: str,
    record_id: str | None = None,
) -> Decimal:
    """
    Validate a record amount.

    Preconditions: ``value`` is a Decimal, int, float or numeric string.
    Postconditions: Returns a finite, non-negative ``Decimal``.

    Raises:
        MalformedAmountError: naming ``record_type``/``record_id`` when the
            value is negative, non-finite or not numeric.
    """
    try:
        amount = to_decimal(value)
    except (InvalidOperation, ValueError):
        raise MalformedAmountError(record_type, record_id, value) from None
    if not amount.is_finite() or amount < ZERO:
        raise MalformedAmountError(record_type, record_id, value)
    return amount


def round_money(
    value: Decimal,
    decimal_places: int = MONEY_DECIMAL_PLACES,
    rounding: str = DEFAULT_ROUNDING,
) -> Decimal:
    """
    Round a monetary value to the given number of decimal places.

    This is the only sanctioned rounding function for financial values.
    """
    quantize_str = "0." + "0" * decimal_places if decimal_places > 0 else "1"
    return value.quantize(Decimal(quantize_str), rounding=rounding)


def percent_change(current: Decimal, previous: Decimal, *, use_abs: bool = False) -> Decimal:
    """
    Percentage change from ``previous`` to ``current``.

    Returns ``Decimal("0")`` when ``previous`` is zero.  With ``use_abs``
    the denominator is ``|previous|`` so a shrinking outflow reads as a
    positive change.
    """
    if previous == ZERO:
        return ZERO
    base = abs(previous) if use_abs else previous
    return round_money((current - previous) / base * 100)
