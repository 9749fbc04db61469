"""
Ledger Input Records (``ledger_kernel.domain.records``).

Responsibility
--------------
Frozen dataclass value objects for everything the derivation engine
reads: chart-of-accounts entries, ledger transactions, the fixed-asset
register, projects with their costs and billings, and the cashflow
category lookup.  ``LedgerSnapshot`` bundles one consistent read of all
of them.

Architecture position
---------------------
**Kernel > Domain** -- pure data definitions with ZERO I/O.  Built by
``SnapshotSelector`` from ORM rows (or by callers directly) and consumed
by engines and statement builders.  No dependency on SQLAlchemy.

Invariants enforced
-------------------
* All records are ``frozen=True``; the engine never mutates its inputs.
* All monetary fields are non-negative ``Decimal`` (``parse_amount``).
* ``FixedAsset``: ``0 <= accumulated_depreciation <= value`` and
  ``book_value == value - accumulated_depreciation``.

Failure modes
-------------
* Negative / non-numeric amount -> ``MalformedAmountError``.
* Unknown account-type or transaction-type label -> ``ValueError`` from
  ``from_label`` (callers wrap it in ``InvalidRecordError``).
* Inconsistent fixed-asset figures -> ``InvalidRecordError``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum

from ledger_kernel.domain.values import ZERO, parse_amount
from ledger_kernel.exceptions import InvalidRecordError


# =========================================================================
# Enums
# =========================================================================


class AccountType(str, Enum):
    """Canonical account types of the chart of accounts."""

    ASSET = "asset"
    FIXED_ASSET = "fixed_asset"
    CONTRA_ASSET = "contra_asset"
    LIABILITY = "liability"
    EQUITY = "equity"
    REVENUE = "revenue"
    EXPENSE = "expense"

    @classmethod
    def from_label(cls, label: str) -> AccountType:
        """
        Map a stored (possibly localized) type label to the canonical type.

        Raises:
            ValueError: if the label is not recognized.
        """
        key = " ".join(label.replace("_", " ").split()).lower()
        try:
            return _ACCOUNT_TYPE_LABELS[key]
        except KeyError:
            raise ValueError(f"Unknown account type label: {label!r}") from None


_ACCOUNT_TYPE_LABELS: dict[str, AccountType] = {
    "asset": AccountType.ASSET,
    "aktiva": AccountType.ASSET,
    "aset": AccountType.ASSET,
    "fixed asset": AccountType.FIXED_ASSET,
    "aset tetap": AccountType.FIXED_ASSET,
    "contra asset": AccountType.CONTRA_ASSET,
    "kontra aset": AccountType.CONTRA_ASSET,
    "liability": AccountType.LIABILITY,
    "kewajiban": AccountType.LIABILITY,
    "hutang": AccountType.LIABILITY,
    "equity": AccountType.EQUITY,
    "ekuitas": AccountType.EQUITY,
    "modal": AccountType.EQUITY,
    "revenue": AccountType.REVENUE,
    "pendapatan": AccountType.REVENUE,
    "expense": AccountType.EXPENSE,
    "beban": AccountType.EXPENSE,
}


class NormalBalance(str, Enum):
    """Normal balance side for an account (and class of a transaction type)."""

    DEBIT = "debit"
    CREDIT = "credit"


class TxType(str, Enum):
    """Transaction type tags as stored by the ledger."""

    DEBIT = "debit"
    CREDIT = "credit"
    INCOME = "income"
    EXPENSE = "expense"
    WIP_INCREASE = "WIP_INCREASE"
    WIP_DECREASE = "WIP_DECREASE"
    REVENUE = "REVENUE"

    @classmethod
    def from_label(cls, label: str) -> TxType:
        """
        Case-insensitive lookup by value or member name.

        Raises:
            ValueError: if the label is not recognized.
        """
        key = label.strip().upper()
        for member in cls:
            if member.name == key or member.value.upper() == key:
                return member
        raise ValueError(f"Unknown transaction type label: {label!r}")


class CashflowActivity(str, Enum):
    """Cash flow statement activity classes."""

    OPERATING = "operating"
    INVESTING = "investing"
    FINANCING = "financing"


# =========================================================================
# Records
# =========================================================================


@dataclass(frozen=True)
class Account:
    """A chart-of-accounts entry."""

    code: str
    name: str
    account_type: AccountType
    category: str | None = None
    subcategory: str | None = None
    is_current: bool | None = None  # None = unspecified, treated as current


@dataclass(frozen=True)
class Transaction:
    """A posted ledger transaction. ``amount`` is unsigned."""

    id: str
    date: date
    tx_type: TxType
    account_code: str
    amount: Decimal
    description: str = ""
    project_id: str | None = None

    def __post_init__(self):
        object.__setattr__(
            self, "amount", parse_amount(self.amount, "transaction", self.id),
        )


@dataclass(frozen=True)
class FixedAsset:
    """
    A fixed-asset register entry.

    ``useful_life`` is in years; 0 marks a non-depreciating asset (land).
    ``book_value`` is derived when not supplied.
    """

    id: str
    asset_name: str
    acquisition_date: date
    value: Decimal
    useful_life: int
    accumulated_depreciation: Decimal = ZERO
    book_value: Decimal | None = None

    def __post_init__(self):
        value = parse_amount(self.value, "fixed_asset", self.id)
        accumulated = parse_amount(
            self.accumulated_depreciation, "fixed_asset", self.id,
        )
        if self.useful_life < 0:
            raise InvalidRecordError(
                "fixed_asset", self.id, "useful_life cannot be negative",
            )
        if accumulated > value:
            raise InvalidRecordError(
                "fixed_asset", self.id,
                f"accumulated_depreciation {accumulated} exceeds value {value}",
            )
        expected_book = value - accumulated
        if self.book_value is not None:
            book = parse_amount(self.book_value, "fixed_asset", self.id)
            if book != expected_book:
                raise InvalidRecordError(
                    "fixed_asset", self.id,
                    f"book_value {book} != value - accumulated_depreciation "
                    f"({expected_book})",
                )
        object.__setattr__(self, "value", value)
        object.__setattr__(self, "accumulated_depreciation", accumulated)
        object.__setattr__(self, "book_value", expected_book)

    @property
    def is_depreciating(self) -> bool:
        return self.useful_life > 0


@dataclass(frozen=True)
class ProjectCost:
    """A cost incurred on a project."""

    id: str
    project_id: str
    amount: Decimal
    date: date
    status: str = "pending"
    category: str = ""
    description: str = ""

    def __post_init__(self):
        object.__setattr__(
            self, "amount", parse_amount(self.amount, "project_cost", self.id),
        )


@dataclass(frozen=True)
class Billing:
    """An amount billed to the client of a project."""

    id: str
    project_id: str
    amount: Decimal
    date: date
    status: str = "unpaid"
    percentage: Decimal | None = None

    def __post_init__(self):
        object.__setattr__(
            self, "amount", parse_amount(self.amount, "billing", self.id),
        )


@dataclass(frozen=True)
class Project:
    """A client project with its nested costs and billings."""

    id: str
    project_code: str
    name: str
    status: str = "ongoing"
    start_date: date | None = None
    costs: tuple[ProjectCost, ...] = ()
    billings: tuple[Billing, ...] = ()


@dataclass(frozen=True)
class CashflowCategory:
    """Explicit cash flow classification for an account code."""

    account_code: str
    category: CashflowActivity
    subcategory: str | None = None


# =========================================================================
# Snapshot
# =========================================================================


@dataclass(frozen=True)
class LedgerSnapshot:
    """
    One consistent read of every input a derivation needs.

    ``as_of`` is the balance-sheet date; ``period_start`` is set when the
    snapshot was loaded for a cash flow period.
    """

    accounts: tuple[Account, ...]
    transactions: tuple[Transaction, ...] = ()
    fixed_assets: tuple[FixedAsset, ...] = ()
    projects: tuple[Project, ...] = ()
    cashflow_categories: tuple[CashflowCategory, ...] = ()
    as_of: date | None = None
    period_start: date | None = None
