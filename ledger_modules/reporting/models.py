"""
Financial Reporting Domain Models (``ledger_modules.reporting.models``).

Responsibility
--------------
Frozen dataclass value objects representing statement outputs: trial
balance, itemized balance sheet, cash flow statement and their
comparative forms.

Architecture position
---------------------
**Modules layer** -- pure data definitions with ZERO I/O.  Built by the
pure functions in ``statements`` and returned by ``ReportingService``.

Invariants enforced
-------------------
* All models are ``frozen=True`` (immutable after construction).
* All monetary fields use ``Decimal`` -- NEVER ``float``.

Audit relevance
---------------
* ``ReportMetadata`` carries the generation timestamp and parameters
  for report reproducibility.
* Balance sheets carry the ledger/register reconciliation results, so
  drift is visible next to the figures it affects.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum

from ledger_kernel.domain.records import CashflowActivity
from ledger_engines.reconciliation.types import DriftFinding, ReconciliationReport


# =========================================================================
# Enums
# =========================================================================


class ReportType(str, Enum):
    """Types of financial reports."""

    TRIAL_BALANCE = "trial_balance"
    BALANCE_SHEET = "balance_sheet"
    CASH_FLOW = "cash_flow"
    COMPARATIVE_BALANCE_SHEET = "comparative_balance_sheet"
    COMPARATIVE_CASH_FLOW = "comparative_cash_flow"


class CashFlowSource(str, Enum):
    """Where a cash flow line came from."""

    TRANSACTION = "transaction"
    BILLING = "billing"
    PROJECT_COST = "project_cost"
    FIXED_ASSET = "fixed_asset"


# =========================================================================
# Report Metadata (common to all reports)
# =========================================================================


@dataclass(frozen=True)
class ReportMetadata:
    """Metadata attached to every financial report."""

    report_type: ReportType
    entity_name: str
    currency: str
    as_of_date: date
    generated_at: str  # ISO format timestamp from injected clock
    period_start: date | None = None
    comparative_date: date | None = None
    comparative_period_start: date | None = None


# =========================================================================
# Trial Balance
# =========================================================================


@dataclass(frozen=True)
class TrialBalanceLineItem:
    """A single line in the trial balance."""

    account_code: str
    account_name: str
    account_type: str
    debit_total: Decimal
    credit_total: Decimal
    net_balance: Decimal  # Natural-balance-adjusted


@dataclass(frozen=True)
class TrialBalanceReport:
    """
    Trial balance.

    The ledger is single-entry, so ``is_balanced`` is informational.
    """

    metadata: ReportMetadata
    lines: tuple[TrialBalanceLineItem, ...]
    total_debits: Decimal
    total_credits: Decimal
    is_balanced: bool


# =========================================================================
# Balance Sheet
# =========================================================================


@dataclass(frozen=True)
class AccountLine:
    """One account's balance as it appears on the balance sheet."""

    account_code: str
    account_name: str
    balance: Decimal


@dataclass(frozen=True)
class SubcategoryGroup:
    label: str
    lines: tuple[AccountLine, ...]
    total: Decimal


@dataclass(frozen=True)
class CategoryGroup:
    label: str
    subcategories: tuple[SubcategoryGroup, ...]
    total: Decimal


@dataclass(frozen=True)
class BalanceSheetSection:
    """A section of the balance sheet (e.g. Current Assets)."""

    label: str
    categories: tuple[CategoryGroup, ...]
    total: Decimal


@dataclass(frozen=True)
class FixedAssetLine:
    """A fixed-asset register entry on the balance sheet."""

    asset_id: str
    asset_name: str
    acquisition_date: date
    value: Decimal
    accumulated_depreciation: Decimal
    book_value: Decimal


@dataclass(frozen=True)
class WipLine:
    """An under-billed project on the WIP asset line."""

    project_id: str
    project_code: str
    project_name: str
    total_costs: Decimal
    total_billed: Decimal
    wip: Decimal


@dataclass(frozen=True)
class BalanceSheetReport:
    """
    Itemized balance sheet.

    ``total_assets`` = ledger asset accounts (current + non-current,
    contra accounts negative) + register book value + WIP asset.
    ``total_liabilities_and_equity`` includes the period's net income.
    """

    metadata: ReportMetadata

    # Assets
    current_assets: BalanceSheetSection
    non_current_assets: BalanceSheetSection
    fixed_assets: tuple[FixedAssetLine, ...]
    work_in_progress: tuple[WipLine, ...]
    total_contra_assets: Decimal
    total_book_value: Decimal
    total_wip_asset: Decimal
    total_assets: Decimal

    # Liabilities
    current_liabilities: BalanceSheetSection
    non_current_liabilities: BalanceSheetSection
    total_overbilling: Decimal
    total_liabilities: Decimal

    # Equity
    equity: BalanceSheetSection
    total_equity: Decimal
    net_income: Decimal

    # Verification
    total_liabilities_and_equity: Decimal
    is_balanced: bool
    difference: Decimal

    reconciliation: ReconciliationReport

    @property
    def findings(self) -> tuple[DriftFinding, ...]:
        return self.reconciliation.findings


# =========================================================================
# Cash Flow Statement (direct method)
# =========================================================================


@dataclass(frozen=True)
class CashFlowLineItem:
    """A single classified cash movement."""

    date: date
    description: str
    amount: Decimal
    source: CashFlowSource
    account_code: str | None = None
    account_name: str | None = None
    project_id: str | None = None


@dataclass(frozen=True)
class CashFlowSection:
    """All lines of one activity class."""

    activity: CashflowActivity
    lines: tuple[CashFlowLineItem, ...]
    total: Decimal


@dataclass(frozen=True)
class CashFlowSummary:
    total_operating: Decimal
    total_investing: Decimal
    total_financing: Decimal
    net_cash_flow: Decimal


@dataclass(frozen=True)
class CashFlowStatementReport:
    """
    Statement of cash flows for a period.

    Operating lines are also split into inflows (Revenue) and outflows
    (Expenses).
    """

    metadata: ReportMetadata
    operating: CashFlowSection
    investing: CashFlowSection
    financing: CashFlowSection
    operating_inflows: tuple[CashFlowLineItem, ...]
    operating_outflows: tuple[CashFlowLineItem, ...]
    summary: CashFlowSummary


# =========================================================================
# Comparative reports
# =========================================================================


@dataclass(frozen=True)
class ComparativeFigure:
    """A headline figure at two points, with its change."""

    label: str
    current: Decimal
    previous: Decimal
    change: Decimal
    percent_change: Decimal  # 0 when previous is 0


@dataclass(frozen=True)
class ComparativeBalanceSheetReport:
    metadata: ReportMetadata
    current: BalanceSheetReport
    previous: BalanceSheetReport
    figures: tuple[ComparativeFigure, ...]


@dataclass(frozen=True)
class ComparativeCashFlowReport:
    metadata: ReportMetadata
    current: CashFlowStatementReport
    previous: CashFlowStatementReport
    figures: tuple[ComparativeFigure, ...]
