"""
Pure financial statement transformation functions.

These functions turn one ``LedgerSnapshot`` into structured financial
statements. ZERO I/O. ZERO side effects.

All monetary values are Decimal. All inputs/outputs are frozen dataclasses.

Functions in this module follow the ledger_kernel/domain/ purity convention:
- No database access
- No clock access (the caller supplies ``ReportMetadata``)
- No file I/O
- Deterministic: same inputs always produce same outputs

Authoritative sources:
- Fixed Asset line: the fixed-asset register's book values.  Ledger
  balances of fixed-asset codes are informational.
- WIP line: project costs minus billings.  The ledger balance of the WIP
  account(s) is informational.
Drift between the two is measured by the reconciliation engine and
attached to the balance sheet.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable
from datetime import date
from decimal import Decimal
from enum import Enum
from uuid import UUID

from ledger_kernel.domain.records import (
    Account,
    AccountType,
    CashflowActivity,
    LedgerSnapshot,
    Transaction,
)
from ledger_kernel.domain.values import ZERO, percent_change
from ledger_engines.accounts import AccountRegistry, is_credit_class
from ledger_engines.balances import account_activity, compute_balances
from ledger_engines.reconciliation.checker import RegisterReconciliationChecker
from ledger_modules.assets.register import total_book_value
from ledger_modules.reporting.config import AccountClassification, ReportingConfig
from ledger_modules.reporting.models import (
    AccountLine,
    BalanceSheetReport,
    BalanceSheetSection,
    CashFlowLineItem,
    CashFlowSection,
    CashFlowSource,
    CashFlowStatementReport,
    CashFlowSummary,
    CategoryGroup,
    ComparativeBalanceSheetReport,
    ComparativeCashFlowReport,
    ComparativeFigure,
    FixedAssetLine,
    ReportMetadata,
    SubcategoryGroup,
    TrialBalanceLineItem,
    TrialBalanceReport,
    WipLine,
)
from ledger_modules.wip.valuation import summarize_wip

OVERBILLING_CODE = "WIP-NEG"
OVERBILLING_NAME = "Advance from Customers (Negative WIP)"
OVERBILLING_CATEGORY = "Current Liabilities"
OVERBILLING_SUBCATEGORY = "Customer Advances"

CONTRA_CATEGORY = "Accumulated Depreciation"
DEFAULT_SUBCATEGORY = "General"


# =========================================================================
# Helpers
# =========================================================================


def restrict_to_date(snapshot: LedgerSnapshot, as_of: date) -> LedgerSnapshot:
    """
    The part of ``snapshot`` that existed on ``as_of``.

    Transactions, fixed-asset acquisitions, costs and billings dated after
    ``as_of`` are dropped, as are projects that started after it.
    """
    projects = tuple(
        dataclasses.replace(
            p,
            costs=tuple(c for c in p.costs if c.date <= as_of),
            billings=tuple(b for b in p.billings if b.date <= as_of),
        )
        for p in snapshot.projects
        if p.start_date is None or p.start_date <= as_of
    )
    return dataclasses.replace(
        snapshot,
        transactions=tuple(t for t in snapshot.transactions if t.date <= as_of),
        fixed_assets=tuple(
            a for a in snapshot.fixed_assets if a.acquisition_date <= as_of
        ),
        projects=projects,
        as_of=as_of,
    )


def _sum(values: Iterable[Decimal]) -> Decimal:
    return sum(values, ZERO)


def _make_section(
    label: str,
    entries: list[tuple[Account, Decimal]],
    default_category: str,
    include_zero: bool = True,
) -> BalanceSheetSection:
    """Group account balances by category, then subcategory, in code order."""
    grouped: dict[str, dict[str, list[AccountLine]]] = {}
    for account, amount in entries:
        if not include_zero and amount == ZERO:
            continue
        category = account.category or default_category
        subcategory = account.subcategory or DEFAULT_SUBCATEGORY
        grouped.setdefault(category, {}).setdefault(subcategory, []).append(
            AccountLine(account.code, account.name, amount)
        )

    categories = []
    for category, subgroups in grouped.items():
        subs = tuple(
            SubcategoryGroup(
                label=sub,
                lines=tuple(lines),
                total=_sum(line.balance for line in lines),
            )
            for sub, lines in subgroups.items()
        )
        categories.append(
            CategoryGroup(label=category, subcategories=subs, total=_sum(s.total for s in subs))
        )
    return BalanceSheetSection(
        label=label,
        categories=tuple(categories),
        total=_sum(c.total for c in categories),
    )


# =========================================================================
# 1. TRIAL BALANCE
# =========================================================================


def build_trial_balance(
    snapshot: LedgerSnapshot,
    metadata: ReportMetadata,
) -> TrialBalanceReport:
    """Per-account debit-class/credit-class totals and natural balances."""
    snapshot = restrict_to_date(snapshot, metadata.as_of_date)
    registry = AccountRegistry(snapshot.accounts)
    activity = account_activity(registry, snapshot.transactions)

    lines = tuple(
        TrialBalanceLineItem(
            account_code=row.account_code,
            account_name=registry.account(row.account_code).name,
            account_type=registry.account_type(row.account_code).value,
            debit_total=row.debit_total,
            credit_total=row.credit_total,
            net_balance=row.balance,
        )
        for row in activity
    )
    total_debits = _sum(line.debit_total for line in lines)
    total_credits = _sum(line.credit_total for line in lines)

    return TrialBalanceReport(
        metadata=metadata,
        lines=lines,
        total_debits=total_debits,
        total_credits=total_credits,
        is_balanced=(total_debits == total_credits),
    )


# =========================================================================
# 2. BALANCE SHEET
# =========================================================================


def build_balance_sheet(
    snapshot: LedgerSnapshot,
    config: ReportingConfig,
    metadata: ReportMetadata,
) -> BalanceSheetReport:
    """
    Itemized balance sheet as of ``metadata.as_of_date``.

    total_assets = Σ Asset balances (excluding fixed-asset and WIP codes)
                   - Σ ContraAsset balances + Σ register book value
                   + Σ positive project WIP
    total_liabilities = Σ Liability balances + Σ project over-billing
    total_equity = Σ Equity balances
    net_income = Σ Revenue balances - Σ Expense balances

    Raises:
        UnknownAccountError: If a transaction references an unknown code.
        ReconciliationDriftError: On drift, when reconciliation is strict.
    """
    snapshot = restrict_to_date(snapshot, metadata.as_of_date)
    classification = config.classification
    include_zero = config.include_zero_balances

    registry = AccountRegistry(snapshot.accounts)
    balances = compute_balances(registry, transactions=snapshot.transactions)

    fixed_asset_codes = registry.fixed_asset_codes(classification.fixed_asset_prefixes)
    wip_codes = registry.wip_codes(classification.wip_account_codes)
    register_codes = fixed_asset_codes | wip_codes

    book_value = total_book_value(snapshot.fixed_assets)
    wip_summary = summarize_wip(snapshot.projects, config.wip_project_statuses)

    reconciliation = RegisterReconciliationChecker(
        tolerance=config.drift_tolerance,
        strict=config.strict_reconciliation,
    ).run_all_checks(
        balances, fixed_asset_codes, book_value, wip_codes, wip_summary.net_wip,
    )

    # --- Assets ---------------------------------------------------------
    current_asset_entries: list[tuple[Account, Decimal]] = []
    non_current_asset_entries: list[tuple[Account, Decimal]] = []
    for account in registry.accounts_of_type(AccountType.ASSET):
        if account.code in register_codes:
            continue
        entry = (account, balances[account.code])
        if classification.is_current_asset(account):
            current_asset_entries.append(entry)
        else:
            non_current_asset_entries.append(entry)

    contra_accounts = registry.accounts_of_type(AccountType.CONTRA_ASSET)
    total_contra = _sum(balances[a.code] for a in contra_accounts)
    for account in contra_accounts:
        contra_line = dataclasses.replace(
            account, category=CONTRA_CATEGORY, subcategory=DEFAULT_SUBCATEGORY,
        )
        non_current_asset_entries.append((contra_line, -balances[account.code]))

    current_assets = _make_section(
        "Current Assets", current_asset_entries, "Other Current Assets", include_zero,
    )
    non_current_assets = _make_section(
        "Non-Current Assets", non_current_asset_entries,
        "Other Non-Current Assets", include_zero,
    )

    fixed_asset_lines = tuple(
        FixedAssetLine(
            asset_id=a.id,
            asset_name=a.asset_name,
            acquisition_date=a.acquisition_date,
            value=a.value,
            accumulated_depreciation=a.accumulated_depreciation,
            book_value=a.book_value,
        )
        for a in snapshot.fixed_assets
    )
    wip_lines = tuple(
        WipLine(
            project_id=p.project_id,
            project_code=p.project_code,
            project_name=p.project_name,
            total_costs=p.total_costs,
            total_billed=p.total_billed,
            wip=p.wip,
        )
        for p in wip_summary.projects
        if p.wip > ZERO
    )

    total_assets = (
        current_assets.total
        + non_current_assets.total
        + book_value
        + wip_summary.total_wip_asset
    )

    # --- Liabilities ----------------------------------------------------
    current_liability_entries: list[tuple[Account, Decimal]] = []
    non_current_liability_entries: list[tuple[Account, Decimal]] = []
    for account in registry.accounts_of_type(AccountType.LIABILITY):
        entry = (account, balances[account.code])
        if classification.is_current_liability(account):
            current_liability_entries.append(entry)
        else:
            non_current_liability_entries.append(entry)

    if wip_summary.total_overbilling > ZERO:
        advances = Account(
            code=OVERBILLING_CODE,
            name=OVERBILLING_NAME,
            account_type=AccountType.LIABILITY,
            category=OVERBILLING_CATEGORY,
            subcategory=OVERBILLING_SUBCATEGORY,
            is_current=True,
        )
        current_liability_entries.append((advances, wip_summary.total_overbilling))

    current_liabilities = _make_section(
        "Current Liabilities", current_liability_entries,
        "Other Current Liabilities", include_zero,
    )
    non_current_liabilities = _make_section(
        "Non-Current Liabilities", non_current_liability_entries,
        "Other Non-Current Liabilities", include_zero,
    )
    total_liabilities = current_liabilities.total + non_current_liabilities.total

    # --- Equity and result ---------------------------------------------
    equity = _make_section(
        "Equity",
        [(a, balances[a.code]) for a in registry.accounts_of_type(AccountType.EQUITY)],
        "Equity",
        include_zero,
    )
    net_income = (
        _sum(balances[a.code] for a in registry.accounts_of_type(AccountType.REVENUE))
        - _sum(balances[a.code] for a in registry.accounts_of_type(AccountType.EXPENSE))
    )

    total_liabilities_and_equity = total_liabilities + equity.total + net_income
    difference = total_assets - total_liabilities_and_equity

    return BalanceSheetReport(
        metadata=metadata,
        current_assets=current_assets,
        non_current_assets=non_current_assets,
        fixed_assets=fixed_asset_lines,
        work_in_progress=wip_lines,
        total_contra_assets=total_contra,
        total_book_value=book_value,
        total_wip_asset=wip_summary.total_wip_asset,
        total_assets=total_assets,
        current_liabilities=current_liabilities,
        non_current_liabilities=non_current_liabilities,
        total_overbilling=wip_summary.total_overbilling,
        total_liabilities=total_liabilities,
        equity=equity,
        total_equity=equity.total,
        net_income=net_income,
        total_liabilities_and_equity=total_liabilities_and_equity,
        is_balanced=abs(difference) < config.balance_tolerance,
        difference=difference,
        reconciliation=reconciliation,
    )


# =========================================================================
# 3. CASH FLOW STATEMENT
# =========================================================================


def classify_cash_flow(
    tx: Transaction,
    account: Account,
    explicit: CashflowActivity | None,
    classification: AccountClassification,
    fixed_asset_codes: frozenset[str] = frozenset(),
) -> tuple[CashflowActivity, Decimal] | None:
    """
    Activity and signed amount of one transaction, or None if it does not
    move cash.

    An explicit category wins (credit-class positive).  Otherwise the
    account type decides:

    - Asset, cash or bank category: operating, credit-class positive
    - FixedAsset: investing, debit-class negative (purchase)
    - Liability: operating when current, else financing; credit-class positive
    - Equity: financing, credit-class positive
    - Revenue: operating, positive
    - Expense: operating, negative
    Other assets and contra assets are not cash movements.
    """
    credit = is_credit_class(tx.tx_type)
    credit_positive = tx.amount if credit else -tx.amount

    if explicit is not None:
        return explicit, credit_positive

    account_type = account.account_type
    if account_type == AccountType.FIXED_ASSET or account.code in fixed_asset_codes:
        return CashflowActivity.INVESTING, credit_positive
    if account_type == AccountType.ASSET:
        if classification.is_cash_account(account):
            return CashflowActivity.OPERATING, credit_positive
        return None
    if account_type == AccountType.LIABILITY:
        if classification.is_current_liability(account):
            return CashflowActivity.OPERATING, credit_positive
        return CashflowActivity.FINANCING, credit_positive
    if account_type == AccountType.EQUITY:
        return CashflowActivity.FINANCING, credit_positive
    if account_type == AccountType.REVENUE:
        return CashflowActivity.OPERATING, tx.amount
    if account_type == AccountType.EXPENSE:
        return CashflowActivity.OPERATING, -tx.amount
    return None


def build_cash_flow_statement(
    snapshot: LedgerSnapshot,
    config: ReportingConfig,
    metadata: ReportMetadata,
) -> CashFlowStatementReport:
    """
    Direct-method cash flow for ``[metadata.period_start, metadata.as_of_date]``.

    Besides classified transactions, every billing is an operating inflow,
    every project cost an operating outflow and every fixed-asset
    acquisition an investing outflow of its full value.

    Raises:
        UnknownAccountError: If a transaction references an unknown code.
    """
    start = metadata.period_start
    end = metadata.as_of_date

    def in_period(d: date) -> bool:
        return d <= end and (start is None or d >= start)

    classification = config.classification
    registry = AccountRegistry(snapshot.accounts)
    fixed_asset_codes = registry.fixed_asset_codes(classification.fixed_asset_prefixes)
    explicit = {c.account_code: c.category for c in snapshot.cashflow_categories}

    sections: dict[CashflowActivity, list[CashFlowLineItem]] = {
        activity: [] for activity in CashflowActivity
    }

    for tx in snapshot.transactions:
        if not in_period(tx.date):
            continue
        account = registry.account(tx.account_code, tx.id)
        classified = classify_cash_flow(
            tx, account, explicit.get(tx.account_code), classification,
            fixed_asset_codes,
        )
        if classified is None:
            continue
        activity, amount = classified
        sections[activity].append(
            CashFlowLineItem(
                date=tx.date,
                description=tx.description,
                amount=amount,
                source=CashFlowSource.TRANSACTION,
                account_code=account.code,
                account_name=account.name,
                project_id=tx.project_id,
            )
        )

    for project in snapshot.projects:
        for billing in project.billings:
            if not in_period(billing.date):
                continue
            description = f"Billing for project {project.name}"
            if billing.percentage is not None:
                description += f" ({billing.percentage}%)"
            sections[CashflowActivity.OPERATING].append(
                CashFlowLineItem(
                    date=billing.date,
                    description=description,
                    amount=billing.amount,
                    source=CashFlowSource.BILLING,
                    account_name="Project Billing",
                    project_id=project.id,
                )
            )
        for cost in project.costs:
            if not in_period(cost.date):
                continue
            if cost.category:
                description = f"{cost.category}: {cost.description}"
            else:
                description = cost.description or f"Cost for project {project.name}"
            sections[CashflowActivity.OPERATING].append(
                CashFlowLineItem(
                    date=cost.date,
                    description=description,
                    amount=-cost.amount,
                    source=CashFlowSource.PROJECT_COST,
                    account_name="Project Cost",
                    project_id=project.id,
                )
            )

    for asset in snapshot.fixed_assets:
        if not in_period(asset.acquisition_date):
            continue
        sections[CashflowActivity.INVESTING].append(
            CashFlowLineItem(
                date=asset.acquisition_date,
                description=f"Acquisition of {asset.asset_name}",
                amount=-asset.value,
                source=CashFlowSource.FIXED_ASSET,
                account_name="Fixed Asset",
            )
        )

    def section(activity: CashflowActivity) -> CashFlowSection:
        lines = tuple(sorted(sections[activity], key=lambda line: line.date))
        return CashFlowSection(
            activity=activity, lines=lines, total=_sum(l.amount for l in lines),
        )

    operating = section(CashflowActivity.OPERATING)
    investing = section(CashflowActivity.INVESTING)
    financing = section(CashflowActivity.FINANCING)

    return CashFlowStatementReport(
        metadata=metadata,
        operating=operating,
        investing=investing,
        financing=financing,
        operating_inflows=tuple(l for l in operating.lines if l.amount > ZERO),
        operating_outflows=tuple(l for l in operating.lines if l.amount < ZERO),
        summary=CashFlowSummary(
            total_operating=operating.total,
            total_investing=investing.total,
            total_financing=financing.total,
            net_cash_flow=operating.total + investing.total + financing.total,
        ),
    )


# =========================================================================
# 4. COMPARATIVE REPORTS
# =========================================================================


def _figure(
    label: str, current: Decimal, previous: Decimal, use_abs: bool = False,
) -> ComparativeFigure:
    return ComparativeFigure(
        label=label,
        current=current,
        previous=previous,
        change=current - previous,
        percent_change=percent_change(current, previous, use_abs=use_abs),
    )


def build_comparative_balance_sheet(
    current: BalanceSheetReport,
    previous: BalanceSheetReport,
    metadata: ReportMetadata,
) -> ComparativeBalanceSheetReport:
    """Headline balance-sheet figures at two dates with their changes."""
    figures = tuple(
        _figure(label, getattr(current, label), getattr(previous, label))
        for label in (
            "total_assets",
            "total_liabilities",
            "total_equity",
            "net_income",
            "total_liabilities_and_equity",
        )
    )
    return ComparativeBalanceSheetReport(
        metadata=metadata, current=current, previous=previous, figures=figures,
    )


def build_comparative_cash_flow(
    current: CashFlowStatementReport,
    previous: CashFlowStatementReport,
    metadata: ReportMetadata,
) -> ComparativeCashFlowReport:
    """Cash flow totals for two periods; percentages divide by |previous|."""
    figures = tuple(
        _figure(
            label,
            getattr(current.summary, label),
            getattr(previous.summary, label),
            use_abs=True,
        )
        for label in (
            "total_operating",
            "total_investing",
            "total_financing",
            "net_cash_flow",
        )
    )
    return ComparativeCashFlowReport(
        metadata=metadata, current=current, previous=previous, figures=figures,
    )


# =========================================================================
# 5. RENDERING
# =========================================================================


def render_to_dict(obj: object) -> dict | list | str | int | float | bool | None:
    """
    Convert any report dataclass to a plain dict for JSON serialization.

    Handles:
    - Decimal -> str (preserving precision)
    - UUID -> str
    - date -> ISO format string
    - Enum -> .value
    - Nested frozen dataclasses -> nested dicts
    - Tuples -> lists
    - None preserved
    """
    if obj is None:
        return None
    if isinstance(obj, Decimal):
        return str(obj)
    if isinstance(obj, UUID):
        return str(obj)
    if isinstance(obj, date):
        return obj.isoformat()
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (list, tuple)):
        return [render_to_dict(item) for item in obj]
    if isinstance(obj, dict):
        return {str(k): render_to_dict(v) for k, v in obj.items()}
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {
            f.name: render_to_dict(getattr(obj, f.name))
            for f in dataclasses.fields(obj)
        }
    if isinstance(obj, (str, int, float, bool)):
        return obj
    return str(obj)
