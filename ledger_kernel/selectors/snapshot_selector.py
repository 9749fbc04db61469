"""
Module: ledger_kernel.selectors.snapshot_selector
Responsibility: Load one consistent, immutable ``LedgerSnapshot`` from the
    ledger tables for a single report request.
Architecture position: Kernel > Selectors.  The only place ORM rows are
    converted to domain records.  Engines and statement builders never
    see the ORM.

Invariants enforced:
    - Every table is read through the caller's session in one transaction
      pinned to REPEATABLE READ on server databases, so a commit landing
      between two reads never splits a report across two states.
    - Balance-sheet snapshots (``period_start`` is None) are cumulative up
      to ``as_of``.  Period snapshots restrict transactions, fixed-asset
      acquisitions, costs and billings to ``[period_start, as_of]``.
    - Projects that started after ``as_of`` are excluded.

Failure modes:
    - InvalidRecordError for an unrecognized account-type, transaction-type
      or cash flow category label.
    - MalformedAmountError for a negative or non-numeric stored amount.
"""

from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from ledger_kernel.db.engine import begin_snapshot_read
from ledger_kernel.domain.records import (
    Account,
    AccountType,
    Billing,
    CashflowActivity,
    CashflowCategory,
    FixedAsset,
    LedgerSnapshot,
    Project,
    ProjectCost,
    Transaction,
    TxType,
)
from ledger_kernel.exceptions import InvalidRecordError
from ledger_kernel.logging_config import get_logger
from ledger_kernel.models.account import AccountModel, CashflowCategoryModel
from ledger_kernel.models.fixed_asset import FixedAssetModel
from ledger_kernel.models.project import ProjectModel
from ledger_kernel.models.transaction import TransactionModel
from ledger_kernel.selectors.base import BaseSelector

logger = get_logger("selectors.snapshot")


class SnapshotSelector(BaseSelector[TransactionModel]):
    """
    Reads every input a derivation needs and returns a ``LedgerSnapshot``.

    Contract:
        ``load(as_of)`` returns a cumulative snapshot for a balance sheet;
        ``load(as_of, period_start=...)`` returns a period snapshot for a
        cash flow statement.
    """

    def __init__(self, session: Session):
        super().__init__(session)

    def load(self, as_of: date, period_start: date | None = None) -> LedgerSnapshot:
        """
        Load a snapshot.

        Args:
            as_of: Last date included.
            period_start: First date included for period-bound records.

        Raises:
            InvalidRecordError: If a stored label cannot be interpreted.
        """
        begin_snapshot_read(self.session)
        snapshot = LedgerSnapshot(
            accounts=self.accounts(),
            transactions=self.transactions(as_of, period_start),
            fixed_assets=self.fixed_assets(as_of, period_start),
            projects=self.projects(as_of, period_start),
            cashflow_categories=self.cashflow_categories(),
            as_of=as_of,
            period_start=period_start,
        )
        logger.info(
            "snapshot_loaded",
            extra={
                "as_of": as_of,
                "period_start": period_start,
                "accounts": len(snapshot.accounts),
                "transactions": len(snapshot.transactions),
                "fixed_assets": len(snapshot.fixed_assets),
                "projects": len(snapshot.projects),
            },
        )
        return snapshot

    # -----------------------------------------------------------------
    # Per-table readers
    # -----------------------------------------------------------------

    def accounts(self) -> tuple[Account, ...]:
        rows = self.session.scalars(
            select(AccountModel).order_by(AccountModel.code)
        ).all()
        return tuple(_to_account(row) for row in rows)

    def transactions(
        self, as_of: date, period_start: date | None = None,
    ) -> tuple[Transaction, ...]:
        query = select(TransactionModel).where(TransactionModel.date <= as_of)
        if period_start is not None:
            query = query.where(TransactionModel.date >= period_start)
        query = query.order_by(TransactionModel.date, TransactionModel.id)
        return tuple(_to_transaction(row) for row in self.session.scalars(query))

    def fixed_assets(
        self, as_of: date, period_start: date | None = None,
    ) -> tuple[FixedAsset, ...]:
        query = select(FixedAssetModel).where(
            FixedAssetModel.acquisition_date <= as_of
        )
        if period_start is not None:
            query = query.where(FixedAssetModel.acquisition_date >= period_start)
        query = query.order_by(FixedAssetModel.acquisition_date)
        return tuple(
            FixedAsset(
                id=str(row.id),
                asset_name=row.asset_name,
                acquisition_date=row.acquisition_date,
                value=row.value,
                useful_life=row.useful_life,
                accumulated_depreciation=row.accumulated_depreciation,
                book_value=row.book_value,
            )
            for row in self.session.scalars(query)
        )

    def projects(
        self, as_of: date, period_start: date | None = None,
    ) -> tuple[Project, ...]:
        query = (
            select(ProjectModel)
            .where(
                (ProjectModel.start_date.is_(None))
                | (ProjectModel.start_date <= as_of)
            )
            .options(
                selectinload(ProjectModel.costs),
                selectinload(ProjectModel.billings),
            )
            .order_by(ProjectModel.project_code)
        )

        def in_range(d: date) -> bool:
            if d > as_of:
                return False
            return period_start is None or d >= period_start

        projects = []
        for row in self.session.scalars(query):
            project_id = str(row.id)
            costs = tuple(
                ProjectCost(
                    id=str(c.id),
                    project_id=project_id,
                    amount=c.amount,
                    date=c.date,
                    status=c.status,
                    category=c.category,
                    description=c.description,
                )
                for c in sorted(row.costs, key=lambda c: c.date)
                if in_range(c.date)
            )
            billings = tuple(
                Billing(
                    id=str(b.id),
                    project_id=project_id,
                    amount=b.amount,
                    date=b.date,
                    status=b.status,
                    percentage=b.percentage,
                )
                for b in sorted(row.billings, key=lambda b: b.date)
                if in_range(b.date)
            )
            projects.append(
                Project(
                    id=project_id,
                    project_code=row.project_code,
                    name=row.name,
                    status=row.status,
                    start_date=row.start_date,
                    costs=costs,
                    billings=billings,
                )
            )
        return tuple(projects)

    def cashflow_categories(self) -> tuple[CashflowCategory, ...]:
        rows = self.session.scalars(
            select(CashflowCategoryModel).order_by(CashflowCategoryModel.account_code)
        ).all()
        result = []
        for row in rows:
            try:
                activity = CashflowActivity(row.category.strip().lower())
            except ValueError:
                raise InvalidRecordError(
                    "cashflow_category", str(row.id),
                    f"unknown cash flow category {row.category!r}",
                ) from None
            result.append(
                CashflowCategory(
                    account_code=row.account_code,
                    category=activity,
                    subcategory=row.subcategory,
                )
            )
        return tuple(result)


def _to_account(row: AccountModel) -> Account:
    try:
        account_type = AccountType.from_label(row.account_type)
    except ValueError as exc:
        raise InvalidRecordError("account", row.code, str(exc)) from None
    return Account(
        code=row.code,
        name=row.name,
        account_type=account_type,
        category=row.category,
        subcategory=row.subcategory,
        is_current=row.is_current,
    )


def _to_transaction(row: TransactionModel) -> Transaction:
    try:
        tx_type = TxType.from_label(row.transaction_type)
    except ValueError as exc:
        raise InvalidRecordError("transaction", str(row.id), str(exc)) from None
    return Transaction(
        id=str(row.id),
        date=row.date,
        tx_type=tx_type,
        account_code=row.account_code,
        amount=row.amount,
        description=row.description or "",
        project_id=row.project_id,
    )
