"""
Reporting Module Service (``ledger_modules.reporting.service``).

Responsibility
--------------
Orchestrates statement generation -- trial balance, balance sheet, cash
flow statement and their comparative forms -- by loading one
``LedgerSnapshot`` per report through ``SnapshotSelector`` and handing
it to the pure functions in ``statements.py``.  This is a **read-only**
service.

Architecture position
---------------------
**Modules layer** -- thin glue.  ``ReportingService`` is the public entry
point for statement generation.  Constructor: ``session`` + ``clock`` +
``config``.

Invariants enforced
-------------------
* Read-only -- nothing is written, nothing is auto-corrected.
* Every report is derived from a single snapshot, read in the caller's
  session at the snapshot isolation level (see
  ``ledger_kernel.db.engine.begin_snapshot_read``).
* All monetary amounts use ``Decimal`` -- NEVER ``float``.

Failure modes
-------------
* ``UnknownAccountError`` / ``MalformedAmountError`` / ``InvalidRecordError``
  from the snapshot abort the report.
* ``ReconciliationDriftError`` when ``strict_reconciliation`` is set and a
  register drifts beyond tolerance.
* ``ValueError`` when a period ends before it starts.

Audit relevance
---------------
Structured log events are emitted for every report with its parameters
and headline figures; drift findings are logged at WARNING by the
reconciliation engine.
"""

from __future__ import annotations

from datetime import date

from sqlalchemy.orm import Session

from ledger_kernel.domain.clock import Clock, SystemClock
from ledger_kernel.logging_config import LogContext, get_logger
from ledger_kernel.selectors.snapshot_selector import SnapshotSelector

from ledger_modules.assets.models import DepreciationRunSummary
from ledger_modules.assets.register import recalculate_register
from ledger_modules.reporting.config import ReportingConfig
from ledger_modules.reporting.models import (
    BalanceSheetReport,
    CashFlowStatementReport,
    ComparativeBalanceSheetReport,
    ComparativeCashFlowReport,
    ReportMetadata,
    ReportType,
    TrialBalanceReport,
)
from ledger_modules.reporting.statements import (
    build_balance_sheet,
    build_cash_flow_statement,
    build_comparative_balance_sheet,
    build_comparative_cash_flow,
    build_trial_balance,
    render_to_dict,
)

logger = get_logger("modules.reporting.service")


class ReportingService:
    """
    Financial statement generation service.

    Contract
    --------
    * Every public method returns a typed report DTO.
    * All methods are **read-only**.

    Guarantees
    ----------
    * No financial logic lives in this class; it loads snapshots and
      delegates to ``statements.py``.
    * Clock is injectable for deterministic testing.
    """

    def __init__(
        self,
        session: Session,
        clock: Clock | None = None,
        config: ReportingConfig | None = None,
    ):
        self._session = session
        self._clock = clock or SystemClock()
        self._config = config or ReportingConfig.with_defaults()
        self._snapshots = SnapshotSelector(session)

        logger.info(
            "reporting_service_initialized",
            extra={
                "entity_name": self._config.entity_name,
                "currency": self._config.currency,
                "drift_tolerance": str(self._config.drift_tolerance),
                "strict_reconciliation": self._config.strict_reconciliation,
            },
        )

    @property
    def config(self) -> ReportingConfig:
        return self._config

    # =========================================================================
    # Internal helpers
    # =========================================================================

    def _build_metadata(
        self,
        report_type: ReportType,
        as_of_date: date,
        period_start: date | None = None,
        comparative_date: date | None = None,
        comparative_period_start: date | None = None,
    ) -> ReportMetadata:
        """Build report metadata with injected clock timestamp."""
        return ReportMetadata(
            report_type=report_type,
            entity_name=self._config.entity_name,
            currency=self._config.currency,
            as_of_date=as_of_date,
            generated_at=self._clock.now().isoformat(),
            period_start=period_start,
            comparative_date=comparative_date,
            comparative_period_start=comparative_period_start,
        )

    @staticmethod
    def _check_period(period_start: date, period_end: date) -> None:
        if period_end < period_start:
            raise ValueError(
                f"period_end {period_end} is before period_start {period_start}"
            )

    # =========================================================================
    # Public API
    # =========================================================================

    def trial_balance(self, as_of_date: date) -> TrialBalanceReport:
        """Per-account activity and natural balances up to ``as_of_date``."""
        with LogContext.bind(
            report_type=ReportType.TRIAL_BALANCE.value, as_of=as_of_date,
        ):
            snapshot = self._snapshots.load(as_of_date)
            metadata = self._build_metadata(ReportType.TRIAL_BALANCE, as_of_date)
            report = build_trial_balance(snapshot, metadata)

            logger.info(
                "trial_balance_generated",
                extra={
                    "line_count": len(report.lines),
                    "is_balanced": report.is_balanced,
                },
            )
        return report

    def balance_sheet(self, as_of_date: date) -> BalanceSheetReport:
        """
        Itemized balance sheet as of ``as_of_date``.

        Reconciliation drift is attached to the report as findings (or
        raised, in strict mode).
        """
        with LogContext.bind(
            report_type=ReportType.BALANCE_SHEET.value, as_of=as_of_date,
        ):
            snapshot = self._snapshots.load(as_of_date)
            metadata = self._build_metadata(ReportType.BALANCE_SHEET, as_of_date)
            report = build_balance_sheet(snapshot, self._config, metadata)

            log = logger.info if report.is_balanced else logger.warning
            log(
                "balance_sheet_generated",
                extra={
                    "total_assets": str(report.total_assets),
                    "total_l_and_e": str(report.total_liabilities_and_equity),
                    "difference": str(report.difference),
                    "is_balanced": report.is_balanced,
                    "finding_count": len(report.findings),
                },
            )
        return report

    def cash_flow(self, period_start: date, period_end: date) -> CashFlowStatementReport:
        """
        Cash flow statement for ``[period_start, period_end]``.

        Raises:
            ValueError: If ``period_end`` is before ``period_start``.
        """
        self._check_period(period_start, period_end)
        with LogContext.bind(
            report_type=ReportType.CASH_FLOW.value,
            as_of=period_end,
            period_start=period_start,
        ):
            snapshot = self._snapshots.load(period_end, period_start=period_start)
            metadata = self._build_metadata(
                ReportType.CASH_FLOW, period_end, period_start=period_start,
            )
            report = build_cash_flow_statement(snapshot, self._config, metadata)

            logger.info(
                "cash_flow_generated",
                extra={
                    "total_operating": str(report.summary.total_operating),
                    "total_investing": str(report.summary.total_investing),
                    "total_financing": str(report.summary.total_financing),
                    "net_cash_flow": str(report.summary.net_cash_flow),
                },
            )
        return report

    def comparative_balance_sheet(
        self,
        as_of_date: date,
        comparative_date: date,
    ) -> ComparativeBalanceSheetReport:
        """Balance sheets at two dates with changes in the headline figures."""
        current = self.balance_sheet(as_of_date)
        previous = self.balance_sheet(comparative_date)
        metadata = self._build_metadata(
            ReportType.COMPARATIVE_BALANCE_SHEET,
            as_of_date,
            comparative_date=comparative_date,
        )
        report = build_comparative_balance_sheet(current, previous, metadata)
        logger.info(
            "comparative_balance_sheet_generated",
            extra={
                "as_of_date": as_of_date.isoformat(),
                "comparative_date": comparative_date.isoformat(),
            },
        )
        return report

    def comparative_cash_flow(
        self,
        period_start: date,
        period_end: date,
        previous_start: date,
        previous_end: date,
    ) -> ComparativeCashFlowReport:
        """Cash flow for two periods with changes in the totals."""
        self._check_period(previous_start, previous_end)
        current = self.cash_flow(period_start, period_end)
        previous = self.cash_flow(previous_start, previous_end)
        metadata = self._build_metadata(
            ReportType.COMPARATIVE_CASH_FLOW,
            period_end,
            period_start=period_start,
            comparative_date=previous_end,
            comparative_period_start=previous_start,
        )
        report = build_comparative_cash_flow(current, previous, metadata)
        logger.info(
            "comparative_cash_flow_generated",
            extra={
                "period_start": period_start.isoformat(),
                "period_end": period_end.isoformat(),
                "previous_start": previous_start.isoformat(),
                "previous_end": previous_end.isoformat(),
            },
        )
        return report

    def depreciation_preview(self, as_of_date: date | None = None) -> DepreciationRunSummary:
        """
        Recompute straight-line depreciation for the register.

        Returns the recomputed records and the assets that would change;
        nothing is written back.  Defaults to the clock's current date.
        """
        as_of = as_of_date or self._clock.today()
        snapshot = self._snapshots.load(as_of)
        return recalculate_register(snapshot.fixed_assets, as_of)

    @staticmethod
    def to_dict(report: object) -> dict:
        """Render any report to JSON-safe primitives."""
        return render_to_dict(report)
