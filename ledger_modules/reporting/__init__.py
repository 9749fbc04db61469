"""
Financial Reporting Module.

Trial balance, itemized balance sheet, cash flow statement and
comparative reports derived from a ledger snapshot.
"""

from ledger_modules.reporting.config import AccountClassification, ReportingConfig
from ledger_modules.reporting.models import (
    BalanceSheetReport,
    CashFlowStatementReport,
    ComparativeBalanceSheetReport,
    ComparativeCashFlowReport,
    ReportMetadata,
    ReportType,
    TrialBalanceReport,
)
from ledger_modules.reporting.service import ReportingService
from ledger_modules.reporting.statements import (
    build_balance_sheet,
    build_cash_flow_statement,
    build_comparative_balance_sheet,
    build_comparative_cash_flow,
    build_trial_balance,
    render_to_dict,
)

__all__ = [
    "AccountClassification",
    "ReportingConfig",
    "BalanceSheetReport",
    "CashFlowStatementReport",
    "ComparativeBalanceSheetReport",
    "ComparativeCashFlowReport",
    "ReportMetadata",
    "ReportType",
    "TrialBalanceReport",
    "ReportingService",
    "build_balance_sheet",
    "build_cash_flow_statement",
    "build_comparative_balance_sheet",
    "build_comparative_cash_flow",
    "build_trial_balance",
    "render_to_dict",
]
