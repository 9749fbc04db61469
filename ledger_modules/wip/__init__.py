"""WIP valuation: project costs minus billings."""

from ledger_modules.wip.models import ProjectWip, WipSummary
from ledger_modules.wip.valuation import project_wip, summarize_wip, wip

__all__ = [
    "ProjectWip",
    "WipSummary",
    "project_wip",
    "summarize_wip",
    "wip",
]
