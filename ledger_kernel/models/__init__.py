"""
SQLAlchemy ORM models for the ledger tables.

Importing this package registers every table on ``Base.metadata``.
"""

from ledger_kernel.models.account import AccountModel, CashflowCategoryModel
from ledger_kernel.models.fixed_asset import FixedAssetModel
from ledger_kernel.models.project import BillingModel, ProjectCostModel, ProjectModel
from ledger_kernel.models.transaction import TransactionModel

__all__ = [
    "AccountModel",
    "BillingModel",
    "CashflowCategoryModel",
    "FixedAssetModel",
    "ProjectCostModel",
    "ProjectModel",
    "TransactionModel",
]
