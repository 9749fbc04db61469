"""
Module: ledger_kernel.models.account
Responsibility: ORM persistence for the chart of accounts and the explicit
    cash flow category lookup.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - code is unique.
    - account_type holds the stored label (possibly localized, e.g.
      "Aset Tetap"); it is mapped to ``AccountType`` by the snapshot
      selector, not here.
"""

from sqlalchemy import Boolean, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from ledger_kernel.db.base import TrackedBase


class AccountModel(TrackedBase):
    """Chart of accounts entry."""

    __tablename__ = "chartofaccount"

    __table_args__ = (
        UniqueConstraint("code", name="uq_chartofaccount_code"),
        Index("idx_chartofaccount_type", "account_type"),
    )

    code: Mapped[str] = mapped_column(String(50), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    # Stored type label
    account_type: Mapped[str] = mapped_column(String(50), nullable=False)

    category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    subcategory: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # Null = unspecified (treated as current)
    is_current: Mapped[bool | None] = mapped_column(Boolean, nullable=True)

    def __repr__(self) -> str:
        return f"<AccountModel {self.code}: {self.name}>"


class CashflowCategoryModel(TrackedBase):
    """Explicit cash flow activity for an account code."""

    __tablename__ = "cashflow_category"

    __table_args__ = (
        UniqueConstraint("account_code", name="uq_cashflow_category_account"),
    )

    account_code: Mapped[str] = mapped_column(String(50), nullable=False)

    # operating | investing | financing
    category: Mapped[str] = mapped_column(String(20), nullable=False)

    subcategory: Mapped[str | None] = mapped_column(String(100), nullable=True)

    def __repr__(self) -> str:
        return f"<CashflowCategoryModel {self.account_code}: {self.category}>"
