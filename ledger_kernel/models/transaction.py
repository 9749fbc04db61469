"""
Module: ledger_kernel.models.transaction
Responsibility: ORM persistence for posted ledger transactions.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - amount is stored unsigned; the signed effect is derived from
      transaction_type and the account type by the account registry.
    - account_code references chartofaccount.code.
"""

from datetime import date
from decimal import Decimal

from sqlalchemy import ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ledger_kernel.db.base import TrackedBase


class TransactionModel(TrackedBase):
    """A single posted transaction against one account."""

    __tablename__ = "transaction"

    __table_args__ = (
        Index("idx_transaction_date", "date"),
        Index("idx_transaction_account", "account_code"),
    )

    date: Mapped[date]

    # Stored label: debit, credit, income, expense, WIP_INCREASE, ...
    transaction_type: Mapped[str] = mapped_column(String(20), nullable=False)

    account_code: Mapped[str] = mapped_column(
        String(50),
        ForeignKey("chartofaccount.code"),
        nullable=False,
    )

    amount: Mapped[Decimal]
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)

    project_id: Mapped[str | None] = mapped_column(String(36), nullable=True)

    def __repr__(self) -> str:
        return (
            f"<TransactionModel {self.date} {self.transaction_type} "
            f"{self.account_code} {self.amount}>"
        )
