"""
Module: ledger_kernel.models.fixed_asset
Responsibility: ORM persistence for the fixed-asset register.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - book_value = value - accumulated_depreciation (checked when the
      selector builds the ``FixedAsset`` record).
    - useful_life = 0 marks a non-depreciating asset.
"""

from datetime import date
from decimal import Decimal

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from ledger_kernel.db.base import TrackedBase


class FixedAssetModel(TrackedBase):
    """Fixed-asset register entry."""

    __tablename__ = "fixedasset"

    asset_name: Mapped[str] = mapped_column(String(255), nullable=False)
    acquisition_date: Mapped[date]
    value: Mapped[Decimal]

    # Years
    useful_life: Mapped[int] = mapped_column(Integer, nullable=False)

    accumulated_depreciation: Mapped[Decimal] = mapped_column(default=Decimal("0"))
    book_value: Mapped[Decimal]

    def __repr__(self) -> str:
        return f"<FixedAssetModel {self.asset_name}: {self.book_value}>"
