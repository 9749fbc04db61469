"""
Module: ledger_kernel.models.project
Responsibility: ORM persistence for projects and their costs and billings.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - Cost and billing amounts are stored unsigned.
    - WIP is never stored; it is derived from costs and billings.
"""

from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy import ForeignKey, Index, Numeric, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ledger_kernel.db.base import TrackedBase, UUIDString


class ProjectModel(TrackedBase):
    """A client project."""

    __tablename__ = "project"

    __table_args__ = (
        UniqueConstraint("project_code", name="uq_project_code"),
    )

    project_code: Mapped[str] = mapped_column(String(50), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="ongoing", nullable=False)
    start_date: Mapped[date | None]
    total_value: Mapped[Decimal | None]

    costs: Mapped[list["ProjectCostModel"]] = relationship(
        back_populates="project",
        cascade="all, delete-orphan",
    )
    billings: Mapped[list["BillingModel"]] = relationship(
        back_populates="project",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<ProjectModel {self.project_code}: {self.name}>"


class ProjectCostModel(TrackedBase):
    """A cost incurred on a project."""

    __tablename__ = "projectcost"

    __table_args__ = (
        Index("idx_projectcost_project", "project_id"),
    )

    project_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("project.id"),
        nullable=False,
    )
    amount: Mapped[Decimal]
    date: Mapped[date]
    status: Mapped[str] = mapped_column(String(20), default="pending", nullable=False)
    category: Mapped[str] = mapped_column(String(100), default="", nullable=False)
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)

    project: Mapped[ProjectModel] = relationship(back_populates="costs")


class BillingModel(TrackedBase):
    """An amount billed to the project's client."""

    __tablename__ = "billing"

    __table_args__ = (
        Index("idx_billing_project", "project_id"),
    )

    project_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("project.id"),
        nullable=False,
    )
    amount: Mapped[Decimal]
    date: Mapped[date]
    status: Mapped[str] = mapped_column(String(20), default="unpaid", nullable=False)
    percentage: Mapped[Decimal | None] = mapped_column(Numeric(5, 2), nullable=True)

    project: Mapped[ProjectModel] = relationship(back_populates="billings")
