"""
Monthly sales-versus-target figures per representative and company.
"""

from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from commission_api.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from commission_api.models.representative import Company, Representative


class Sale(Base, TimestampMixin):
    """
    One sales row: what a representative sold to a company in a category
    for a given month, next to the target set for it.

    Commission is never stored here; it is recomputed from the current
    commission rules every time a report is built.
    """

    __tablename__ = "sales_records"
    __table_args__ = (
        Index("ix_sales_records_period", "year", "month"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    representative_id: Mapped[int] = mapped_column(
        ForeignKey("representatives.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    company_id: Mapped[int] = mapped_column(
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    category: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        index=True,
        comment="Join key against commission_rules.category",
    )
    sales: Mapped[Decimal] = mapped_column(
        Numeric(14, 2),
        nullable=False,
    )
    target: Mapped[Decimal] = mapped_column(
        Numeric(14, 2),
        nullable=False,
    )
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    month: Mapped[int] = mapped_column(Integer, nullable=False)

    # Relationships
    representative: Mapped["Representative"] = relationship(
        "Representative",
        back_populates="sales",
    )
    company: Mapped["Company"] = relationship("Company")

    def __repr__(self) -> str:
        return (
            f"<Sale(id={self.id}, representative_id={self.representative_id}, "
            f"{self.year}-{self.month:02d}, sales={self.sales}, target={self.target})>"
        )
