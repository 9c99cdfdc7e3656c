"""
Cash collected per representative and company per month.
"""

from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, Integer, Numeric
from sqlalchemy.orm import Mapped, mapped_column, relationship

from commission_api.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from commission_api.models.representative import Company, Representative


class Collection(Base, TimestampMixin):
    """
    Cash actually collected.

    Reported next to commission but never part of the commission formula.
    """

    __tablename__ = "collection_records"
    __table_args__ = (
        Index("ix_collection_records_period", "year", "month"),
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
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    month: Mapped[int] = mapped_column(Integer, nullable=False)
    amount: Mapped[Decimal] = mapped_column(
        Numeric(14, 2),
        nullable=False,
    )

    # Relationships
    representative: Mapped["Representative"] = relationship(
        "Representative",
        back_populates="collections",
    )
    company: Mapped["Company"] = relationship("Company")

    def __repr__(self) -> str:
        return (
            f"<Collection(id={self.id}, representative_id={self.representative_id}, "
            f"amount={self.amount})>"
        )
