"""
Tiered commission rule per sales category.
"""

from decimal import Decimal

from sqlalchemy import Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from commission_api.models.base import Base, TimestampMixin


class CommissionRule(Base, TimestampMixin):
    """
    Commission tiers for one category.

    Bounds (``*_from`` / ``*_to``) are percentages of target achieved,
    rates are fractions applied to money amounts (0.0025 = 0.25%).

    NOTE: tier1_from / tier1_to are stored and validated but the
    calculator does not consult them. See services/commission.py.
    """

    __tablename__ = "commission_rules"

    id: Mapped[int] = mapped_column(primary_key=True)
    category: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        index=True,
        nullable=False,
    )
    tier1_from: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False)
    tier1_to: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False)
    tier1_rate: Mapped[Decimal] = mapped_column(Numeric(7, 6), nullable=False)
    tier2_from: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False)
    tier2_to: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False)
    tier2_rate: Mapped[Decimal] = mapped_column(Numeric(7, 6), nullable=False)
    tier3_from: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False)
    tier3_rate: Mapped[Decimal] = mapped_column(Numeric(7, 6), nullable=False)

    def __repr__(self) -> str:
        return f"<CommissionRule(id={self.id}, category='{self.category}')>"
