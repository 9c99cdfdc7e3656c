"""
Sales representatives and the companies they sell to.
"""

from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from commission_api.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from commission_api.models.collection import Collection
    from commission_api.models.sale import Sale


class Representative(Base, TimestampMixin):
    """A sales representative earning commission."""

    __tablename__ = "representatives"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        index=True,
    )
    email: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )
    phone: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
    )

    # Relationships
    sales: Mapped[List["Sale"]] = relationship(
        "Sale",
        back_populates="representative",
        cascade="all, delete-orphan",
    )
    collections: Mapped[List["Collection"]] = relationship(
        "Collection",
        back_populates="representative",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Representative(id={self.id}, name='{self.name}')>"


class Company(Base, TimestampMixin):
    """A customer company that sales and collections are booked against."""

    __tablename__ = "companies"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Company(id={self.id}, name='{self.name}')>"
