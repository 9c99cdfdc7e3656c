"""
User model for authentication and role management.
"""

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Boolean, DateTime, String
from sqlalchemy import Enum as SQLAlchemyEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from commission_api.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from commission_api.models.audit import AuditLog


class UserRole(str, Enum):
    """User roles for access control."""
    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    FINANCIAL_AUDITOR = "financial_auditor"
    DATA_ENTRY = "data_entry"


# Roles allowed to create, edit and delete commission rules
RULE_MANAGER_ROLES = frozenset({UserRole.SUPER_ADMIN, UserRole.ADMIN})

# Roles allowed to enter sales and collection figures
DATA_ENTRY_ROLES = frozenset({UserRole.SUPER_ADMIN, UserRole.ADMIN, UserRole.DATA_ENTRY})

# Roles allowed to read commission reports
REPORT_VIEWER_ROLES = frozenset(
    {UserRole.SUPER_ADMIN, UserRole.ADMIN, UserRole.FINANCIAL_AUDITOR}
)


def can_manage_rules(role: UserRole) -> bool:
    """Whether a user with this role may mutate commission rules."""
    return role in RULE_MANAGER_ROLES


class User(Base, TimestampMixin):
    """
    User account model.

    - super_admin / admin: full access, including commission rules
    - financial_auditor: read-only access to data and reports
    - data_entry: records sales and collections, no reports
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    username: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        index=True,
        nullable=False,
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    role: Mapped[UserRole] = mapped_column(
        SQLAlchemyEnum(
            UserRole,
            values_callable=lambda x: [e.value for e in x],
        ),
        nullable=False,
    )
    display_name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )
    last_active_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    # Relationships
    audit_logs: Mapped[List["AuditLog"]] = relationship(
        "AuditLog",
        back_populates="user",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}', role={self.role})>"
