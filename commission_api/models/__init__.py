"""
Database models for the commission API.

All models are exported here for convenient imports:
    from commission_api.models import Sale, CommissionRule, etc.
"""

from commission_api.models.audit import AuditAction, AuditLog
from commission_api.models.base import Base, TimestampMixin
from commission_api.models.collection import Collection
from commission_api.models.commission_rule import CommissionRule
from commission_api.models.representative import Company, Representative
from commission_api.models.sale import Sale
from commission_api.models.user import User, UserRole

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    # User
    "User",
    "UserRole",
    # Audit
    "AuditLog",
    "AuditAction",
    # Reference data
    "Representative",
    "Company",
    # Figures
    "Sale",
    "Collection",
    # Rules
    "CommissionRule",
]
