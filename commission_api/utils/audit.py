"""
Audit trail for commission data.

Every change to rules, figures and reference data is written to
``audit_logs`` so that financial reviewers can trace who changed what.
"""

import logging
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from commission_api.models.audit import AuditAction, AuditLog

logger = logging.getLogger(__name__)


async def log_action(
    db: AsyncSession,
    user_id: int,
    action: AuditAction,
    target_type: Optional[str] = None,
    target_id: Optional[int] = None,
    action_metadata: Optional[dict[str, Any]] = None,
    ip_address: Optional[str] = None,
) -> AuditLog:
    """
    Add an audit entry to the current session.

    The entry is committed together with the change it describes, so a
    rolled back request leaves no audit row behind.

    Args:
        db: Database session of the request making the change
        user_id: ID of the user performing the action
        action: Type of action being performed
        target_type: Entity kind ("commission_rule", "sale", "collection", ...)
        target_id: ID of the affected entity
        action_metadata: Submitted values, see ``jsonable_changes``
        ip_address: Client IP address
    """
    log_entry = AuditLog(
        user_id=user_id,
        action=action,
        target_type=target_type,
        target_id=target_id,
        action_metadata=action_metadata,
        ip_address=ip_address,
    )
    db.add(log_entry)

    if target_type:
        logger.debug(f"Audit: user {user_id} {action.value} {target_type} {target_id}")
    return log_entry


def get_client_ip(request: Request) -> Optional[str]:
    """Client IP, taking the first X-Forwarded-For hop behind a proxy."""
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    if request.client:
        return request.client.host

    return None


def jsonable_changes(data: dict[str, Any]) -> dict[str, Any]:
    """
    Make a request payload safe for the JSON metadata column.

    Money and rates stay exact: Decimals are stored as strings.
    """
    def convert(value: Any) -> Any:
        if isinstance(value, Decimal):
            return str(value)
        if isinstance(value, (datetime, date)):
            return value.isoformat()
        if isinstance(value, Enum):
            return value.value
        return value

    return {key: convert(value) for key, value in data.items()}
