"""
FastAPI dependencies for authentication and role checks.
"""

from typing import Callable, Iterable

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from commission_api.auth.jwt import get_token_from_request, verify_token
from commission_api.db import get_db
from commission_api.models import User, UserRole
from commission_api.models.user import (
    DATA_ENTRY_ROLES,
    REPORT_VIEWER_ROLES,
    RULE_MANAGER_ROLES,
)


async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Get current authenticated user.

    Raises 401 if not authenticated, 403 if the account is disabled.
    """
    token = get_token_from_request(request)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization header with Bearer token is required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = verify_token(token)
    if not payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = await db.get(User, payload["user_id"])

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is disabled",
        )

    return user


def require_roles(roles: Iterable[UserRole], detail: str = "Access denied") -> Callable:
    """
    Build a dependency that lets through only users with one of ``roles``.

    Raises 403 for authenticated users with any other role.
    """
    allowed = frozenset(roles)

    async def dependency(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=detail,
            )
        return current_user

    return dependency


# Create/update/delete commission rules
require_rule_manager = require_roles(
    RULE_MANAGER_ROLES, detail="Only administrators can change commission rules"
)

# Create/update/delete representatives and companies
require_admin = require_roles(
    {UserRole.SUPER_ADMIN, UserRole.ADMIN}, detail="Administrator access required"
)

# Create/update/delete sales and collection figures
require_data_entry = require_roles(DATA_ENTRY_ROLES, detail="Data entry access required")

# Read commission reports
require_report_viewer = require_roles(
    REPORT_VIEWER_ROLES, detail="Report access required"
)
