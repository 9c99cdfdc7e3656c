"""
Authentication API endpoints.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from commission_api.auth.dependencies import get_current_user
from commission_api.auth.jwt import COOKIE_NAME, create_access_token
from commission_api.auth.passwords import hash_password, needs_rehash, verify_password
from commission_api.config import settings
from commission_api.db import get_db
from commission_api.models import AuditAction, User
from commission_api.models.user import can_manage_rules
from commission_api.schemas.auth import LoginRequest, LoginResponse, ProfileResponse
from commission_api.schemas.common import ApiResponse
from commission_api.utils.audit import get_client_ip, log_action

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login", response_model=LoginResponse)
async def login(
    request: Request,
    response: Response,
    credentials: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Authenticate user.

    Returns the JWT in the body for API clients and also sets it as an
    httpOnly cookie for the dashboard.
    """
    result = await db.execute(
        select(User).where(User.username == credentials.username)
    )
    user = result.scalar_one_or_none()

    if not user or not verify_password(credentials.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is disabled",
        )

    token = create_access_token(user.id, user.role.value)

    response.set_cookie(
        key=COOKIE_NAME,
        value=token,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        max_age=settings.jwt_expire_hours * 3600,
    )

    user.last_active_at = datetime.now(timezone.utc)
    if needs_rehash(user.password_hash):
        user.password_hash = hash_password(credentials.password)

    await log_action(
        db=db,
        user_id=user.id,
        action=AuditAction.LOGIN,
        ip_address=get_client_ip(request),
    )

    return LoginResponse(
        success=True,
        message="Login successful",
        access_token=token,
        role=user.role.value,
    )


@router.post("/logout")
async def logout(
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Clear the auth cookie."""
    await log_action(
        db=db,
        user_id=current_user.id,
        action=AuditAction.LOGOUT,
        ip_address=get_client_ip(request),
    )

    response.delete_cookie(
        key=COOKIE_NAME,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )

    return {"success": True, "message": "Logged out"}


@router.get("/me", response_model=ApiResponse[ProfileResponse])
async def me(current_user: User = Depends(get_current_user)):
    """Current user's profile and capabilities."""
    return ApiResponse(
        data=ProfileResponse(
            id=current_user.id,
            username=current_user.username,
            display_name=current_user.display_name,
            role=current_user.role.value,
            can_manage_rules=can_manage_rules(current_user.role),
            created_at=current_user.created_at,
            last_active_at=current_user.last_active_at,
        )
    )
