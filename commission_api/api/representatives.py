"""Representative endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from commission_api.auth.dependencies import get_current_user, require_admin
from commission_api.db import get_db
from commission_api.models import AuditAction, Representative, User
from commission_api.schemas.common import ApiResponse, DeletedResponse
from commission_api.schemas.directory import (
    RepresentativeCreate,
    RepresentativeResponse,
    RepresentativeUpdate,
)
from commission_api.utils.audit import get_client_ip, log_action

router = APIRouter(prefix="/representatives", tags=["Representatives"])


async def get_representative_or_404(db: AsyncSession, representative_id: int) -> Representative:
    representative = await db.get(Representative, representative_id)
    if not representative:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Representative not found",
        )
    return representative


@router.get("", response_model=ApiResponse[list[RepresentativeResponse]])
async def list_representatives(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """All representatives, ordered by name."""
    result = await db.execute(select(Representative).order_by(Representative.name))
    return ApiResponse(
        data=[RepresentativeResponse.model_validate(r) for r in result.scalars().all()]
    )


@router.get("/{representative_id}", response_model=ApiResponse[RepresentativeResponse])
async def get_representative(
    representative_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Get a representative."""
    representative = await get_representative_or_404(db, representative_id)
    return ApiResponse(data=RepresentativeResponse.model_validate(representative))


@router.post(
    "",
    response_model=ApiResponse[RepresentativeResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_representative(
    request: Request,
    data: RepresentativeCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """Add a representative."""
    representative = Representative(**data.model_dump())
    db.add(representative)
    await db.flush()
    await db.refresh(representative)

    await log_action(
        db=db,
        user_id=current_user.id,
        action=AuditAction.CREATE,
        target_type="representative",
        target_id=representative.id,
        action_metadata={"name": representative.name},
        ip_address=get_client_ip(request),
    )

    return ApiResponse(data=RepresentativeResponse.model_validate(representative))


@router.put("/{representative_id}", response_model=ApiResponse[RepresentativeResponse])
async def update_representative(
    request: Request,
    representative_id: int,
    data: RepresentativeUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """Update a representative's details."""
    representative = await get_representative_or_404(db, representative_id)

    for field, value in data.model_dump().items():
        setattr(representative, field, value)
    await db.flush()
    await db.refresh(representative)

    await log_action(
        db=db,
        user_id=current_user.id,
        action=AuditAction.UPDATE,
        target_type="representative",
        target_id=representative.id,
        action_metadata=data.model_dump(),
        ip_address=get_client_ip(request),
    )

    return ApiResponse(data=RepresentativeResponse.model_validate(representative))


@router.delete("/{representative_id}", response_model=ApiResponse[DeletedResponse])
async def delete_representative(
    request: Request,
    representative_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """Delete a representative together with their sales and collections."""
    representative = await get_representative_or_404(db, representative_id)
    await db.delete(representative)

    await log_action(
        db=db,
        user_id=current_user.id,
        action=AuditAction.DELETE,
        target_type="representative",
        target_id=representative_id,
        ip_address=get_client_ip(request),
    )

    return ApiResponse(
        data=DeletedResponse(id=representative_id, message="Representative deleted successfully")
    )
