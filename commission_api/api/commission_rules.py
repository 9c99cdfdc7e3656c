"""Commission rule management endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from commission_api.auth.dependencies import get_current_user, require_rule_manager
from commission_api.db import get_db
from commission_api.models import AuditAction, CommissionRule, User
from commission_api.schemas.commission_rule import (
    CommissionRuleCreate,
    CommissionRuleResponse,
    CommissionRuleUpdate,
)
from commission_api.schemas.common import ApiResponse, DeletedResponse
from commission_api.utils.audit import get_client_ip, jsonable_changes, log_action

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/commission-rules", tags=["Commission Rules"])


async def get_rule_or_404(db: AsyncSession, rule_id: int) -> CommissionRule:
    rule = await db.get(CommissionRule, rule_id)
    if not rule:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Commission rule not found",
        )
    return rule


async def ensure_category_free(
    db: AsyncSession,
    category: str,
    exclude_id: Optional[int] = None,
) -> None:
    query = select(CommissionRule.id).where(CommissionRule.category == category)
    if exclude_id is not None:
        query = query.where(CommissionRule.id != exclude_id)
    if await db.scalar(query):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"A commission rule for category '{category}' already exists",
        )


@router.get("", response_model=ApiResponse[list[CommissionRuleResponse]])
async def list_rules(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """All commission rules, ordered by category."""
    result = await db.execute(select(CommissionRule).order_by(CommissionRule.category))
    rules = result.scalars().all()
    return ApiResponse(data=[CommissionRuleResponse.model_validate(r) for r in rules])


@router.get("/{rule_id}", response_model=ApiResponse[CommissionRuleResponse])
async def get_rule(
    rule_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Get a commission rule."""
    rule = await get_rule_or_404(db, rule_id)
    return ApiResponse(data=CommissionRuleResponse.model_validate(rule))


@router.post(
    "",
    response_model=ApiResponse[CommissionRuleResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_rule(
    request: Request,
    data: CommissionRuleCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_rule_manager),
):
    """Create a commission rule for a category."""
    await ensure_category_free(db, data.category)

    rule = CommissionRule(**data.model_dump())
    db.add(rule)
    await db.flush()
    await db.refresh(rule)

    await log_action(
        db=db,
        user_id=current_user.id,
        action=AuditAction.CREATE,
        target_type="commission_rule",
        target_id=rule.id,
        action_metadata=jsonable_changes(data.model_dump()),
        ip_address=get_client_ip(request),
    )
    logger.info(f"Commission rule {rule.id} ('{rule.category}') created by {current_user.username}")

    return ApiResponse(data=CommissionRuleResponse.model_validate(rule))


@router.put("/{rule_id}", response_model=ApiResponse[CommissionRuleResponse])
async def update_rule(
    request: Request,
    rule_id: int,
    data: CommissionRuleUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_rule_manager),
):
    """Replace a commission rule's category and tiers."""
    rule = await get_rule_or_404(db, rule_id)
    await ensure_category_free(db, data.category, exclude_id=rule.id)

    for field, value in data.model_dump().items():
        setattr(rule, field, value)
    await db.flush()
    await db.refresh(rule)

    await log_action(
        db=db,
        user_id=current_user.id,
        action=AuditAction.UPDATE,
        target_type="commission_rule",
        target_id=rule.id,
        action_metadata=jsonable_changes(data.model_dump()),
        ip_address=get_client_ip(request),
    )
    logger.info(f"Commission rule {rule.id} updated by {current_user.username}")

    return ApiResponse(data=CommissionRuleResponse.model_validate(rule))


@router.delete("/{rule_id}", response_model=ApiResponse[DeletedResponse])
async def delete_rule(
    request: Request,
    rule_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_rule_manager),
):
    """
    Delete a commission rule.

    Sales in this category will report zero commission until a new
    rule is created.
    """
    rule = await get_rule_or_404(db, rule_id)
    category = rule.category

    await db.delete(rule)

    await log_action(
        db=db,
        user_id=current_user.id,
        action=AuditAction.DELETE,
        target_type="commission_rule",
        target_id=rule_id,
        action_metadata={"category": category},
        ip_address=get_client_ip(request),
    )
    logger.info(f"Commission rule {rule_id} ('{category}') deleted by {current_user.username}")

    return ApiResponse(
        data=DeletedResponse(id=rule_id, message="Commission rule deleted successfully")
    )
