"""Commission preview endpoint."""

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from commission_api.auth.dependencies import get_current_user
from commission_api.db import get_db
from commission_api.models import CommissionRule, User
from commission_api.schemas.commission import (
    CommissionCalculateRequest,
    CommissionCalculateResponse,
)
from commission_api.schemas.commission_rule import CommissionRuleResponse
from commission_api.schemas.common import ApiResponse
from commission_api.services.commission import calculate_commission
from commission_api.services.data_access import rule_to_snapshot
from commission_api.services.records import achievement_percentage

router = APIRouter(prefix="/commissions", tags=["Commissions"])


@router.post("/calculate", response_model=ApiResponse[CommissionCalculateResponse])
async def calculate(
    data: CommissionCalculateRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Preview the commission for a sales figure without saving anything.

    Uses the current rule for the category; an unknown category yields a
    zero commission and ``rule: null``.
    """
    result = await db.execute(
        select(CommissionRule)
        .where(CommissionRule.category == data.category)
        .order_by(CommissionRule.created_at, CommissionRule.id)
        .limit(1)
    )
    rule = result.scalar_one_or_none()

    commission = calculate_commission(
        data.sales,
        data.target,
        rule_to_snapshot(rule) if rule else None,
    )

    return ApiResponse(
        data=CommissionCalculateResponse(
            category=data.category,
            sales=float(data.sales),
            target=float(data.target),
            achievement_percentage=float(achievement_percentage(data.sales, data.target)),
            tier1_amount=float(commission.tier1_amount),
            tier1_commission=float(commission.tier1_commission),
            tier2_amount=float(commission.tier2_amount),
            tier2_commission=float(commission.tier2_commission),
            tier3_amount=float(commission.tier3_amount),
            tier3_commission=float(commission.tier3_commission),
            total_commission=float(commission.total_commission),
            rule=CommissionRuleResponse.model_validate(rule) if rule else None,
        )
    )
