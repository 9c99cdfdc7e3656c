"""Commission preview schemas."""

from typing import Optional

from pydantic import BaseModel, Field

from commission_api.schemas.commission_rule import CommissionRuleResponse
from commission_api.schemas.common import Money


class CommissionCalculateRequest(BaseModel):
    """Figures to preview a commission for."""

    category: str = Field(..., min_length=1, max_length=100)
    sales: Money
    target: Money


class CommissionCalculateResponse(BaseModel):
    """Full three-tier breakdown for a preview."""

    category: str
    sales: float
    target: float
    achievement_percentage: float
    tier1_amount: float
    tier1_commission: float
    tier2_amount: float
    tier2_commission: float
    tier3_amount: float
    tier3_commission: float
    total_commission: float
    rule: Optional[CommissionRuleResponse] = None
