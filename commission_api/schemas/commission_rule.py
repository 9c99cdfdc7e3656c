"""Commission rule schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Optional

from pydantic import BaseModel, Field, field_serializer, model_validator

# Precision matches the Numeric(5, 2) and Numeric(7, 6) rule columns
Percent = Annotated[Decimal, Field(ge=0, le=100, max_digits=5, decimal_places=2)]
Rate = Annotated[Decimal, Field(gt=0, le=1, max_digits=7, decimal_places=6)]


class CommissionRuleBase(BaseModel):
    """Tier bounds are percentages of target, rates are fractions of amounts."""

    category: str = Field(..., min_length=1, max_length=100)
    tier1_from: Percent
    tier1_to: Percent
    tier1_rate: Rate
    tier2_from: Percent
    tier2_to: Percent
    tier2_rate: Rate
    tier3_from: Percent
    tier3_rate: Rate

    @model_validator(mode="after")
    def check_tier_order(self):
        """Tiers must not overlap."""
        if self.tier1_from > self.tier1_to:
            raise ValueError("tier1_from must not exceed tier1_to")
        if self.tier1_to >= self.tier2_from:
            raise ValueError("tier1_to must be lower than tier2_from")
        if self.tier2_from > self.tier2_to:
            raise ValueError("tier2_from must not exceed tier2_to")
        if self.tier2_to >= self.tier3_from:
            raise ValueError("tier2_to must be lower than tier3_from")
        return self


class CommissionRuleCreate(CommissionRuleBase):
    """Create a commission rule."""
    pass


class CommissionRuleUpdate(CommissionRuleBase):
    """Replace a commission rule."""
    pass


class CommissionRuleResponse(BaseModel):
    """Commission rule as returned by the API."""

    id: int
    category: str
    tier1_from: Decimal
    tier1_to: Decimal
    tier1_rate: Decimal
    tier2_from: Decimal
    tier2_to: Decimal
    tier2_rate: Decimal
    tier3_from: Decimal
    tier3_rate: Decimal
    created_at: datetime
    updated_at: Optional[datetime]

    model_config = {"from_attributes": True}

    @field_serializer(
        "tier1_from", "tier1_to", "tier1_rate",
        "tier2_from", "tier2_to", "tier2_rate",
        "tier3_from", "tier3_rate",
    )
    def serialize_number(self, value: Decimal) -> float:
        return float(value)
