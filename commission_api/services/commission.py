"""
Tiered commission calculation.

Rules:
- Zero target: all sales paid at the tier 1 rate
- Tier 1: always 70% of target, paid at tier1_rate
- Tier 2: the remaining 30% of target, paid at tier2_rate once
  achievement reaches 71% (inclusive)
- Tier 3: everything sold above target, paid at tier3_rate
- No rule for the category: zero commission

OPEN QUESTION: tier 1 ignores the rule's tier1_from / tier1_to bounds.
The bounds are collected and validated when a rule is saved but never
consulted here. This matches the behaviour the business runs on today;
confirm with the product owner before changing it.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from commission_api.services.records import (
    HUNDRED,
    ZERO,
    CommissionResult,
    CommissionRuleSnapshot,
    Number,
    to_decimal,
)

CENT = Decimal("0.01")

TIER1_SHARE = Decimal("0.7")  # portion of target always paid at tier 1
TIER2_SHARE = Decimal("0.3")  # portion of target paid at tier 2
TIER2_THRESHOLD_PERCENT = Decimal("71")


def round_money(value: Decimal) -> Decimal:
    """Round to 2 decimal places, half away from zero."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def calculate_commission(
    sales: Number,
    target: Number,
    rule: Optional[CommissionRuleSnapshot],
) -> CommissionResult:
    """Calculate the three-tier commission for one sales figure.

    Args:
        sales: Amount actually sold (>= 0, validated upstream)
        target: Goal amount (>= 0, validated upstream)
        rule: Rule for the record's category, or None if none is configured

    Returns:
        CommissionResult with each amount and commission rounded to cents
        independently; the total is rounded from the unrounded tiers.
    """
    if rule is None:
        return CommissionResult()

    sales = to_decimal(sales)
    target = to_decimal(target)
    tier1_rate = to_decimal(rule.tier1_rate)

    tier2_amount = tier2_commission = ZERO
    tier3_amount = tier3_commission = ZERO

    if target == 0:
        # Achievement is undefined; everything sold counts as tier 1
        tier1_amount = sales
        tier1_commission = tier1_amount * tier1_rate
    else:
        achievement = sales / target * HUNDRED

        tier1_amount = target * TIER1_SHARE
        tier1_commission = tier1_amount * tier1_rate

        if achievement >= TIER2_THRESHOLD_PERCENT:
            tier2_amount = target * TIER2_SHARE
            tier2_commission = tier2_amount * to_decimal(rule.tier2_rate)

        if sales > target:
            tier3_amount = sales - target
            tier3_commission = tier3_amount * to_decimal(rule.tier3_rate)

    total = tier1_commission + tier2_commission + tier3_commission

    return CommissionResult(
        tier1_amount=round_money(tier1_amount),
        tier1_commission=round_money(tier1_commission),
        tier2_amount=round_money(tier2_amount),
        tier2_commission=round_money(tier2_commission),
        tier3_amount=round_money(tier3_amount),
        tier3_commission=round_money(tier3_commission),
        total_commission=round_money(total),
    )
