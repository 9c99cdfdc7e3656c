"""
Tests for tiered commission calculation.

Covers:
- Zero target and missing rule
- Tier 2 threshold (inclusive at 71%)
- Tier 3 over-achievement
- Per-field rounding
"""

from decimal import Decimal

import pytest

from commission_api.services.commission import calculate_commission, round_money
from commission_api.services.records import CommissionResult

from conftest import make_rule


@pytest.fixture
def rule():
    return make_rule(
        tier1_rate=Decimal("0.0025"),
        tier2_rate=Decimal("0.003"),
        tier3_rate=Decimal("0.004"),
    )


# ── round_money ──────────────────────────────────────────


class TestRoundMoney:
    def test_half_rounds_up(self):
        assert round_money(Decimal("0.125")) == Decimal("0.13")
        assert round_money(Decimal("0.135")) == Decimal("0.14")

    def test_half_rounds_away_from_zero(self):
        assert round_money(Decimal("-0.125")) == Decimal("-0.13")

    def test_two_places(self):
        assert round_money(Decimal("175")) == Decimal("175.00")
        assert str(round_money(Decimal("1.5"))) == "1.50"


# ── calculate_commission ─────────────────────────────────


class TestCalculateCommission:
    def test_no_rule_gives_zero(self):
        result = calculate_commission(Decimal("5000"), Decimal("1000"), None)
        assert result == CommissionResult()
        assert result.total_commission == Decimal("0")

    def test_zero_target_pays_everything_at_tier1(self, rule):
        result = calculate_commission(Decimal("500"), Decimal("0"), rule)
        assert result.tier1_amount == Decimal("500.00")
        assert result.tier1_commission == Decimal("1.25")
        assert result.tier2_amount == 0
        assert result.tier2_commission == 0
        assert result.tier3_amount == 0
        assert result.tier3_commission == 0
        assert result.total_commission == Decimal("1.25")

    def test_zero_target_zero_sales(self, rule):
        result = calculate_commission(0, 0, rule)
        assert result.total_commission == 0

    def test_below_threshold_still_pays_tier1(self, rule):
        # 60% achievement: tier 1 is 70% of target regardless
        result = calculate_commission(Decimal("600"), Decimal("1000"), rule)
        assert result.tier1_amount == Decimal("700.00")
        assert result.tier1_commission == Decimal("1.75")
        assert result.tier2_amount == 0
        assert result.tier2_commission == 0
        assert result.tier3_commission == 0
        assert result.total_commission == Decimal("1.75")

    def test_tier2_threshold_is_inclusive(self, rule):
        result = calculate_commission(Decimal("710"), Decimal("1000"), rule)
        assert result.tier2_amount == Decimal("300.00")
        assert result.tier2_commission == Decimal("0.90")

    def test_just_below_tier2_threshold(self, rule):
        result = calculate_commission(Decimal("709.9"), Decimal("1000"), rule)
        assert result.tier2_amount == 0
        assert result.tier2_commission == 0

    def test_exact_target_has_no_tier3(self, rule):
        result = calculate_commission(Decimal("1000"), Decimal("1000"), rule)
        assert result.tier2_amount == Decimal("300.00")
        assert result.tier3_amount == 0
        assert result.tier3_commission == 0

    def test_over_achievement(self, rule):
        result = calculate_commission(Decimal("1200"), Decimal("1000"), rule)
        assert result.tier1_amount == Decimal("700.00")
        assert result.tier2_amount == Decimal("300.00")
        assert result.tier3_amount == Decimal("200.00")
        assert result.tier3_commission == Decimal("0.80")
        assert result.total_commission == Decimal("3.45")

    def test_end_to_end_scenario(self, rule):
        result = calculate_commission(Decimal("150000"), Decimal("100000"), rule)
        assert result.tier1_amount == Decimal("70000.00")
        assert result.tier1_commission == Decimal("175.00")
        assert result.tier2_amount == Decimal("30000.00")
        assert result.tier2_commission == Decimal("90.00")
        assert result.tier3_amount == Decimal("50000.00")
        assert result.tier3_commission == Decimal("200.00")
        assert result.total_commission == Decimal("465.00")

    def test_tier1_bounds_are_not_consulted(self, rule):
        narrow = make_rule(
            tier1_from=Decimal("50"),
            tier1_to=Decimal("60"),
            tier1_rate=rule.tier1_rate,
            tier2_rate=rule.tier2_rate,
            tier3_rate=rule.tier3_rate,
        )
        sales, target = Decimal("100"), Decimal("1000")
        assert calculate_commission(sales, target, narrow) == calculate_commission(sales, target, rule)
        assert calculate_commission(sales, target, narrow).tier1_amount == Decimal("700.00")

    def test_total_rounded_from_unrounded_tiers(self):
        rule = make_rule(tier1_rate=Decimal("0.0015"), tier2_rate=Decimal("0.0015"))
        result = calculate_commission(Decimal("100"), Decimal("100"), rule)
        # 0.105 and 0.045 round up separately, the total 0.15 does not
        assert result.tier1_commission == Decimal("0.11")
        assert result.tier2_commission == Decimal("0.05")
        assert result.total_commission == Decimal("0.15")

    def test_accepts_int_float_and_str(self, rule):
        expected = calculate_commission(Decimal("150000"), Decimal("100000"), rule)
        assert calculate_commission(150000, 100000, rule) == expected
        assert calculate_commission(150000.0, "100000", rule) == expected

    def test_repeated_calls_are_identical(self, rule):
        first = calculate_commission(Decimal("1234.56"), Decimal("1000"), rule)
        second = calculate_commission(Decimal("1234.56"), Decimal("1000"), rule)
        assert first == second

    def test_total_is_not_negative(self, rule):
        for sales in ("0", "1", "709.9", "710", "1000", "5000"):
            result = calculate_commission(Decimal(sales), Decimal("1000"), rule)
            assert result.total_commission >= 0
