"""
Plain in-memory records the commission core works on.

The data source turns database rows into these before any calculation
happens, so the calculator, aggregator and report builders never touch
the ORM or a session.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional, Union

ZERO = Decimal("0")
HUNDRED = Decimal("100")

Number = Union[Decimal, int, float, str]


@dataclass(frozen=True)
class RecordFilters:
    """Equality filters for fetching sales and collection rows."""
    representative_id: Optional[int] = None
    company_id: Optional[int] = None
    year: Optional[int] = None
    month: Optional[int] = None


@dataclass(frozen=True)
class CommissionRuleSnapshot:
    """Read-only copy of a commission rule taken for one calculation."""
    category: str
    tier1_from: Decimal
    tier1_to: Decimal
    tier1_rate: Decimal
    tier2_from: Decimal
    tier2_to: Decimal
    tier2_rate: Decimal
    tier3_from: Decimal
    tier3_rate: Decimal
    id: Optional[int] = None


@dataclass(frozen=True)
class SalesRecord:
    """One sales-vs-target row with its joined names (None when unknown)."""
    representative_id: int
    company_id: int
    category: str
    sales: Decimal
    target: Decimal
    year: int
    month: int
    id: Optional[int] = None
    representative_name: Optional[str] = None
    company_name: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class CollectionRecord:
    """Cash collected by a representative from a company in a month."""
    representative_id: int
    company_id: int
    year: int
    month: int
    amount: Decimal
    id: Optional[int] = None
    representative_name: Optional[str] = None
    company_name: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class CommissionResult:
    """Three-tier commission breakdown, every field rounded to cents."""
    tier1_amount: Decimal = ZERO
    tier1_commission: Decimal = ZERO
    tier2_amount: Decimal = ZERO
    tier2_commission: Decimal = ZERO
    tier3_amount: Decimal = ZERO
    tier3_commission: Decimal = ZERO
    total_commission: Decimal = ZERO


def to_decimal(value: Number) -> Decimal:
    """Coerce a numeric input to Decimal without binary float artefacts."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def achievement_percentage(sales: Number, target: Number) -> Decimal:
    """Sales as a percentage of target, 0 when there is no target."""
    sales = to_decimal(sales)
    target = to_decimal(target)
    if target > 0:
        return sales / target * HUNDRED
    return ZERO
