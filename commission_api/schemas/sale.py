"""Sales record schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from commission_api.schemas.common import Money, Month, Year
from commission_api.services.records import SalesRecord, achievement_percentage


class SaleCreate(BaseModel):
    """Record monthly sales against target."""

    representative_id: int = Field(..., gt=0)
    company_id: int = Field(..., gt=0)
    category: str = Field(..., min_length=1, max_length=100)
    sales: Money
    target: Money
    year: Year
    month: Month


class SaleUpdate(SaleCreate):
    """Replace a sales record."""
    pass


class SaleResponse(BaseModel):
    """Sales record with joined names."""

    id: int
    representative_id: int
    representative_name: Optional[str]
    company_id: int
    company_name: Optional[str]
    category: str
    sales: float
    target: float
    achievement_percentage: float
    year: int
    month: int
    created_at: Optional[datetime]

    @classmethod
    def from_record(cls, record: SalesRecord) -> "SaleResponse":
        return cls(
            id=record.id,
            representative_id=record.representative_id,
            representative_name=record.representative_name,
            company_id=record.company_id,
            company_name=record.company_name,
            category=record.category,
            sales=float(record.sales),
            target=float(record.target),
            achievement_percentage=float(
                achievement_percentage(record.sales, record.target)
            ),
            year=record.year,
            month=record.month,
            created_at=record.created_at,
        )
