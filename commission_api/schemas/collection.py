"""Collection record schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from commission_api.schemas.common import Money, Month, Year
from commission_api.services.records import CollectionRecord


class CollectionCreate(BaseModel):
    """Record cash collected."""

    representative_id: int = Field(..., gt=0)
    company_id: int = Field(..., gt=0)
    year: Year
    month: Month
    amount: Money


class CollectionUpdate(CollectionCreate):
    """Replace a collection record."""
    pass


class CollectionResponse(BaseModel):
    """Collection record with joined names."""

    id: int
    representative_id: int
    representative_name: Optional[str]
    company_id: int
    company_name: Optional[str]
    year: int
    month: int
    amount: float
    created_at: Optional[datetime]

    @classmethod
    def from_record(cls, record: CollectionRecord) -> "CollectionResponse":
        return cls(
            id=record.id,
            representative_id=record.representative_id,
            representative_name=record.representative_name,
            company_id=record.company_id,
            company_name=record.company_name,
            year=record.year,
            month=record.month,
            amount=float(record.amount),
            created_at=record.created_at,
        )
