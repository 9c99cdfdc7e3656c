"""Commission report schemas.

Field names are consumed verbatim by external integrations (including the
Odoo connector) and must not be renamed.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class CommissionBreakdown(BaseModel):
    """Commission per tier for one sales record."""

    tier1: float
    tier2: float
    tier3: float
    total: float


class SaleDetail(BaseModel):
    """Sales record with its commission, as listed under a representative."""

    id: Optional[int] = None
    company_id: int
    company_name: Optional[str] = None
    category: str
    sales: float
    target: float
    achievement_percentage: float
    commission: CommissionBreakdown
    year: int
    month: int
    created_at: Optional[datetime] = None


class RepresentativeSaleDetail(SaleDetail):
    """Sales record in a single-representative report."""

    representative_id: int
    representative_name: Optional[str] = None


class CollectionRecordSummary(BaseModel):
    """Collection row as listed inside a report."""

    id: Optional[int] = None
    amount: float
    year: int
    month: int
    created_at: Optional[datetime] = None


class ReportPeriod(BaseModel):
    """Filters the report was built for (None = not filtered)."""

    year: Optional[int] = None
    month: Optional[int] = None


class ReportSummary(BaseModel):
    """Summed figures for a report."""

    total_sales: float
    total_target: float
    total_collection: float
    total_commission: float
    achievement_percentage: float


class FullReportSummary(ReportSummary):
    """Organization-wide summary."""

    representatives_count: int


class RepresentativeReport(BaseModel):
    """Commission report for a single representative."""

    representative_id: int
    representative_name: Optional[str] = None
    period: ReportPeriod
    summary: ReportSummary
    sales_details: List[RepresentativeSaleDetail]
    collection_records: List[CollectionRecordSummary]


class RepresentativeTotals(BaseModel):
    """Per-representative totals inside the full report."""

    sales: float
    target: float
    collection: float
    commission: float
    achievement_percentage: float


class RepresentativeGroup(BaseModel):
    """One representative's section of the full report."""

    representative_id: int
    representative_name: Optional[str] = None
    sales: List[SaleDetail]
    totals: RepresentativeTotals
    collection_records: List[CollectionRecordSummary]


class FullReport(BaseModel):
    """Commission report across all representatives."""

    period: ReportPeriod
    summary: FullReportSummary
    representatives: List[RepresentativeGroup]
