"""Commission report endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from commission_api.auth.dependencies import require_report_viewer
from commission_api.db import get_db
from commission_api.models import User
from commission_api.schemas.common import YEAR_MAX, YEAR_MIN, ApiResponse
from commission_api.schemas.report import FullReport, RepresentativeReport
from commission_api.services.data_access import SqlAlchemyDataSource
from commission_api.services.reports import ReportService

router = APIRouter(prefix="/reports", tags=["Reports"])


def get_report_service(db: AsyncSession = Depends(get_db)) -> ReportService:
    """Report service bound to this request's database session."""
    return ReportService(SqlAlchemyDataSource(db))


@router.get("", response_model=ApiResponse[FullReport])
async def full_report(
    year: Optional[int] = Query(None, ge=YEAR_MIN, le=YEAR_MAX),
    month: Optional[int] = Query(None, ge=1, le=12),
    service: ReportService = Depends(get_report_service),
    current_user: User = Depends(require_report_viewer),
):
    """Commission report for all representatives."""
    report = await service.full_report(year=year, month=month)
    return ApiResponse(data=report)


@router.get(
    "/representative/{representative_id}",
    response_model=ApiResponse[RepresentativeReport],
)
async def representative_report(
    representative_id: int,
    year: Optional[int] = Query(None, ge=YEAR_MIN, le=YEAR_MAX),
    month: Optional[int] = Query(None, ge=1, le=12),
    service: ReportService = Depends(get_report_service),
    current_user: User = Depends(require_report_viewer),
):
    """
    Commission report for one representative.

    A representative with no sales in the period gets an empty report
    with a null name, not a 404.
    """
    report = await service.representative_report(
        representative_id, year=year, month=month
    )
    return ApiResponse(data=report)
