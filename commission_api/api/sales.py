"""Sales record endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from commission_api.auth.dependencies import get_current_user, require_data_entry
from commission_api.config import settings
from commission_api.db import get_db
from commission_api.models import AuditAction, Company, Representative, Sale, User
from commission_api.schemas.common import (
    YEAR_MAX,
    YEAR_MIN,
    ApiResponse,
    DeletedResponse,
    PaginatedResponse,
    paginate,
)
from commission_api.schemas.sale import SaleCreate, SaleResponse, SaleUpdate
from commission_api.services.data_access import apply_filters, sale_to_record
from commission_api.services.records import RecordFilters
from commission_api.utils.audit import get_client_ip, jsonable_changes, log_action

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sales", tags=["Sales"])


async def load_sale(db: AsyncSession, sale_id: int) -> Sale:
    """Fetch a sale with representative and company names, or 404."""
    result = await db.execute(
        select(Sale)
        .options(selectinload(Sale.representative), selectinload(Sale.company))
        .where(Sale.id == sale_id)
        .execution_options(populate_existing=True)
    )
    sale = result.scalar_one_or_none()
    if not sale:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Sale not found",
        )
    return sale


async def check_references(db: AsyncSession, representative_id: int, company_id: int) -> None:
    """Reject figures booked against unknown representatives or companies."""
    if not await db.get(Representative, representative_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Representative {representative_id} does not exist",
        )
    if not await db.get(Company, company_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Company {company_id} does not exist",
        )


@router.get("", response_model=PaginatedResponse[SaleResponse])
async def list_sales(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
    representative_id: Optional[int] = Query(None),
    company_id: Optional[int] = Query(None),
    year: Optional[int] = Query(None, ge=YEAR_MIN, le=YEAR_MAX),
    month: Optional[int] = Query(None, ge=1, le=12),
    page: int = Query(1, ge=1),
    per_page: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
):
    """List sales records, newest first."""
    filters = RecordFilters(
        representative_id=representative_id,
        company_id=company_id,
        year=year,
        month=month,
    )
    query = apply_filters(select(Sale), Sale, filters)

    total = await db.scalar(select(func.count()).select_from(query.subquery())) or 0

    query = (
        query.options(selectinload(Sale.representative), selectinload(Sale.company))
        .order_by(Sale.created_at.desc(), Sale.id.desc())
        .offset((page - 1) * per_page)
        .limit(per_page)
    )
    result = await db.execute(query)

    return PaginatedResponse[SaleResponse](
        data=[SaleResponse.from_record(sale_to_record(s)) for s in result.scalars().all()],
        pagination=paginate(total, page, per_page),
    )


@router.get("/{sale_id}", response_model=ApiResponse[SaleResponse])
async def get_sale(
    sale_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Get a sales record."""
    sale = await load_sale(db, sale_id)
    return ApiResponse(data=SaleResponse.from_record(sale_to_record(sale)))


@router.post(
    "",
    response_model=ApiResponse[SaleResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_sale(
    request: Request,
    data: SaleCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_data_entry),
):
    """Record sales against target for a representative and month."""
    await check_references(db, data.representative_id, data.company_id)

    sale = Sale(**data.model_dump())
    db.add(sale)
    await db.flush()

    await log_action(
        db=db,
        user_id=current_user.id,
        action=AuditAction.CREATE,
        target_type="sale",
        target_id=sale.id,
        action_metadata=jsonable_changes(data.model_dump()),
        ip_address=get_client_ip(request),
    )
    logger.info(
        f"Sale {sale.id} recorded for representative {data.representative_id} "
        f"({data.year}-{data.month:02d}) by {current_user.username}"
    )

    sale = await load_sale(db, sale.id)
    return ApiResponse(data=SaleResponse.from_record(sale_to_record(sale)))


@router.put("/{sale_id}", response_model=ApiResponse[SaleResponse])
async def update_sale(
    request: Request,
    sale_id: int,
    data: SaleUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_data_entry),
):
    """Replace a sales record."""
    sale = await load_sale(db, sale_id)
    await check_references(db, data.representative_id, data.company_id)

    for field, value in data.model_dump().items():
        setattr(sale, field, value)
    await db.flush()

    await log_action(
        db=db,
        user_id=current_user.id,
        action=AuditAction.UPDATE,
        target_type="sale",
        target_id=sale.id,
        action_metadata=jsonable_changes(data.model_dump()),
        ip_address=get_client_ip(request),
    )

    sale = await load_sale(db, sale_id)
    return ApiResponse(data=SaleResponse.from_record(sale_to_record(sale)))


@router.delete("/{sale_id}", response_model=ApiResponse[DeletedResponse])
async def delete_sale(
    request: Request,
    sale_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_data_entry),
):
    """Delete a sales record."""
    sale = await load_sale(db, sale_id)
    await db.delete(sale)

    await log_action(
        db=db,
        user_id=current_user.id,
        action=AuditAction.DELETE,
        target_type="sale",
        target_id=sale_id,
        ip_address=get_client_ip(request),
    )

    return ApiResponse(data=DeletedResponse(id=sale_id, message="Sale deleted successfully"))
