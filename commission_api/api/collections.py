"""Collection record endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from commission_api.api.sales import check_references
from commission_api.auth.dependencies import get_current_user, require_data_entry
from commission_api.config import settings
from commission_api.db import get_db
from commission_api.models import AuditAction, Collection, User
from commission_api.schemas.collection import (
    CollectionCreate,
    CollectionResponse,
    CollectionUpdate,
)
from commission_api.schemas.common import (
    YEAR_MAX,
    YEAR_MIN,
    ApiResponse,
    DeletedResponse,
    PaginatedResponse,
    paginate,
)
from commission_api.services.data_access import apply_filters, collection_to_record
from commission_api.services.records import RecordFilters
from commission_api.utils.audit import get_client_ip, jsonable_changes, log_action

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/collections", tags=["Collections"])


async def load_collection(db: AsyncSession, collection_id: int) -> Collection:
    """Fetch a collection with representative and company names, or 404."""
    result = await db.execute(
        select(Collection)
        .options(selectinload(Collection.representative), selectinload(Collection.company))
        .where(Collection.id == collection_id)
        .execution_options(populate_existing=True)
    )
    collection = result.scalar_one_or_none()
    if not collection:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Collection record not found",
        )
    return collection


@router.get("", response_model=PaginatedResponse[CollectionResponse])
async def list_collections(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
    representative_id: Optional[int] = Query(None),
    company_id: Optional[int] = Query(None),
    year: Optional[int] = Query(None, ge=YEAR_MIN, le=YEAR_MAX),
    month: Optional[int] = Query(None, ge=1, le=12),
    page: int = Query(1, ge=1),
    per_page: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
):
    """List collection records, newest first."""
    filters = RecordFilters(
        representative_id=representative_id,
        company_id=company_id,
        year=year,
        month=month,
    )
    query = apply_filters(select(Collection), Collection, filters)

    total = await db.scalar(select(func.count()).select_from(query.subquery())) or 0

    query = (
        query.options(selectinload(Collection.representative), selectinload(Collection.company))
        .order_by(Collection.created_at.desc(), Collection.id.desc())
        .offset((page - 1) * per_page)
        .limit(per_page)
    )
    result = await db.execute(query)

    return PaginatedResponse[CollectionResponse](
        data=[
            CollectionResponse.from_record(collection_to_record(c))
            for c in result.scalars().all()
        ],
        pagination=paginate(total, page, per_page),
    )


@router.get("/{collection_id}", response_model=ApiResponse[CollectionResponse])
async def get_collection(
    collection_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Get a collection record."""
    collection = await load_collection(db, collection_id)
    return ApiResponse(data=CollectionResponse.from_record(collection_to_record(collection)))


@router.post(
    "",
    response_model=ApiResponse[CollectionResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_collection(
    request: Request,
    data: CollectionCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_data_entry),
):
    """Record cash collected."""
    await check_references(db, data.representative_id, data.company_id)

    collection = Collection(**data.model_dump())
    db.add(collection)
    await db.flush()

    await log_action(
        db=db,
        user_id=current_user.id,
        action=AuditAction.CREATE,
        target_type="collection",
        target_id=collection.id,
        action_metadata=jsonable_changes(data.model_dump()),
        ip_address=get_client_ip(request),
    )
    logger.info(
        f"Collection {collection.id} of {data.amount} recorded for representative "
        f"{data.representative_id} by {current_user.username}"
    )

    collection = await load_collection(db, collection.id)
    return ApiResponse(data=CollectionResponse.from_record(collection_to_record(collection)))


@router.put("/{collection_id}", response_model=ApiResponse[CollectionResponse])
async def update_collection(
    request: Request,
    collection_id: int,
    data: CollectionUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_data_entry),
):
    """Replace a collection record."""
    collection = await load_collection(db, collection_id)
    await check_references(db, data.representative_id, data.company_id)

    for field, value in data.model_dump().items():
        setattr(collection, field, value)
    await db.flush()

    await log_action(
        db=db,
        user_id=current_user.id,
        action=AuditAction.UPDATE,
        target_type="collection",
        target_id=collection.id,
        action_metadata=jsonable_changes(data.model_dump()),
        ip_address=get_client_ip(request),
    )

    collection = await load_collection(db, collection_id)
    return ApiResponse(data=CollectionResponse.from_record(collection_to_record(collection)))


@router.delete("/{collection_id}", response_model=ApiResponse[DeletedResponse])
async def delete_collection(
    request: Request,
    collection_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_data_entry),
):
    """Delete a collection record."""
    collection = await load_collection(db, collection_id)
    await db.delete(collection)

    await log_action(
        db=db,
        user_id=current_user.id,
        action=AuditAction.DELETE,
        target_type="collection",
        target_id=collection_id,
        ip_address=get_client_ip(request),
    )

    return ApiResponse(
        data=DeletedResponse(id=collection_id, message="Collection record deleted successfully")
    )
