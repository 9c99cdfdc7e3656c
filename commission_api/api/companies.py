"""Company endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from commission_api.auth.dependencies import get_current_user, require_admin
from commission_api.db import get_db
from commission_api.models import AuditAction, Company, User
from commission_api.schemas.common import ApiResponse, DeletedResponse
from commission_api.schemas.directory import (
    CompanyCreate,
    CompanyResponse,
    CompanyUpdate,
)
from commission_api.utils.audit import get_client_ip, log_action

router = APIRouter(prefix="/companies", tags=["Companies"])


async def get_company_or_404(db: AsyncSession, company_id: int) -> Company:
    company = await db.get(Company, company_id)
    if not company:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Company not found",
        )
    return company


@router.get("", response_model=ApiResponse[list[CompanyResponse]])
async def list_companies(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """All companies, ordered by name."""
    result = await db.execute(select(Company).order_by(Company.name))
    return ApiResponse(
        data=[CompanyResponse.model_validate(r) for r in result.scalars().all()]
    )


@router.get("/{company_id}", response_model=ApiResponse[CompanyResponse])
async def get_company(
    company_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Get a company."""
    company = await get_company_or_404(db, company_id)
    return ApiResponse(data=CompanyResponse.model_validate(company))


@router.post(
    "",
    response_model=ApiResponse[CompanyResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_company(
    request: Request,
    data: CompanyCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """Add a company."""
    company = Company(**data.model_dump())
    db.add(company)
    await db.flush()
    await db.refresh(company)

    await log_action(
        db=db,
        user_id=current_user.id,
        action=AuditAction.CREATE,
        target_type="company",
        target_id=company.id,
        action_metadata={"name": company.name},
        ip_address=get_client_ip(request),
    )

    return ApiResponse(data=CompanyResponse.model_validate(company))


@router.put("/{company_id}", response_model=ApiResponse[CompanyResponse])
async def update_company(
    request: Request,
    company_id: int,
    data: CompanyUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """Rename a company."""
    company = await get_company_or_404(db, company_id)

    for field, value in data.model_dump().items():
        setattr(company, field, value)
    await db.flush()
    await db.refresh(company)

    await log_action(
        db=db,
        user_id=current_user.id,
        action=AuditAction.UPDATE,
        target_type="company",
        target_id=company.id,
        action_metadata=data.model_dump(),
        ip_address=get_client_ip(request),
    )

    return ApiResponse(data=CompanyResponse.model_validate(company))


@router.delete("/{company_id}", response_model=ApiResponse[DeletedResponse])
async def delete_company(
    request: Request,
    company_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """Delete a company together with its sales and collections."""
    company = await get_company_or_404(db, company_id)
    await db.delete(company)

    await log_action(
        db=db,
        user_id=current_user.id,
        action=AuditAction.DELETE,
        target_type="company",
        target_id=company_id,
        ip_address=get_client_ip(request),
    )

    return ApiResponse(
        data=DeletedResponse(id=company_id, message="Company deleted successfully")
    )
