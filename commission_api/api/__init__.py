"""API router aggregation."""

from fastapi import APIRouter

from commission_api.api.auth import router as auth_router
from commission_api.api.collections import router as collections_router
from commission_api.api.commission_rules import router as commission_rules_router
from commission_api.api.commissions import router as commissions_router
from commission_api.api.companies import router as companies_router
from commission_api.api.health import router as health_router
from commission_api.api.reports import router as reports_router
from commission_api.api.representatives import router as representatives_router
from commission_api.api.sales import router as sales_router

# Main API router (for /api/* endpoints)
api_router = APIRouter(prefix="/api")

api_router.include_router(health_router)
api_router.include_router(auth_router)
api_router.include_router(reports_router)
api_router.include_router(commission_rules_router)
api_router.include_router(commissions_router)
api_router.include_router(representatives_router)
api_router.include_router(companies_router)
api_router.include_router(sales_router)
api_router.include_router(collections_router)

__all__ = ["api_router"]
