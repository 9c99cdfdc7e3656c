"""
Health check endpoints for the load balancer and container runtime.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from commission_api import __version__
from commission_api.db import get_db
from commission_api.models import CommissionRule

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
async def health_check():
    """The process is up; no dependencies are checked."""
    return {"status": "healthy", "service": "commission-api", "version": __version__}


@router.get("/ready")
async def readiness_check(db: AsyncSession = Depends(get_db)):
    """
    Ready to serve reports.

    Checks the database and reports how many commission rules exist;
    with none configured every report shows zero commission.
    """
    try:
        rules = await db.scalar(select(func.count(CommissionRule.id)))
    except SQLAlchemyError as e:
        logger.warning(f"Readiness check failed: {e}")
        return {
            "status": "not_ready",
            "database": f"error: {e}",
        }

    return {
        "status": "ready",
        "database": "connected",
        "commission_rules": rules or 0,
    }


@router.get("/live")
async def liveness_check():
    """Liveness probe; a failure here means the container should restart."""
    return {"status": "alive"}
