"""
Commission API - Sales Commission Reporting Service

Main FastAPI application with:
- Role-based authentication (super_admin/admin/financial_auditor/data_entry)
- Commission rule management
- Sales and collection records
- Commission reports per representative and organization-wide
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import select

from commission_api import __version__
from commission_api.api import api_router
from commission_api.api.errors import register_exception_handlers
from commission_api.auth.passwords import hash_password
from commission_api.config import settings
from commission_api.db import dispose_engine, get_db_context
from commission_api.models import User, UserRole

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


async def ensure_super_admin() -> None:
    """Create the super admin account on first startup."""
    async with get_db_context() as db:
        result = await db.execute(
            select(User).where(User.role == UserRole.SUPER_ADMIN).limit(1)
        )
        if result.scalar_one_or_none():
            return

        logger.info("Creating super admin account...")
        db.add(
            User(
                username=settings.admin_username,
                password_hash=hash_password(settings.admin_password),
                role=UserRole.SUPER_ADMIN,
                display_name="Administrator",
                is_active=True,
            )
        )
        logger.info(f"Super admin account created: {settings.admin_username}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup:
    - Creates super admin account if not exists
    """
    logger.info("Starting Commission API...")

    await ensure_super_admin()

    logger.info("Commission API started successfully!")

    yield

    # Shutdown
    logger.info("Shutting down Commission API...")
    await dispose_engine()


def create_app() -> FastAPI:
    """Build the FastAPI application."""
    app = FastAPI(
        title="Commission API",
        description="Sales commission calculation and reporting",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # /api/* endpoints
    app.include_router(api_router)

    @app.get("/", include_in_schema=False)
    async def root():
        """Service name, version and where to find the endpoints."""
        return {
            "service": "commission-api",
            "version": __version__,
            "api": "/api",
            "health": "/api/health",
        }

    return app


# Create FastAPI application
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "commission_api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=not settings.is_production,
    )
