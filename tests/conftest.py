"""
Pytest configuration and fixtures.
"""

import os

# Settings are read at import time; keep the app off PostgreSQL in tests
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from decimal import Decimal
from typing import Optional

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from commission_api.auth.jwt import create_access_token
from commission_api.auth.passwords import hash_password
from commission_api.db import get_db
from commission_api.main import create_app
from commission_api.models import Base, User, UserRole
from commission_api.services.records import CommissionRuleSnapshot, SalesRecord


# Test database URL (use SQLite for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

TEST_PASSWORD = "secret123"


@pytest_asyncio.fixture
async def db_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(db_engine):
    return async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest_asyncio.fixture
async def db_session(session_factory):
    """Create test database session."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def users(db_session):
    """One active user per role, keyed by role."""
    password_hash = hash_password(TEST_PASSWORD)
    created = {}
    for role in UserRole:
        user = User(
            username=f"{role.value}_user",
            password_hash=password_hash,
            role=role,
            display_name=role.value.replace("_", " ").title(),
            is_active=True,
        )
        db_session.add(user)
        created[role] = user
    await db_session.commit()
    return created


@pytest_asyncio.fixture
async def app(session_factory):
    """Fresh application bound to the test database."""
    app = create_app()

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest_asyncio.fixture
async def client(app):
    """HTTP client against the test app."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
        yield http


def auth_headers(user: User) -> dict:
    """Bearer header for ``user``."""
    return {"Authorization": f"Bearer {create_access_token(user.id, user.role.value)}"}


def make_rule(category: str = "cement", **kwargs) -> CommissionRuleSnapshot:
    defaults = {
        "tier1_from": Decimal("0"),
        "tier1_to": Decimal("70"),
        "tier1_rate": Decimal("0.0025"),
        "tier2_from": Decimal("71"),
        "tier2_to": Decimal("99"),
        "tier2_rate": Decimal("0.003"),
        "tier3_from": Decimal("100"),
        "tier3_rate": Decimal("0.004"),
    }
    defaults.update(kwargs)
    return CommissionRuleSnapshot(category=category, **defaults)


def make_sale(
    representative_id: int = 1,
    sales="0",
    target="0",
    category: str = "cement",
    representative_name: Optional[str] = None,
    **kwargs,
) -> SalesRecord:
    defaults = {
        "company_id": 10,
        "year": 2024,
        "month": 1,
    }
    defaults.update(kwargs)
    return SalesRecord(
        representative_id=representative_id,
        representative_name=representative_name,
        category=category,
        sales=Decimal(str(sales)),
        target=Decimal(str(target)),
        **defaults,
    )


@pytest.fixture
def cement_rule():
    return make_rule("cement")


@pytest.fixture
def concrete_rule():
    return make_rule(
        "concrete",
        tier1_rate=Decimal("0.002"),
        tier2_rate=Decimal("0.0025"),
        tier3_rate=Decimal("0.0035"),
    )
