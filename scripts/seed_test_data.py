"""
Seed test data for commission reporting.

Usage:
    python scripts/seed_test_data.py

Or with custom DATABASE_URL:
    DATABASE_URL="postgresql://..." python scripts/seed_test_data.py

This script creates:
- Representatives and companies
- Commission rules for the cement and concrete categories
- Sales and collection figures for the current year
- Test data entry and auditor users (if not exist)
"""

import asyncio
import os
import sys
from datetime import datetime, timezone
from decimal import Decimal

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from commission_api.auth.passwords import hash_password
from commission_api.db import get_db_context
from commission_api.models import (
    Collection,
    CommissionRule,
    Company,
    Representative,
    Sale,
    User,
    UserRole,
)


# ===== TEST DATA =====

TEST_REPRESENTATIVES = [
    {"name": "Ahmed Saleh", "email": "ahmed@example.com", "phone": "+966 50 111 2233"},
    {"name": "Omar Khalid", "email": "omar@example.com", "phone": "+966 50 444 5566"},
    {"name": "Sara Nasser", "email": None, "phone": None},
]

TEST_COMPANIES = ["Al Bina Contracting", "Gulf Ready Mix", "Northern Builders"]

TEST_RULES = [
    {
        "category": "اسمنتي",
        "tier1_from": 50, "tier1_to": 70, "tier1_rate": "0.0025",
        "tier2_from": 71, "tier2_to": 99, "tier2_rate": "0.003",
        "tier3_from": 100, "tier3_rate": "0.004",
    },
    {
        "category": "خرسانة",
        "tier1_from": 0, "tier1_to": 60, "tier1_rate": "0.002",
        "tier2_from": 61, "tier2_to": 99, "tier2_rate": "0.0025",
        "tier3_from": 100, "tier3_rate": "0.0035",
    },
]

# (representative index, company index, category, sales, target, collected)
TEST_FIGURES = [
    (0, 0, "اسمنتي", 200000, 150000, 180000),
    (0, 1, "خرسانة", 90000, 100000, 85000),
    (1, 1, "اسمنتي", 60000, 100000, 40000),
    (1, 2, "خرسانة", 75000, 0, 75000),
    (2, 2, "اسمنتي", 120000, 120000, 100000),
]

TEST_USERS = [
    ("test_data_entry", "test123", UserRole.DATA_ENTRY, "Data Entry"),
    ("test_auditor", "test123", UserRole.FINANCIAL_AUDITOR, "Financial Auditor"),
]


async def create_test_users(db: AsyncSession) -> None:
    """Create non-admin accounts for trying out role checks."""
    for username, password, role, display_name in TEST_USERS:
        result = await db.execute(select(User).where(User.username == username))
        if result.scalar_one_or_none():
            print(f"User exists: {username}")
            continue

        db.add(
            User(
                username=username,
                password_hash=hash_password(password),
                role=role,
                display_name=display_name,
                is_active=True,
            )
        )
        print(f"Created user: {username} / {password} ({role.value})")


async def create_rules(db: AsyncSession) -> None:
    """Create commission rules that do not exist yet."""
    for data in TEST_RULES:
        result = await db.execute(
            select(CommissionRule).where(CommissionRule.category == data["category"])
        )
        if result.scalar_one_or_none():
            print(f"Rule exists: {data['category']}")
            continue

        db.add(CommissionRule(**{
            key: Decimal(str(value)) if key != "category" else value
            for key, value in data.items()
        }))
        print(f"Created rule: {data['category']}")


async def seed() -> None:
    now = datetime.now(timezone.utc)

    async with get_db_context() as db:
        await create_test_users(db)
        await create_rules(db)

        representatives = [Representative(**data) for data in TEST_REPRESENTATIVES]
        companies = [Company(name=name) for name in TEST_COMPANIES]
        db.add_all(representatives + companies)
        await db.flush()
        print(f"Created {len(representatives)} representatives, {len(companies)} companies")

        for rep_index, company_index, category, sales, target, collected in TEST_FIGURES:
            representative = representatives[rep_index]
            company = companies[company_index]

            db.add(Sale(
                representative_id=representative.id,
                company_id=company.id,
                category=category,
                sales=Decimal(sales),
                target=Decimal(target),
                year=now.year,
                month=now.month,
            ))
            db.add(Collection(
                representative_id=representative.id,
                company_id=company.id,
                amount=Decimal(collected),
                year=now.year,
                month=now.month,
            ))

        print(f"Created {len(TEST_FIGURES)} sales and collection records for {now.year}-{now.month:02d}")

    print("\nDone! Open /api/reports to see the commission report.")


if __name__ == "__main__":
    asyncio.run(seed())
