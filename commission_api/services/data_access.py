"""
Data access for the commission core.

The report service only depends on the ``CommissionDataSource`` protocol.
``SqlAlchemyDataSource`` is the production implementation; tests pass an
in-memory object with the same three coroutines.
"""

import logging
from typing import List, Protocol

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from commission_api.models import Collection, CommissionRule, Sale
from commission_api.services.records import (
    CollectionRecord,
    CommissionRuleSnapshot,
    RecordFilters,
    SalesRecord,
)

logger = logging.getLogger(__name__)


class CommissionDataSource(Protocol):
    """Everything the report builder needs from storage."""

    async def fetch_sales_records(self, filters: RecordFilters) -> List[SalesRecord]:
        ...

    async def fetch_collection_records(self, filters: RecordFilters) -> List[CollectionRecord]:
        ...

    async def fetch_all_commission_rules(self) -> List[CommissionRuleSnapshot]:
        ...


def sale_to_record(sale: Sale) -> SalesRecord:
    """Convert an ORM sale (with relationships loaded) to a core record."""
    return SalesRecord(
        id=sale.id,
        representative_id=sale.representative_id,
        representative_name=sale.representative.name if sale.representative else None,
        company_id=sale.company_id,
        company_name=sale.company.name if sale.company else None,
        category=sale.category,
        sales=sale.sales,
        target=sale.target,
        year=sale.year,
        month=sale.month,
        created_at=sale.created_at,
    )


def collection_to_record(collection: Collection) -> CollectionRecord:
    """Convert an ORM collection (with relationships loaded) to a core record."""
    return CollectionRecord(
        id=collection.id,
        representative_id=collection.representative_id,
        representative_name=(
            collection.representative.name if collection.representative else None
        ),
        company_id=collection.company_id,
        company_name=collection.company.name if collection.company else None,
        year=collection.year,
        month=collection.month,
        amount=collection.amount,
        created_at=collection.created_at,
    )


def rule_to_snapshot(rule: CommissionRule) -> CommissionRuleSnapshot:
    """Copy the fields the calculator needs out of an ORM rule."""
    return CommissionRuleSnapshot(
        id=rule.id,
        category=rule.category,
        tier1_from=rule.tier1_from,
        tier1_to=rule.tier1_to,
        tier1_rate=rule.tier1_rate,
        tier2_from=rule.tier2_from,
        tier2_to=rule.tier2_to,
        tier2_rate=rule.tier2_rate,
        tier3_from=rule.tier3_from,
        tier3_rate=rule.tier3_rate,
    )


def apply_filters(query, model, filters: RecordFilters):
    """Add equality filters for every field set on ``filters``."""
    if filters.representative_id is not None:
        query = query.where(model.representative_id == filters.representative_id)
    if filters.company_id is not None:
        query = query.where(model.company_id == filters.company_id)
    if filters.year is not None:
        query = query.where(model.year == filters.year)
    if filters.month is not None:
        query = query.where(model.month == filters.month)
    return query


class SqlAlchemyDataSource:
    """CommissionDataSource backed by an async SQLAlchemy session.

    Errors from the database are not caught here; a report either gets
    every row set it needs or fails as a whole.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def fetch_sales_records(self, filters: RecordFilters) -> List[SalesRecord]:
        query = apply_filters(
            select(Sale).options(
                selectinload(Sale.representative),
                selectinload(Sale.company),
            ),
            Sale,
            filters,
        )

        # Full reports list representatives together; within one
        # representative the newest period comes first
        if filters.representative_id is None:
            query = query.order_by(Sale.representative_id)
        query = query.order_by(Sale.year.desc(), Sale.month.desc(), Sale.id)

        result = await self.db.execute(query)
        records = [sale_to_record(sale) for sale in result.scalars().all()]
        logger.debug(f"Fetched {len(records)} sales records for {filters}")
        return records

    async def fetch_collection_records(self, filters: RecordFilters) -> List[CollectionRecord]:
        query = apply_filters(
            select(Collection).options(
                selectinload(Collection.representative),
                selectinload(Collection.company),
            ),
            Collection,
            filters,
        ).order_by(Collection.year.desc(), Collection.month.desc(), Collection.id)

        result = await self.db.execute(query)
        records = [collection_to_record(c) for c in result.scalars().all()]
        logger.debug(f"Fetched {len(records)} collection records for {filters}")
        return records

    async def fetch_all_commission_rules(self) -> List[CommissionRuleSnapshot]:
        result = await self.db.execute(
            select(CommissionRule).order_by(CommissionRule.created_at, CommissionRule.id)
        )
        return [rule_to_snapshot(rule) for rule in result.scalars().all()]
