"""
Commission report building.

Two report shapes are produced:
- single representative: every sales row of one representative with its
  commission, plus their collections
- full report: the same figures grouped per representative with
  organization-wide totals

Sums are accumulated in full precision and rounded to cents only when
the response model is built.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence

from commission_api.schemas.report import (
    CollectionRecordSummary,
    CommissionBreakdown,
    FullReport,
    FullReportSummary,
    RepresentativeGroup,
    RepresentativeReport,
    RepresentativeSaleDetail,
    RepresentativeTotals,
    ReportPeriod,
    ReportSummary,
    SaleDetail,
)
from commission_api.services.aggregator import (
    ProcessedSale,
    aggregate_sales,
    index_rules_by_category,
)
from commission_api.services.commission import round_money
from commission_api.services.data_access import CommissionDataSource
from commission_api.services.records import (
    ZERO,
    CollectionRecord,
    CommissionResult,
    CommissionRuleSnapshot,
    RecordFilters,
    SalesRecord,
    achievement_percentage,
    to_decimal,
)

logger = logging.getLogger(__name__)


def money(value: Decimal) -> float:
    """Round an accumulated amount for output."""
    return float(round_money(value))


def commission_breakdown(result: CommissionResult) -> CommissionBreakdown:
    return CommissionBreakdown(
        tier1=float(result.tier1_commission),
        tier2=float(result.tier2_commission),
        tier3=float(result.tier3_commission),
        total=float(result.total_commission),
    )


def sale_detail(item: ProcessedSale) -> SaleDetail:
    record = item.record
    return SaleDetail(
        id=record.id,
        company_id=record.company_id,
        company_name=record.company_name,
        category=record.category,
        sales=float(record.sales),
        target=float(record.target),
        achievement_percentage=float(item.achievement_percentage),
        commission=commission_breakdown(item.commission),
        year=record.year,
        month=record.month,
        created_at=record.created_at,
    )


def representative_sale_detail(item: ProcessedSale) -> RepresentativeSaleDetail:
    return RepresentativeSaleDetail(
        **sale_detail(item).model_dump(),
        representative_id=item.record.representative_id,
        representative_name=item.record.representative_name,
    )


def collection_summary(record: CollectionRecord) -> CollectionRecordSummary:
    return CollectionRecordSummary(
        id=record.id,
        amount=float(record.amount),
        year=record.year,
        month=record.month,
        created_at=record.created_at,
    )


@dataclass
class _Totals:
    """Running full-precision sums."""
    sales: Decimal = ZERO
    target: Decimal = ZERO
    commission: Decimal = ZERO
    collection: Decimal = ZERO

    def add_sale(self, item: ProcessedSale) -> None:
        self.sales += to_decimal(item.record.sales)
        self.target += to_decimal(item.record.target)
        self.commission += item.commission.total_commission

    @property
    def achievement_percentage(self) -> Decimal:
        return achievement_percentage(self.sales, self.target)


@dataclass
class _Group:
    representative_id: int
    representative_name: Optional[str]
    sales: List[ProcessedSale] = field(default_factory=list)
    collections: List[CollectionRecord] = field(default_factory=list)
    totals: _Totals = field(default_factory=_Totals)


def build_representative_report(
    representative_id: int,
    sales_records: Sequence[SalesRecord],
    rules_by_category: Dict[str, CommissionRuleSnapshot],
    collection_records: Iterable[CollectionRecord],
    year: Optional[int] = None,
    month: Optional[int] = None,
) -> RepresentativeReport:
    """Build the single-representative report from already-filtered rows.

    A representative without matching sales gets an empty report with
    ``representative_name`` set to None rather than an error.
    """
    processed = aggregate_sales(sales_records, rules_by_category)
    collections = list(collection_records)

    totals = _Totals()
    for item in processed:
        totals.add_sale(item)
    totals.collection = sum((to_decimal(c.amount) for c in collections), ZERO)

    representative_name = (
        sales_records[0].representative_name if sales_records else None
    )

    return RepresentativeReport(
        representative_id=representative_id,
        representative_name=representative_name,
        period=ReportPeriod(year=year, month=month),
        summary=ReportSummary(
            total_sales=money(totals.sales),
            total_target=money(totals.target),
            total_collection=money(totals.collection),
            total_commission=money(totals.commission),
            achievement_percentage=float(totals.achievement_percentage),
        ),
        sales_details=[representative_sale_detail(item) for item in processed],
        collection_records=[collection_summary(c) for c in collections],
    )


def build_full_report(
    sales_records: Iterable[SalesRecord],
    rules_by_category: Dict[str, CommissionRuleSnapshot],
    collection_records: Iterable[CollectionRecord],
    year: Optional[int] = None,
    month: Optional[int] = None,
) -> FullReport:
    """Build the organization-wide report, grouped per representative.

    Groups appear in the order their first sales record appears; the first
    record seen also sets the group's representative name. Collections of
    representatives without any sales in the period are not reported.
    """
    groups: Dict[int, _Group] = {}
    for item in aggregate_sales(sales_records, rules_by_category):
        record = item.record
        group = groups.get(record.representative_id)
        if group is None:
            group = _Group(
                representative_id=record.representative_id,
                representative_name=record.representative_name,
            )
            groups[record.representative_id] = group
        group.sales.append(item)
        group.totals.add_sale(item)

    collections = list(collection_records)
    for group in groups.values():
        group.collections = [
            c for c in collections if c.representative_id == group.representative_id
        ]
        group.totals.collection = sum((to_decimal(c.amount) for c in group.collections), ZERO)

    overall = _Totals()
    for group in groups.values():
        overall.sales += group.totals.sales
        overall.target += group.totals.target
        overall.collection += group.totals.collection
        overall.commission += group.totals.commission

    return FullReport(
        period=ReportPeriod(year=year, month=month),
        summary=FullReportSummary(
            total_sales=money(overall.sales),
            total_target=money(overall.target),
            total_collection=money(overall.collection),
            total_commission=money(overall.commission),
            achievement_percentage=float(overall.achievement_percentage),
            representatives_count=len(groups),
        ),
        representatives=[
            RepresentativeGroup(
                representative_id=group.representative_id,
                representative_name=group.representative_name,
                sales=[sale_detail(item) for item in group.sales],
                totals=RepresentativeTotals(
                    sales=money(group.totals.sales),
                    target=money(group.totals.target),
                    collection=money(group.totals.collection),
                    commission=money(group.totals.commission),
                    achievement_percentage=float(group.totals.achievement_percentage),
                ),
                collection_records=[collection_summary(c) for c in group.collections],
            )
            for group in groups.values()
        ],
    )


class ReportService:
    """
    Fetches report inputs through a data source and builds the reports.

    Nothing is cached between calls and errors raised by the data source
    propagate unchanged.
    """

    def __init__(self, data_source: CommissionDataSource):
        self.data_source = data_source

    async def representative_report(
        self,
        representative_id: int,
        year: Optional[int] = None,
        month: Optional[int] = None,
    ) -> RepresentativeReport:
        filters = RecordFilters(representative_id=representative_id, year=year, month=month)

        sales = await self.data_source.fetch_sales_records(filters)
        rules = await self.data_source.fetch_all_commission_rules()
        collections = await self.data_source.fetch_collection_records(filters)

        logger.info(
            f"Building report for representative {representative_id} "
            f"({year or 'all'}/{month or 'all'}): {len(sales)} sales, "
            f"{len(collections)} collections"
        )
        return build_representative_report(
            representative_id,
            sales,
            index_rules_by_category(rules),
            collections,
            year=year,
            month=month,
        )

    async def full_report(
        self,
        year: Optional[int] = None,
        month: Optional[int] = None,
    ) -> FullReport:
        filters = RecordFilters(year=year, month=month)

        sales = await self.data_source.fetch_sales_records(filters)
        rules = await self.data_source.fetch_all_commission_rules()
        collections = await self.data_source.fetch_collection_records(filters)

        logger.info(
            f"Building full report ({year or 'all'}/{month or 'all'}): "
            f"{len(sales)} sales, {len(collections)} collections"
        )
        return build_full_report(
            sales,
            index_rules_by_category(rules),
            collections,
            year=year,
            month=month,
        )
