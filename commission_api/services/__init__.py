"""Commission calculation and reporting services."""

from commission_api.services.aggregator import ProcessedSale, aggregate_sales, index_rules_by_category
from commission_api.services.commission import calculate_commission, round_money
from commission_api.services.reports import ReportService, build_full_report, build_representative_report

__all__ = [
    "calculate_commission",
    "round_money",
    "ProcessedSale",
    "aggregate_sales",
    "index_rules_by_category",
    "ReportService",
    "build_representative_report",
    "build_full_report",
]
