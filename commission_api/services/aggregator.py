"""
Joins sales records to commission rules and runs the calculator per record.
"""

import logging
from decimal import Decimal
from typing import Dict, Iterable, List, NamedTuple, Optional

from commission_api.services.commission import calculate_commission
from commission_api.services.records import (
    CommissionResult,
    CommissionRuleSnapshot,
    SalesRecord,
    achievement_percentage,
)

logger = logging.getLogger(__name__)


class ProcessedSale(NamedTuple):
    """A sales record with its achievement and commission attached."""
    record: SalesRecord
    achievement_percentage: Decimal
    commission: CommissionResult


def index_rules_by_category(
    rules: Iterable[CommissionRuleSnapshot],
) -> Dict[str, CommissionRuleSnapshot]:
    """Build a category -> rule lookup.

    Categories should be unique. If they are not, the first rule in
    iteration (fetch) order wins and later duplicates are ignored.
    """
    by_category: Dict[str, CommissionRuleSnapshot] = {}
    for rule in rules:
        if rule.category in by_category:
            logger.warning(
                f"Duplicate commission rule for category '{rule.category}' "
                f"(rule id={rule.id}); using the first one"
            )
            continue
        by_category[rule.category] = rule
    return by_category


def process_sale(
    record: SalesRecord,
    rules_by_category: Dict[str, CommissionRuleSnapshot],
) -> ProcessedSale:
    """Resolve the record's rule and compute its commission."""
    rule: Optional[CommissionRuleSnapshot] = rules_by_category.get(record.category)
    if rule is None:
        logger.debug(f"No commission rule for category '{record.category}'")

    return ProcessedSale(
        record=record,
        achievement_percentage=achievement_percentage(record.sales, record.target),
        commission=calculate_commission(record.sales, record.target, rule),
    )


def aggregate_sales(
    records: Iterable[SalesRecord],
    rules_by_category: Dict[str, CommissionRuleSnapshot],
) -> List[ProcessedSale]:
    """Process every record, preserving input order."""
    return [process_sale(record, rules_by_category) for record in records]
