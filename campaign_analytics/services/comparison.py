"""
Period-over-period views used by the dashboard summary cards and charts.
"""
from datetime import date
from typing import Iterable, List, Optional

from campaign_analytics.models.campaign import (
    CampaignRecord,
    FunnelStage,
    MetricComparison,
    MonthlyAggregate,
)
from campaign_analytics.services.formatting import (
    calculate_growth,
    format_currency,
    format_number,
    format_percentage,
)
from campaign_analytics.utils.helpers import round_to


def _roas_display(value: float, currency: str) -> str:
    return f"{format_number(value, 2)}x"


def _count_display(value: float, currency: str) -> str:
    return format_number(value)


def _currency_display(value: float, currency: str) -> str:
    return format_currency(value, currency)


def _rate_display(value: float, currency: str) -> str:
    return format_percentage(value, 2)


# (aggregate field, title, subtitle, formatter)
SUMMARY_METRICS: List[tuple] = [
    ("reach", "Sessions", "Total unique visitors", _count_display),
    ("conversion_value", "Sales Attributed", "Revenue generated", _currency_display),
    ("purchases", "Orders", "Completed purchases", _count_display),
    ("conversion_rate", "Conversion Rate", "Purchase rate", _rate_display),
    ("impressions", "Impressions", "Ad views", _count_display),
    ("avg_roas", "ROAS", "Return on ad spend", _roas_display),
    ("amount_spent", "Amount Spent", "Total ad spend", _currency_display),
    ("cost_per_purchase", "Cost Per Purchase", "Acquisition cost", _currency_display),
]


def compare_months(
    current: Optional[MonthlyAggregate],
    previous: Optional[MonthlyAggregate],
    currency: str = "CAD",
) -> List[MetricComparison]:
    """Summary metrics for two months with growth; a missing month counts as zeros."""
    current = current or MonthlyAggregate()
    previous = previous or MonthlyAggregate()
    comparisons = []

    for key, title, subtitle, formatter in SUMMARY_METRICS:
        current_value = float(getattr(current, key))
        previous_value = float(getattr(previous, key))
        comparisons.append(MetricComparison(
            key=key,
            title=title,
            subtitle=subtitle,
            current=current_value,
            previous=previous_value,
            growth=round_to(calculate_growth(current_value, previous_value)),
            current_display=formatter(current_value, currency),
            previous_display=formatter(previous_value, currency),
        ))

    return comparisons


def campaign_duration_days(starts: str, ends: str) -> int:
    """Whole days from start to end, at least 1 (bad or reversed dates -> 1)."""
    try:
        start_date = date.fromisoformat(str(starts)[:10])
        end_date = date.fromisoformat(str(ends)[:10])
    except ValueError:
        return 1

    days = (end_date - start_date).days
    return max(1, days)


def conversion_funnel(records: Iterable[CampaignRecord]) -> List[FunnelStage]:
    """Adds-to-cart and purchase totals with their share of the combined total."""
    records = list(records)
    adds_to_cart = sum(record.adds_to_cart for record in records)
    purchases = sum(record.purchases for record in records)
    total = adds_to_cart + purchases
    safe_total = total if total > 0 else 1

    return [
        FunnelStage(name="Adds to Cart", value=adds_to_cart,
                    percentage=round_to(adds_to_cart / safe_total * 100, 1)),
        FunnelStage(name="Purchases", value=purchases,
                    percentage=round_to(purchases / safe_total * 100, 1)),
    ]
