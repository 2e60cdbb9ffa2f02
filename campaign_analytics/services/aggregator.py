"""
Monthly aggregation

Raw fields are summed across a month's records; the ratio metrics are then
derived from the sums. Ratios are never summed or averaged across records.
"""
from typing import Iterable

from campaign_analytics.models.campaign import CampaignRecord, MonthlyAggregate
from campaign_analytics.utils.helpers import round_to

SUMMED_FIELDS = (
    "results",
    "reach",
    "impressions",
    "amount_spent",
    "conversion_value",
    "purchases",
    "adds_to_cart",
)


def _guarded(numerator: float, denominator: float, scale: float = 1.0) -> float:
    if denominator > 0:
        return round_to(numerator / denominator * scale)
    return 0.0


def derive_metrics(totals: dict) -> MonthlyAggregate:
    """Build an aggregate from raw sums, computing each ratio independently."""
    return MonthlyAggregate(
        **totals,
        avg_roas=_guarded(totals["conversion_value"], totals["amount_spent"]),
        conversion_rate=_guarded(totals["purchases"], totals["reach"], 100),
        cost_per_purchase=_guarded(totals["amount_spent"], totals["purchases"]),
        ctr=_guarded(totals["results"], totals["impressions"], 100),
        cpm=_guarded(totals["amount_spent"], totals["impressions"], 1000),
    )


def aggregate(records: Iterable[CampaignRecord]) -> MonthlyAggregate:
    """Sum a month's records. No records -> all-zero aggregate."""
    totals = {
        "results": 0,
        "reach": 0,
        "impressions": 0,
        "amount_spent": 0.0,
        "conversion_value": 0.0,
        "purchases": 0,
        "adds_to_cart": 0,
    }

    for record in records:
        for field_name in SUMMED_FIELDS:
            totals[field_name] += getattr(record, field_name)

    return derive_metrics(totals)
