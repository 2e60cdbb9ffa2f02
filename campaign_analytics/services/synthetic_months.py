"""
Synthetic Month Generator

Fills the months around the single month of real data with randomly
perturbed copies of it, so the dashboard has something to compare against.
The output is synthetic, not a forecast: every month produced here is
reported in AnalyticsSnapshot.synthetic_months, and the whole path is
switched off by the synthetic_months_enabled setting.
"""
import random
from typing import Dict, List, Optional, Sequence, Tuple

from campaign_analytics.models.campaign import CampaignRecord
from campaign_analytics.utils.helpers import round_to, round_count, safe_divide

VARIATION_LOW = 0.7
VARIATION_HIGH = 1.3

# (month offset from the base month, variation factor)
DEFAULT_MONTH_WINDOW: Tuple[Tuple[int, float], ...] = (
    (-2, 0.8),
    (-1, 0.9),
    (1, 1.1),
)


def shift_month(month: str, offset: int) -> str:
    """'2025-08' shifted by -2 -> '2025-06'"""
    year, month_number = (int(part) for part in month.split("-", 1))
    total = year * 12 + (month_number - 1) + offset
    return f"{total // 12:04d}-{total % 12 + 1:02d}"


def generate_month_variant(
    base: Sequence[CampaignRecord],
    variation_factor: float,
    rng: Optional[random.Random] = None,
) -> List[CampaignRecord]:
    """
    Scale each record by uniform(0.7, 1.3) * variation_factor.

    Counts are rounded to non-negative integers and amounts to 2 decimals.
    Ratios are recomputed from the scaled values, never scaled themselves.
    """
    rng = rng or random.Random()
    variants = []

    for campaign in base:
        multiplier = rng.uniform(VARIATION_LOW, VARIATION_HIGH) * variation_factor

        results = round_count(campaign.results * multiplier)
        purchases = round_count(campaign.purchases * multiplier)
        amount_spent = max(0.0, round_to(campaign.amount_spent * multiplier))
        conversion_value = max(0.0, round_to(campaign.conversion_value * multiplier))

        variants.append(campaign.model_copy(update={
            "results": results,
            "reach": round_count(campaign.reach * multiplier),
            "impressions": round_count(campaign.impressions * multiplier),
            "amount_spent": amount_spent,
            "conversion_value": conversion_value,
            "purchases": purchases,
            "adds_to_cart": round_count(campaign.adds_to_cart * multiplier),
            "roas": round_to(safe_divide(conversion_value, amount_spent)),
            "cost_per_result": round_to(safe_divide(amount_spent, results)),
            "cost_per_purchase": round_to(safe_divide(amount_spent, purchases)),
        }))

    return variants


def build_monthly_window(
    base: Sequence[CampaignRecord],
    base_month: str,
    rng: Optional[random.Random] = None,
    window: Sequence[Tuple[int, float]] = DEFAULT_MONTH_WINDOW,
    enabled: bool = True,
) -> Tuple[Dict[str, List[CampaignRecord]], Tuple[str, ...]]:
    """
    Lay out the months around the base month.

    Returns:
        (month -> records, synthetic month keys). The base month always holds
        the base records verbatim; with enabled=False it is the only month.
    """
    rng = rng or random.Random()
    monthly: Dict[str, List[CampaignRecord]] = {base_month: list(base)}
    synthetic = []

    if enabled:
        for offset, factor in window:
            if offset == 0:
                continue
            month = shift_month(base_month, offset)
            monthly[month] = generate_month_variant(base, factor, rng)
            synthetic.append(month)

    ordered = {month: monthly[month] for month in sorted(monthly)}
    return ordered, tuple(sorted(synthetic))
