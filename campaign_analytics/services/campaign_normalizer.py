"""
Campaign Normalizer

Maps one loosely typed payload entry onto a complete CampaignRecord.
Every field has a documented default, so no entry is ever rejected for being
incomplete and normalize_campaign() never raises.
"""
import math
from collections.abc import Mapping
from typing import Any, Optional

from campaign_analytics.models.campaign import CampaignRecord
from campaign_analytics.utils.helpers import to_number, round_to, round_count, normalize_date

# Placeholder reporting window for entries without dates
PLACEHOLDER_MONTH = "2025-08"
PLACEHOLDER_MAX_DAY = 28

# camelCase first, then snake_case and other known spellings
FIELD_SYNONYMS = {
    "results": ("results", "result"),
    "reach": ("reach",),
    "impressions": ("impressions",),
    "purchases": ("purchases", "purchase"),
    "adds_to_cart": ("addsToCart", "adds_to_cart", "addToCart"),
    "amount_spent": ("amountSpent", "amount_spent"),
    "conversion_value": ("conversionValue", "conversion_value", "purchaseValue", "purchase_value", "revenue"),
    "reporting_starts": ("reportingStarts", "reporting_starts", "startDate", "start_date"),
    "reporting_ends": ("reportingEnds", "reporting_ends", "endDate", "end_date"),
    "roas": ("roas",),
    "cost_per_result": ("costPerResult", "cost_per_result"),
    "cost_per_purchase": ("costPerPurchase", "cost_per_purchase"),
}


def _first_present(raw: Mapping, field_name: str) -> Any:
    """First synonym whose value is not None."""
    for key in FIELD_SYNONYMS[field_name]:
        value = raw.get(key)
        if value is not None:
            return value
    return None


def _clean_text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _campaign_id(raw: Mapping, index: int) -> str:
    for key in ("campaignId", "campaign_id", "id"):
        value = raw.get(key)
        text = _clean_text(value)
        if text:
            return text
        if isinstance(value, bool):
            continue
        if isinstance(value, int):
            return str(value)
        if isinstance(value, float) and math.isfinite(value):
            # 7.0 -> "7", 3.5 -> "3.5"
            return str(int(value)) if value.is_integer() else repr(value)
    return f"campaign-{index + 1}"


def _campaign_name(raw: Mapping, index: int) -> str:
    for key in ("campaignName", "campaign_name", "name"):
        text = _clean_text(raw.get(key))
        if text:
            return text
    return f"Campaign {index + 1}"


def placeholder_dates(index: int) -> tuple:
    """Plausible August 2025 window: 3 days apart per index, capped at day 28."""
    start_day = max(1, min(PLACEHOLDER_MAX_DAY, index * 3 + 1))
    end_day = max(1, min(PLACEHOLDER_MAX_DAY, index * 3 + 3))
    return f"{PLACEHOLDER_MONTH}-{start_day:02d}", f"{PLACEHOLDER_MONTH}-{end_day:02d}"


def _ratio(numerator: float, denominator: float, raw: Mapping, field_name: str) -> float:
    """Computed ratio, or the payload's own ratio when the denominator is 0."""
    if denominator > 0:
        return round_to(numerator / denominator)
    return round_to(max(0.0, to_number(_first_present(raw, field_name))))


def normalize_campaign(raw: Any, index: int) -> CampaignRecord:
    """
    Normalize one raw entry.

    Args:
        raw: Any payload value; non-mappings are treated as empty entries
            and GraphQL edges are unwrapped to their node
        index: Position in the source list, used for synthesized defaults

    Returns:
        A fully populated CampaignRecord
    """
    if isinstance(raw, Mapping) and isinstance(raw.get("node"), Mapping):
        raw = raw["node"]
    if not isinstance(raw, Mapping):
        raw = {}

    amount_spent = max(0.0, to_number(_first_present(raw, "amount_spent")))
    conversion_value = max(0.0, to_number(_first_present(raw, "conversion_value")))

    results = round_count(to_number(_first_present(raw, "results")))
    reach = round_count(to_number(_first_present(raw, "reach")))
    impressions = round_count(to_number(_first_present(raw, "impressions")))
    purchases = round_count(to_number(_first_present(raw, "purchases")))
    adds_to_cart = round_count(to_number(_first_present(raw, "adds_to_cart")))

    default_start, default_end = placeholder_dates(index)

    return CampaignRecord(
        campaign_id=_campaign_id(raw, index),
        campaign_name=_campaign_name(raw, index),
        results=results,
        reach=reach,
        impressions=impressions,
        amount_spent=amount_spent,
        conversion_value=conversion_value,
        purchases=purchases,
        adds_to_cart=adds_to_cart,
        reporting_starts=normalize_date(_first_present(raw, "reporting_starts"), default_start),
        reporting_ends=normalize_date(_first_present(raw, "reporting_ends"), default_end),
        roas=_ratio(conversion_value, amount_spent, raw, "roas"),
        cost_per_result=_ratio(amount_spent, results, raw, "cost_per_result"),
        cost_per_purchase=_ratio(amount_spent, purchases, raw, "cost_per_purchase"),
    )
