"""
Analytics fetch and fallback policy

One load cycle: fetch the client's payload, locate and normalize its
campaigns, decide whether the built-in sample data stands in, then build the
monthly window and aggregate every month.

Fallback rules:
- no records and no client id  -> six sample campaigns (demo / first load)
- no records for a client      -> empty dataset, so "no campaigns" stays visible
Transport and parse failures count as "no records"; fetch_analytics_data()
never raises.
"""
import random
from typing import Any, List, Optional, Sequence

from campaign_analytics.config import Settings, get_settings
from campaign_analytics.models.campaign import AnalyticsSnapshot, CampaignRecord
from campaign_analytics.services.aggregator import aggregate
from campaign_analytics.services.campaign_normalizer import normalize_campaign
from campaign_analytics.services.payload_locator import locate_campaign_array
from campaign_analytics.services.sample_data import fallback_campaigns
from campaign_analytics.services.synthetic_months import build_monthly_window
from campaign_analytics.utils.logger import log


def resolve_client_id(client_id: Optional[str]) -> Optional[str]:
    """Trim the requested identity; blank means unscoped (None)."""
    if client_id is None:
        return None
    resolved = str(client_id).strip()
    return resolved or None


def normalize_payload(payload: Any) -> List[CampaignRecord]:
    """Locate the campaign entries in a payload and normalize each one."""
    entries = locate_campaign_array(payload)
    return [normalize_campaign(entry, index) for index, entry in enumerate(entries)]


async def fetch_campaign_records(connector, client_id: Optional[str]) -> List[CampaignRecord]:
    """Remote records for a client; [] on any failure."""
    try:
        result = await connector.fetch(client_id)
        if not result.get("success"):
            log.warning(
                f"Campaign data unavailable for client {client_id or '<unscoped>'}: "
                f"{result.get('error')}"
            )
            return []
        return normalize_payload(result.get("data"))
    except Exception as e:
        log.error(f"Unable to fetch campaign data for client {client_id or '<unscoped>'}: {str(e)}")
        return []


def build_analytics_snapshot(
    base: Sequence[CampaignRecord],
    settings: Optional[Settings] = None,
    rng: Optional[random.Random] = None,
    client_id: Optional[str] = None,
    used_fallback: bool = False,
) -> AnalyticsSnapshot:
    """Lay out the month window around the base records and aggregate it."""
    settings = settings or get_settings()
    monthly_raw_data, synthetic_months = build_monthly_window(
        base,
        settings.base_month,
        rng=rng,
        enabled=settings.synthetic_months_enabled,
    )

    return AnalyticsSnapshot(
        monthly_raw_data=monthly_raw_data,
        monthly_aggregates={month: aggregate(records) for month, records in monthly_raw_data.items()},
        client_id=client_id,
        synthetic_months=synthetic_months,
        used_fallback=used_fallback,
    )


async def fetch_analytics_data(
    connector,
    client_id: Optional[str] = None,
    settings: Optional[Settings] = None,
    rng: Optional[random.Random] = None,
) -> AnalyticsSnapshot:
    """
    Run one complete load for a client

    Args:
        connector: Object with `async fetch(client_id) -> dict` (BaseConnector)
        client_id: Client identity; None/blank loads the unscoped dataset
        settings: Settings override (defaults to get_settings())
        rng: Random source for synthetic months

    Returns:
        AnalyticsSnapshot (generation 0; the store stamps the generation)
    """
    settings = settings or get_settings()
    client_id = resolve_client_id(client_id)
    if rng is None:
        rng = random.Random(settings.synthetic_seed)

    records = await fetch_campaign_records(connector, client_id)
    used_fallback = False

    if not records:
        if client_id:
            log.warning(f"No campaign records returned for client {client_id}; using empty dataset.")
        elif settings.fallback_enabled:
            log.warning("No campaign records for unscoped load; using built-in sample campaigns")
            records = fallback_campaigns()
            used_fallback = True

    snapshot = build_analytics_snapshot(
        records,
        settings=settings,
        rng=rng,
        client_id=client_id,
        used_fallback=used_fallback,
    )

    log.info(
        f"Built analytics for client {client_id or '<unscoped>'}: "
        f"{len(records)} campaigns across {len(snapshot.monthly_aggregates)} months "
        f"({len(snapshot.synthetic_months)} synthetic)"
    )
    return snapshot
