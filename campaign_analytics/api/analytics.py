"""
Campaign Analytics API

Read endpoints over the analytics store plus the initialize trigger.
Unknown months come back empty (or 404 for single-aggregate lookups);
the store itself never raises to callers.
"""
from fastapi import APIRouter, Depends, Query, HTTPException
from typing import Optional

from campaign_analytics.config import get_settings
from campaign_analytics.services.analytics_store import AnalyticsStore, get_analytics_store
from campaign_analytics.services.comparison import compare_months, conversion_funnel, campaign_duration_days
from campaign_analytics.utils.logger import log

router = APIRouter(prefix="/analytics", tags=["analytics"])


def _dump(model):
    return model.model_dump(by_alias=True)


def _snapshot_summary(store: AnalyticsStore) -> dict:
    snapshot = store.snapshot
    return {
        "client_id": snapshot.client_id,
        "generation": snapshot.generation,
        "state": store.state,
        "months": snapshot.months,
        "synthetic_months": list(snapshot.synthetic_months),
        "used_fallback": snapshot.used_fallback,
        "campaign_count": {
            month: len(records) for month, records in snapshot.monthly_raw_data.items()
        },
    }


@router.post("/initialize")
async def initialize_analytics(
    client_id: Optional[str] = Query(None, description="Client identity; omit for the unscoped dataset"),
    force_refresh: bool = Query(False, description="Reload even if the cache matches"),
    store: AnalyticsStore = Depends(get_analytics_store),
):
    """
    Load (or reuse) analytics data for a client

    Returns a summary of the published snapshot.
    """
    try:
        await store.initialize(client_id, force_refresh=force_refresh)
        return {"success": True, "data": _snapshot_summary(store)}
    except Exception as e:
        log.error(f"Error initializing analytics: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/months")
async def get_available_months(store: AnalyticsStore = Depends(get_analytics_store)):
    """Available months, oldest first, flagged when synthetic"""
    return {
        "success": True,
        "client_id": store.active_client_id,
        "data": [
            {"month": month, "synthetic": store.is_synthetic_month(month)}
            for month in store.get_available_months()
        ],
    }


@router.get("/aggregates")
async def get_all_aggregates(store: AnalyticsStore = Depends(get_analytics_store)):
    """Monthly aggregates for every available month"""
    return {
        "success": True,
        "client_id": store.active_client_id,
        "data": {month: _dump(agg) for month, agg in store.get_all_monthly_aggregates().items()},
    }


@router.get("/aggregates/{month}")
async def get_monthly_aggregate(month: str, store: AnalyticsStore = Depends(get_analytics_store)):
    """Aggregate for one YYYY-MM month"""
    aggregate = store.get_monthly_aggregate(month)
    if aggregate is None:
        raise HTTPException(status_code=404, detail=f"No analytics data for month {month}")
    return {
        "success": True,
        "month": month,
        "synthetic": store.is_synthetic_month(month),
        "data": _dump(aggregate),
    }


@router.get("/months/{month}/campaigns")
async def get_monthly_campaigns(month: str, store: AnalyticsStore = Depends(get_analytics_store)):
    """Normalized campaign records for a month ([] if unknown)"""
    records = store.get_monthly_raw_data(month)
    return {
        "success": True,
        "month": month,
        "synthetic": store.is_synthetic_month(month),
        "data": [
            {
                **_dump(record),
                "durationDays": campaign_duration_days(record.reporting_starts, record.reporting_ends),
            }
            for record in records
        ],
    }


@router.get("/months/{month}/funnel")
async def get_conversion_funnel(month: str, store: AnalyticsStore = Depends(get_analytics_store)):
    """Adds-to-cart vs purchases for a month"""
    stages = conversion_funnel(store.get_monthly_raw_data(month))
    return {"success": True, "month": month, "data": [_dump(stage) for stage in stages]}


@router.get("/compare")
async def compare(
    current: str = Query(..., description="Month to report, YYYY-MM"),
    previous: str = Query(..., description="Month to compare against, YYYY-MM"),
    store: AnalyticsStore = Depends(get_analytics_store),
):
    """Summary metrics for two months with period-over-period growth"""
    comparisons = compare_months(
        store.get_monthly_aggregate(current),
        store.get_monthly_aggregate(previous),
        currency=get_settings().display_currency,
    )
    return {
        "success": True,
        "current": current,
        "previous": previous,
        "data": [_dump(item) for item in comparisons],
    }
