"""
Health check and status endpoints
"""
from fastapi import APIRouter, Depends
from datetime import datetime
from campaign_analytics.config import get_settings
from campaign_analytics.services.analytics_store import AnalyticsStore, get_analytics_store
from campaign_analytics import __version__

settings = get_settings()

router = APIRouter()


@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat(),
        "version": __version__
    }


@router.get("/status")
async def get_status(store: AnalyticsStore = Depends(get_analytics_store)):
    """Get engine status"""
    return {
        "app_name": settings.app_name,
        "version": __version__,
        "environment": settings.environment,
        "store": {
            "state": store.state,
            "client_id": store.active_client_id,
            "generation": store.snapshot.generation,
            "months": store.get_available_months(),
            "loads_started": store.load_count,
        },
        "features": {
            "synthetic_months": settings.synthetic_months_enabled,
            "fallback_dataset": settings.fallback_enabled,
            "preload_on_startup": settings.preload_on_startup
        },
        "timestamp": datetime.utcnow().isoformat()
    }
