"""
Campaign Analytics Aggregation Engine
Main FastAPI application
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from campaign_analytics.config import get_settings
from campaign_analytics.utils.logger import log
from campaign_analytics import __version__

from campaign_analytics.api import analytics, health

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    log.info(f"Starting {settings.app_name} v{__version__}")
    log.info(f"Environment: {settings.environment}")

    # Warm the unscoped dataset so the first dashboard request is served from cache
    if settings.preload_on_startup:
        try:
            from campaign_analytics.services.analytics_store import get_analytics_store
            await get_analytics_store().initialize()
            log.info("Analytics store preloaded")
        except Exception as e:
            log.error(f"Error preloading campaign analytics data: {str(e)}")

    yield

    log.info("Shutting down application")


app = FastAPI(
    title=settings.app_name,
    version=__version__,
    description="""
    Campaign analytics aggregation engine

    - Normalizes arbitrarily shaped campaign payloads per client
    - Builds monthly aggregates (ROAS, conversion rate, CTR, CPM, cost per purchase)
    - Serves month-over-month comparisons for the dashboard
    """,
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router)
app.include_router(analytics.router)


@app.get("/")
async def root():
    """API index"""
    return {
        "name": settings.app_name,
        "version": __version__,
        "endpoints": {
            "health": "GET /health",
            "status": "GET /status",
            "analytics_initialize": "POST /analytics/initialize",
            "analytics_months": "GET /analytics/months",
            "analytics_aggregates": "GET /analytics/aggregates",
            "analytics_month_aggregate": "GET /analytics/aggregates/{month}",
            "analytics_month_campaigns": "GET /analytics/months/{month}/campaigns",
            "analytics_month_funnel": "GET /analytics/months/{month}/funnel",
            "analytics_compare": "GET /analytics/compare?current=&previous="
        }
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "campaign_analytics.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug
    )
