"""Data models for the campaign analytics engine"""

from campaign_analytics.models.campaign import (
    CampaignRecord,
    MonthlyAggregate,
    MetricComparison,
    FunnelStage,
    AnalyticsSnapshot
)

__all__ = [
    "CampaignRecord",
    "MonthlyAggregate",
    "MetricComparison",
    "FunnelStage",
    "AnalyticsSnapshot"
]
