"""
Campaign analytics data model

CampaignRecord and MonthlyAggregate serialize with the camelCase field names
the dashboard consumes (amountSpent, avgROAS, ...). AnalyticsSnapshot is the
complete store contents for one client identity.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CampaignRecord(BaseModel):
    """One campaign's performance for a reporting window"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    campaign_id: str
    campaign_name: str
    results: int = 0
    reach: int = 0
    impressions: int = 0
    amount_spent: float = 0.0
    conversion_value: float = 0.0
    purchases: int = 0
    adds_to_cart: int = 0
    reporting_starts: str
    reporting_ends: str
    roas: float = 0.0  # conversion_value / amount_spent
    cost_per_result: float = 0.0  # amount_spent / results
    cost_per_purchase: float = 0.0  # amount_spent / purchases


class MonthlyAggregate(BaseModel):
    """Sum of a month's campaign records plus derived ratios"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    results: int = 0
    reach: int = 0
    impressions: int = 0
    amount_spent: float = 0.0
    conversion_value: float = 0.0
    purchases: int = 0
    adds_to_cart: int = 0

    # Derived (0 when the denominator is 0)
    avg_roas: float = Field(0.0, alias="avgROAS")
    conversion_rate: float = 0.0  # percent of reach
    cost_per_purchase: float = 0.0
    ctr: float = 0.0  # percent of impressions
    cpm: float = 0.0  # per 1000 impressions


class MetricComparison(BaseModel):
    """One summary metric compared across two months"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    key: str
    title: str
    subtitle: str
    current: float
    previous: float
    growth: float
    current_display: str
    previous_display: str


class FunnelStage(BaseModel):
    """One stage of the adds-to-cart -> purchases funnel"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    name: str
    value: int
    percentage: float


@dataclass(frozen=True)
class AnalyticsSnapshot:
    """
    Complete store contents: month -> records and month -> aggregate.

    Built in full before it is published, never mutated afterwards.
    client_id is None for the unscoped (possibly fallback) dataset and
    generation is 0 only for the empty initial snapshot.
    """
    monthly_raw_data: Dict[str, List[CampaignRecord]] = field(default_factory=dict)
    monthly_aggregates: Dict[str, MonthlyAggregate] = field(default_factory=dict)
    client_id: Optional[str] = None
    generation: int = 0
    synthetic_months: Tuple[str, ...] = ()
    used_fallback: bool = False

    @property
    def has_data(self) -> bool:
        return bool(self.monthly_aggregates)

    @property
    def months(self) -> List[str]:
        return sorted(self.monthly_aggregates)

    def with_identity(self, client_id: Optional[str], generation: int) -> "AnalyticsSnapshot":
        """Copy of this snapshot stamped with the load that produced it"""
        return AnalyticsSnapshot(
            monthly_raw_data=self.monthly_raw_data,
            monthly_aggregates=self.monthly_aggregates,
            client_id=client_id,
            generation=generation,
            synthetic_months=self.synthetic_months,
            used_fallback=self.used_fallback,
        )
