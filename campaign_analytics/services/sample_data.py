"""
Built-in sample campaigns

Substituted only for unscoped loads that get no data from the remote
endpoint, so a fresh install or demo still renders a populated dashboard.
Never used for a specific client.
"""
from typing import List

from campaign_analytics.models.campaign import CampaignRecord
from campaign_analytics.utils.helpers import round_to

_SAMPLE_ROWS = [
    # id, name, results, reach, impressions, spent, conversion value, purchases, adds to cart, starts, ends
    ("CAMP-001", "Summer Savings Push", 1245, 45230, 83512, 12450.75, 37218.21, 195, 482, "2025-08-01", "2025-08-31"),
    ("CAMP-002", "New Arrivals Rollout", 985, 39845, 70234, 10123.42, 29560.87, 162, 421, "2025-08-03", "2025-08-27"),
    ("CAMP-003", "Midnight Flash Sale", 1565, 50210, 91203, 14325.65, 41250.02, 238, 563, "2025-08-10", "2025-08-31"),
    ("CAMP-004", "Loyalty Program Boost", 845, 32890, 61245, 8240.33, 21563.44, 148, 356, "2025-08-05", "2025-08-29"),
    ("CAMP-005", "Holiday Preview Teasers", 1322, 47215, 86780, 13510.22, 40512.30, 214, 512, "2025-08-12", "2025-08-31"),
    ("CAMP-006", "Remarketing Revival", 918, 30542, 58912, 7654.11, 18234.56, 137, 298, "2025-08-07", "2025-08-23"),
]


def fallback_campaigns() -> List[CampaignRecord]:
    """Fresh list of the six sample campaigns."""
    return [
        CampaignRecord(
            campaign_id=campaign_id,
            campaign_name=name,
            results=results,
            reach=reach,
            impressions=impressions,
            amount_spent=spent,
            conversion_value=value,
            purchases=purchases,
            adds_to_cart=adds_to_cart,
            reporting_starts=starts,
            reporting_ends=ends,
            roas=round_to(value / spent),
            cost_per_result=round_to(spent / results),
            cost_per_purchase=round_to(spent / purchases),
        )
        for (campaign_id, name, results, reach, impressions, spent, value,
             purchases, adds_to_cart, starts, ends) in _SAMPLE_ROWS
    ]
