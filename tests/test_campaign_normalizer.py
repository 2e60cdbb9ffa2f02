"""
Campaign Normalizer tests.

Guards against:
1. Entries being dropped or raising on missing/garbage fields
2. Synonym priority drift (camelCase before snake_case before aliases)
3. Ratios going NaN/inf/negative
4. Placeholder ids, names and dates changing shape
"""
import math

import pytest

from campaign_analytics.models.campaign import CampaignRecord
from campaign_analytics.services.campaign_normalizer import normalize_campaign, placeholder_dates


RATIO_FIELDS = ("roas", "cost_per_result", "cost_per_purchase")
COUNT_FIELDS = ("results", "reach", "impressions", "purchases", "adds_to_cart")


def _assert_well_formed(record: CampaignRecord):
    assert isinstance(record, CampaignRecord)
    assert record.campaign_id
    assert record.campaign_name
    for name in COUNT_FIELDS:
        value = getattr(record, name)
        assert isinstance(value, int) and value >= 0, f"{name}={value!r}"
    for name in ("amount_spent", "conversion_value") + RATIO_FIELDS:
        value = getattr(record, name)
        assert math.isfinite(value) and value >= 0, f"{name}={value!r}"
    assert isinstance(record.reporting_starts, str)
    assert isinstance(record.reporting_ends, str)


# ---------------------------------------------------------------------------
# Field mapping
# ---------------------------------------------------------------------------

def test_camel_case_entry():
    record = normalize_campaign({
        "campaignId": " CAMP-9 ",
        "campaignName": " Spring Sale ",
        "results": 200,
        "reach": 5000,
        "impressions": 9000,
        "amountSpent": 400.0,
        "conversionValue": 1000.0,
        "purchases": 40,
        "addsToCart": 90,
        "reportingStarts": "2025-08-02T00:00:00Z",
        "reportingEnds": "2025-08-20",
    }, 0)

    assert record.campaign_id == "CAMP-9"
    assert record.campaign_name == "Spring Sale"
    assert record.results == 200
    assert record.amount_spent == 400.0
    assert record.conversion_value == 1000.0
    assert record.adds_to_cart == 90
    assert record.reporting_starts == "2025-08-02"
    assert record.reporting_ends == "2025-08-20"
    assert record.roas == 2.5
    assert record.cost_per_result == 2.0
    assert record.cost_per_purchase == 10.0


def test_snake_case_entry():
    record = normalize_campaign({
        "campaign_id": "c-1",
        "campaign_name": "Snake",
        "result": "10",
        "amount_spent": "55.5",
        "conversion_value": "111",
        "purchase": 3,
        "adds_to_cart": 7,
        "start_date": "2025-07-01",
        "end_date": "2025-07-31",
    }, 0)

    assert record.campaign_id == "c-1"
    assert record.campaign_name == "Snake"
    assert record.results == 10
    assert record.amount_spent == 55.5
    assert record.conversion_value == 111.0
    assert record.purchases == 3
    assert record.adds_to_cart == 7
    assert record.reporting_starts == "2025-07-01"
    assert record.reporting_ends == "2025-07-31"


def test_conversion_value_synonym_priority():
    assert normalize_campaign({"conversionValue": None, "conversion_value": "12", "revenue": 99}, 0).conversion_value == 12.0
    assert normalize_campaign({"purchaseValue": 5, "revenue": 9}, 0).conversion_value == 5.0
    assert normalize_campaign({"purchase_value": 6, "revenue": 9}, 0).conversion_value == 6.0
    assert normalize_campaign({"revenue": 9}, 0).conversion_value == 9.0


def test_camel_case_wins_over_snake_case():
    record = normalize_campaign({"amountSpent": 10, "amount_spent": 20}, 0)
    assert record.amount_spent == 10.0


def test_counts_are_rounded_and_clamped():
    record = normalize_campaign({"results": "12.6", "reach": -5, "impressions": 3.4, "addToCart": "2.5"}, 0)
    assert record.results == 13
    assert record.reach == 0
    assert record.impressions == 3
    assert record.adds_to_cart == 3


def test_negative_amounts_clamped():
    record = normalize_campaign({"amountSpent": -50, "revenue": -10}, 0)
    assert record.amount_spent == 0.0
    assert record.conversion_value == 0.0


def test_graphql_edge_is_unwrapped():
    record = normalize_campaign({"node": {"id": "n-1", "name": "From Edge", "reach": 10}}, 0)
    assert record.campaign_id == "n-1"
    assert record.campaign_name == "From Edge"
    assert record.reach == 10


# ---------------------------------------------------------------------------
# Identity defaults
# ---------------------------------------------------------------------------

def test_defaults_for_empty_entry():
    record = normalize_campaign({}, 0)
    assert record.campaign_id == "campaign-1"
    assert record.campaign_name == "Campaign 1"
    assert record.reporting_starts == "2025-08-01"
    assert record.reporting_ends == "2025-08-03"


def test_blank_id_and_name_use_defaults():
    record = normalize_campaign({"campaignId": "   ", "campaignName": ""}, 4)
    assert record.campaign_id == "campaign-5"
    assert record.campaign_name == "Campaign 5"


def test_name_falls_back_to_name_field():
    record = normalize_campaign({"campaignName": "  ", "name": "  Plain Name "}, 0)
    assert record.campaign_name == "Plain Name"


def test_numeric_id_is_kept():
    assert normalize_campaign({"id": 42}, 0).campaign_id == "42"


def test_bool_id_is_ignored():
    assert normalize_campaign({"id": True}, 2).campaign_id == "campaign-3"


def test_float_id_is_kept():
    assert normalize_campaign({"id": 3.5}, 0).campaign_id == "3.5"
    assert normalize_campaign({"campaign_id": 7.0}, 0).campaign_id == "7"


def test_non_finite_float_id_uses_default():
    assert normalize_campaign({"id": float("nan")}, 1).campaign_id == "campaign-2"
    assert normalize_campaign({"id": float("inf")}, 1).campaign_id == "campaign-2"


@pytest.mark.parametrize("index, start, end", [
    (0, "2025-08-01", "2025-08-03"),
    (4, "2025-08-13", "2025-08-15"),
    (8, "2025-08-25", "2025-08-27"),
    (9, "2025-08-28", "2025-08-28"),
    (30, "2025-08-28", "2025-08-28"),
])
def test_placeholder_dates(index, start, end):
    assert placeholder_dates(index) == (start, end)
    record = normalize_campaign({}, index)
    assert (record.reporting_starts, record.reporting_ends) == (start, end)


def test_placeholder_dates_never_before_first_of_month():
    assert placeholder_dates(-3) == ("2025-08-01", "2025-08-01")


# ---------------------------------------------------------------------------
# Ratios
# ---------------------------------------------------------------------------

def test_ratios_fall_back_to_payload_values_when_denominator_is_zero():
    record = normalize_campaign({
        "amountSpent": 0,
        "roas": "3.456",
        "results": 0,
        "cost_per_result": 1.111,
        "purchases": 0,
    }, 0)
    assert record.roas == 3.46
    assert record.cost_per_result == 1.11
    assert record.cost_per_purchase == 0.0


def test_ratios_zero_without_denominator_or_payload_value():
    record = normalize_campaign({"conversionValue": 500}, 0)
    assert record.roas == 0.0
    assert record.cost_per_result == 0.0
    assert record.cost_per_purchase == 0.0


def test_negative_payload_ratio_clamped():
    assert normalize_campaign({"roas": -2}, 0).roas == 0.0


def test_computed_ratio_ignores_payload_ratio():
    record = normalize_campaign({"amountSpent": 100, "conversionValue": 150, "roas": 99}, 0)
    assert record.roas == 1.5


def test_ratio_overflow_is_finite():
    record = normalize_campaign({"amountSpent": 1e-320, "conversionValue": 1e308}, 0)
    assert math.isfinite(record.roas)


# ---------------------------------------------------------------------------
# Totality
# ---------------------------------------------------------------------------

def _deeply_nested(depth: int):
    value = {"leaf": True}
    for _ in range(depth):
        value = {"child": value, "list": [value]}
    return value


def test_normalize_never_raises():
    cyclic = {"name": "Loop"}
    cyclic["self"] = cyclic

    inputs = [
        None, 0, 1.5, "string", b"bytes", [], [1, 2], (), object(),
        {"results": object(), "reach": [1], "amountSpent": {"x": 1}},
        {"reportingStarts": 123, "reportingEnds": None},
        {"node": None},
        {"node": "not a mapping", "name": "Outer"},
        cyclic,
        _deeply_nested(200),
        {"amountSpent": float("nan"), "results": float("inf"), "roas": "inf"},
    ]

    for index, raw in enumerate(inputs):
        record = normalize_campaign(raw, index)
        _assert_well_formed(record)


def test_non_mapping_entries_get_full_defaults():
    record = normalize_campaign("garbage", 2)
    assert record.campaign_id == "campaign-3"
    assert record.campaign_name == "Campaign 3"
    assert record.results == 0
    assert record.amount_spent == 0.0


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------

def test_record_serializes_with_camel_case_names():
    dumped = normalize_campaign({"name": "A"}, 0).model_dump(by_alias=True)
    for key in ("campaignId", "campaignName", "amountSpent", "conversionValue",
                "addsToCart", "reportingStarts", "reportingEnds", "costPerResult", "costPerPurchase"):
        assert key in dumped
