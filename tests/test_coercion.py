"""
Coercion helper tests.

Guards against:
1. Payload garbage (None, NaN, bools, huge ints) leaking into numeric fields
2. Rounding drift between repeated passes
3. Date strings being reformatted instead of truncated
"""
import random
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

from campaign_analytics.utils.helpers import (
    to_number,
    round_to,
    round_count,
    normalize_date,
    safe_divide,
)


# ---------------------------------------------------------------------------
# to_number
# ---------------------------------------------------------------------------

def test_to_number_accepts_numbers():
    assert to_number(5) == 5.0
    assert to_number(2.75) == 2.75
    assert to_number(Decimal("1.5")) == 1.5


def test_to_number_parses_numeric_strings():
    assert to_number("12.5") == 12.5
    assert to_number("  7 ") == 7.0
    assert to_number("1e3") == 1000.0


def test_to_number_falls_back_on_garbage():
    for value in (None, "abc", "", "   ", [1], {"a": 1}, object()):
        assert to_number(value) == 0.0, f"Expected fallback for {value!r}"


def test_to_number_rejects_non_finite():
    assert to_number(float("nan")) == 0.0
    assert to_number(float("inf")) == 0.0
    assert to_number("-inf") == 0.0
    assert to_number("nan", fallback=4.0) == 4.0


def test_to_number_bool_is_not_a_number():
    assert to_number(True) == 0.0
    assert to_number(False, fallback=9.0) == 9.0


def test_to_number_overflowing_int_falls_back():
    assert to_number(10 ** 400, fallback=1.0) == 1.0


def test_to_number_custom_fallback():
    assert to_number(None, fallback=3.0) == 3.0


# ---------------------------------------------------------------------------
# round_to / round_count
# ---------------------------------------------------------------------------

def test_round_to_two_decimals_by_default():
    assert round_to(1.234) == 1.23
    assert round_to(0.125) == 0.13


def test_round_to_halves_go_up():
    assert round_to(2.5, 0) == 3.0
    assert round_to(-2.5, 0) == -2.0


def test_round_to_other_precisions():
    assert round_to(12.3456, 3) == 12.346
    assert round_to(12.3456, 0) == 12.0


def test_round_to_non_finite_is_zero():
    assert round_to(float("nan")) == 0.0
    assert round_to(float("inf")) == 0.0
    assert round_to(float("-inf")) == 0.0


def test_round_to_is_idempotent():
    rng = random.Random(42)
    values = [rng.uniform(-1e6, 1e6) for _ in range(500)] + [0.0, 0.005, 1.005, 2.675, -0.015]
    for x in values:
        once = round_to(x)
        assert round_to(once) == once, f"round_to not idempotent for {x}"


def test_round_to_huge_value_passes_through():
    assert round_to(1e307) == 1e307


def test_round_count():
    assert round_count(2.5) == 3
    assert round_count(1.4) == 1
    assert round_count(-3) == 0
    assert round_count(float("nan")) == 0
    assert isinstance(round_count(7.0), int)


# ---------------------------------------------------------------------------
# normalize_date
# ---------------------------------------------------------------------------

DEFAULT = "2025-08-01"


def test_normalize_date_truncates_strings():
    assert normalize_date(" 2025-08-15T10:00:00Z ", DEFAULT) == "2025-08-15"
    assert normalize_date("2025-09-02", DEFAULT) == "2025-09-02"


def test_normalize_date_short_string_kept_as_is():
    assert normalize_date("soon", DEFAULT) == "soon"


def test_normalize_date_from_date_objects():
    assert normalize_date(date(2025, 8, 3), DEFAULT) == "2025-08-03"
    assert normalize_date(datetime(2025, 8, 4, 23, 59), DEFAULT) == "2025-08-04"


def test_normalize_date_aware_datetime_in_utc():
    sydney_morning = datetime(2025, 8, 2, 5, 0, tzinfo=timezone(timedelta(hours=10)))
    assert normalize_date(sydney_morning, DEFAULT) == "2025-08-01"


def test_normalize_date_defaults():
    for value in (None, "", "   ", 20250801, [], {}):
        assert normalize_date(value, DEFAULT) == DEFAULT


# ---------------------------------------------------------------------------
# safe_divide
# ---------------------------------------------------------------------------

def test_safe_divide():
    assert safe_divide(10, 4) == 2.5
    assert safe_divide(10, 0) == 0.0
    assert safe_divide(10, 0, default=-1.0) == -1.0
    assert safe_divide(None, 2) == 0.0
