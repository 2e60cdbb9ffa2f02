"""
Helper utilities

Coercion of loosely typed payload values into numbers and date strings.
None of these raise: malformed input resolves to the documented fallback.
"""
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any
import math


def to_number(value: Any, fallback: float = 0.0) -> float:
    """
    Coerce a payload value to a finite float.

    Accepts ints, floats and Decimals (bools are not numbers here) and
    numeric strings. Anything else, or a non-finite result, returns fallback.
    """
    if isinstance(value, bool):
        return fallback

    if isinstance(value, (int, float, Decimal)):
        try:
            number = float(value)
        except (OverflowError, ValueError):
            return fallback
        return number if math.isfinite(number) else fallback

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return fallback
        try:
            number = float(text)
        except ValueError:
            return fallback
        return number if math.isfinite(number) else fallback

    return fallback


def round_to(value: float, decimals: int = 2) -> float:
    """Round to `decimals` places, halves toward +inf. Non-finite -> 0."""
    if value is None or not math.isfinite(value):
        return 0.0

    factor = 10 ** decimals
    scaled = value * factor
    if not math.isfinite(scaled):
        # Too large to carry fractional digits anyway
        return float(value)
    return math.floor(scaled + 0.5) / factor


def round_count(value: float) -> int:
    """Round to the nearest whole count, never below zero."""
    if value is None or not math.isfinite(value):
        return 0
    return max(0, math.floor(value + 0.5))


def normalize_date(value: Any, default_date: str) -> str:
    """
    Normalize a date-ish value to a YYYY-MM-DD string.

    Strings are trimmed and cut to their first 10 characters; date and
    datetime objects are rendered as ISO dates (aware datetimes in UTC).
    """
    if isinstance(value, str) and value.strip():
        return value.strip()[:10]

    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date().isoformat()

    if isinstance(value, date):
        return value.isoformat()

    return default_date


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Safely divide two numbers"""
    try:
        return numerator / denominator if denominator != 0 else default
    except (TypeError, ZeroDivisionError):
        return default
