"""
Growth and display formatting helpers

Pure and total: None, NaN and infinities format as 0 and never raise.
Numbers are rounded with round_to() before formatting so displayed values
agree with the stored 2-decimal ratios.
"""
import math
from typing import Any

from campaign_analytics.utils.helpers import round_to, to_number

CURRENCY_SYMBOLS = {"CAD": "$", "USD": "$", "EUR": "€", "GBP": "£"}


def _finite(value: Any) -> float:
    return to_number(value, 0.0)


def calculate_growth(current: Any, previous: Any) -> float:
    """Percent change from previous to current; 0 when undefined."""
    if isinstance(current, bool) or isinstance(previous, bool):
        return 0.0
    if not isinstance(current, (int, float)) or not isinstance(previous, (int, float)):
        return 0.0
    if not math.isfinite(current) or not math.isfinite(previous) or previous == 0:
        return 0.0
    return (current - previous) / previous * 100


def format_number(value: Any, decimals: int = 0) -> str:
    """12345.678 -> '12,346' (decimals=0) / '12,345.68' (decimals=2)"""
    number = round_to(_finite(value), decimals)
    if number == 0:
        number = 0.0  # no '-0'
    return f"{number:,.{decimals}f}"


def format_currency(amount: Any, currency: str = "CAD") -> str:
    """1234.5 -> '$1,234.50', -5 -> '-$5.00'"""
    number = round_to(_finite(amount), 2)
    symbol = CURRENCY_SYMBOLS.get(currency, f"{currency} ")
    sign = "-" if number < 0 else ""
    return f"{sign}{symbol}{abs(number):,.2f}"


def format_percentage(value: Any, decimals: int = 1) -> str:
    """12.345 -> '12.3%'"""
    return f"{format_number(value, decimals)}%"
