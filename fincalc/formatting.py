"""
Display helpers for the presentation layer.

Engines return raw floats; callers format them here just before rendering.
"""

from __future__ import annotations

import re


def format_currency(value: float, decimals: int = 2, symbol: str = "$") -> str:
    """``-1234.5`` -> ``-$1,234.50`` (en-US grouping)."""
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.{decimals}f}"


def format_percentage(value: float, decimals: int = 2) -> str:
    return f"{value:.{decimals}f}%"


def format_number(value: float, decimals: int = 0) -> str:
    return f"{value:,.{decimals}f}"


def parse_formatted_number(text: str) -> float:
    """Read back a grouped number such as ``"1,250.75"``; unparseable text is 0."""
    cleaned = re.sub(r"[,\s$%]", "", text or "")
    try:
        return float(cleaned)
    except ValueError:
        return 0.0


def format_years(years: int) -> str:
    if years == 0:
        return "Now"
    if years == 1:
        return "1 year"
    return f"{years} years"
