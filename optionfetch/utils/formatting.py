"""
Text formatting for contract fields.

Every formatter returns the literal 'N/A' when the value is missing
or not of the expected JSON type.
"""
from __future__ import annotations

from typing import Any

NA = "N/A"


def _is_number(x: Any) -> bool:
    # bool is an int subclass but never a JSON number
    return isinstance(x, (int, float)) and not isinstance(x, bool)


def fmt_text(x: Any) -> str:
    """Pass strings through unchanged."""
    if not isinstance(x, str):
        return NA
    return x


def fmt_float(x: Any, decimals: int = 2) -> str:
    """Format a number with fixed decimals, e.g. 2.555 -> '2.56'."""
    if not _is_number(x):
        return NA
    return f"{float(x):.{decimals}f}"


def fmt_pct(x: Any, decimals: int = 2) -> str:
    """Format a fraction as a percentage, e.g. 0.2534 -> '25.34%'."""
    if not _is_number(x):
        return NA
    return f"{float(x) * 100.0:.{decimals}f}%"


def fmt_count(x: Any) -> str:
    """Format a non-negative integer count, e.g. 1520 -> '1520'."""
    if not isinstance(x, int) or isinstance(x, bool) or x < 0:
        return NA
    return str(x)


def fmt_number(x: Any) -> str:
    """
    Shortest text for a number, without a trailing '.0'.

    150 -> '150', 150.0 -> '150', 152.5 -> '152.5'
    """
    if not _is_number(x):
        return NA
    value = float(x)
    if value != value or value in (float("inf"), float("-inf")):
        return NA
    if value.is_integer():
        return str(int(value))
    return repr(value)
