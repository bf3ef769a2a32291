"""
Date helpers for expiration windows.
"""
from __future__ import annotations

from datetime import date, timedelta


def local_today() -> date:
    """Today's date in the function's local timezone."""
    return date.today()


def expiration_window(days_forward: int, today: date | None = None) -> tuple[date, date]:
    """Return (first, last) expiration dates, both inclusive."""
    start = today or local_today()
    return start, start + timedelta(days=days_forward)


def format_ymd(d: date) -> str:
    return d.strftime("%Y-%m-%d")
