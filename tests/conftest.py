"""
Pytest configuration and shared fixtures for optionfetch tests.

Polygon is never contacted: tests install a fake `requests.get` through the
`fake_polygon` fixture and inspect the calls it recorded.
"""
import sys
from datetime import date
from pathlib import Path
from typing import Any

import pytest


def pytest_configure():
    """
    Ensure the repo root is on sys.path for the flat-layout package import
    (`optionfetch`). This keeps tests runnable without an editable install.
    """
    root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(root))


TODAY = date(2026, 10, 19)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def settings():
    from optionfetch.config import Settings

    return Settings(
        _env_file=None,
        POLYGON_API_KEY="env_key",
        POLYGON_BASE_URL="https://polygon.test",
        POLYGON_TIMEOUT=5.0,
        OPTIONFETCH_LOOKUP="chain",
        LOG_LEVEL="WARNING",
    )


# =============================================================================
# Fake Polygon
# =============================================================================

class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, text: str | None = None):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else ("" if payload is None else str(payload))

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakePolygon:
    """Routes GET requests by URL to canned responses and records every call."""

    def __init__(self):
        self.routes: dict[str, FakeResponse] = {}
        self.calls: list[tuple[str, dict]] = []

    def add(self, url: str, payload: Any = None, status_code: int = 200, text: str | None = None) -> None:
        self.routes[url] = FakeResponse(status_code, payload, text)

    def get(self, url: str, params: dict | None = None, timeout: float | None = None) -> FakeResponse:
        self.calls.append((url, dict(params or {})))
        if url not in self.routes:
            return FakeResponse(404, None, text=f"no route for {url}")
        return self.routes[url]


@pytest.fixture
def fake_polygon(monkeypatch) -> FakePolygon:
    from optionfetch.data import polygon

    fake = FakePolygon()
    monkeypatch.setattr(polygon.requests, "get", fake.get)
    return fake


# =============================================================================
# Test Data Helpers
# =============================================================================

def make_snapshot(
    ticker: str = "O:AAPL261120C00150000",
    contract_type: str = "call",
    expiration_date: str = "2026-11-20",
    strike_price: Any = 150,
    implied_volatility: Any = 0.2534,
    open_interest: Any = 1520,
    midpoint: Any = 3.45,
) -> dict:
    """
    Build a Polygon option snapshot as returned in `results`.

    Usage:
        snap = make_snapshot(strike_price=152.5, open_interest=None)
    """
    snap: dict[str, Any] = {
        "break_even_price": 153.45,
        "details": {
            "contract_type": contract_type,
            "exercise_style": "american",
            "expiration_date": expiration_date,
            "shares_per_contract": 100,
            "strike_price": strike_price,
            "ticker": ticker,
        },
        "greeks": {"delta": 0.52, "gamma": 0.03, "theta": -0.08, "vega": 0.19},
        "last_quote": {"ask": 3.5, "bid": 3.39, "midpoint": midpoint},
        "underlying_asset": {"ticker": "AAPL"},
    }
    if implied_volatility is not None:
        snap["implied_volatility"] = implied_volatility
    if open_interest is not None:
        snap["open_interest"] = open_interest
    return snap
