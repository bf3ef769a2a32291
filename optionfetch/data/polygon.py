"""
Polygon.io adapter for option contract lookups.

Two ways to get contract snapshots:
- fetch_chain_snapshot: one request for the whole filtered chain
- fetch_contract_details: reference list, then one snapshot per contract
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any
from urllib.parse import quote

import requests

from optionfetch.config import Settings
from optionfetch.models import ContractQuery
from optionfetch.utils.dates import format_ymd

logger = logging.getLogger(__name__)


class PolygonError(RuntimeError):
    """Non-2xx response or transport failure talking to Polygon."""

    def __init__(self, message: str, *, status_code: int | None = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


def _get(settings: Settings, path: str, params: dict[str, Any]) -> dict[str, Any]:
    url = f"{settings.polygon_base_url}{path}"
    try:
        resp = requests.get(url, params=params, timeout=settings.polygon_timeout)
    except requests.RequestException as e:
        raise PolygonError(f"Polygon request to {path} failed: {e}") from e

    if not resp.ok:
        body = resp.text
        logger.error(f"Polygon error for {path}: status {resp.status_code}, response: {body}")
        raise PolygonError(
            f"Polygon returned status {resp.status_code} for {path}",
            status_code=resp.status_code,
            body=body,
        )

    try:
        data = resp.json()
    except ValueError as e:
        raise PolygonError(f"Polygon returned invalid JSON for {path}") from e
    if not isinstance(data, dict):
        raise PolygonError(f"Polygon returned unexpected payload for {path}")
    return data


def _window_params(query: ContractQuery, today: date | None) -> dict[str, Any]:
    start, end = query.expiration_window(today)
    params: dict[str, Any] = {
        "apiKey": query.api_key,
        "limit": query.limit,
        "order": "asc",
        "sort": "expiration_date",
        "expiration_date.gte": format_ymd(start),
        "expiration_date.lte": format_ymd(end),
    }
    if query.contract_type:
        params["contract_type"] = query.contract_type
    return params


def fetch_chain_snapshot(
    settings: Settings,
    query: ContractQuery,
    *,
    today: date | None = None,
) -> list[dict[str, Any]]:
    """Fetch the filtered options chain snapshot for query.ticker in one request."""
    data = _get(settings, f"/v3/snapshot/options/{quote(query.ticker, safe='')}", _window_params(query, today))
    results = data.get("results") or []
    snapshots = [r for r in results if isinstance(r, dict)]
    logger.info(f"Polygon returned {len(snapshots)} chain snapshots for {query.ticker}")
    return snapshots


def fetch_contract_tickers(
    settings: Settings,
    query: ContractQuery,
    *,
    today: date | None = None,
) -> list[str]:
    """List option contract tickers (e.g. 'O:AAPL251219C00150000') matching the query."""
    params = _window_params(query, today)
    params["underlying_ticker"] = query.ticker
    data = _get(settings, "/v3/reference/options/contracts", params)

    tickers = []
    for contract in data.get("results") or []:
        if isinstance(contract, dict) and isinstance(contract.get("ticker"), str):
            tickers.append(contract["ticker"])
    logger.info(f"Polygon listed {len(tickers)} contracts for {query.ticker}")
    return tickers


def fetch_contract_snapshot(
    settings: Settings,
    api_key: str,
    underlying: str,
    option_ticker: str,
) -> dict[str, Any] | None:
    """Snapshot of a single option contract, or None when Polygon has no results."""
    path = f"/v3/snapshot/options/{quote(underlying, safe='')}/{quote(option_ticker, safe='')}"
    data = _get(settings, path, {"apiKey": api_key})
    results = data.get("results")
    return results if isinstance(results, dict) else None


def fetch_contract_details(
    settings: Settings,
    query: ContractQuery,
    *,
    today: date | None = None,
) -> list[dict[str, Any]]:
    """
    Two-stage lookup: list matching contracts, then snapshot each one.

    A contract whose snapshot fails or comes back empty is skipped.
    """
    snapshots: list[dict[str, Any]] = []
    for option_ticker in fetch_contract_tickers(settings, query, today=today):
        try:
            snap = fetch_contract_snapshot(settings, query.api_key, query.ticker, option_ticker)
        except PolygonError as e:
            logger.warning(f"Skipping {option_ticker}: {e}")
            continue
        if snap is None:
            logger.info(f"No snapshot data for {option_ticker}")
            continue
        snapshots.append(snap)
    return snapshots
