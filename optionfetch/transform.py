"""
Map Polygon option snapshots to the function's output records.
"""
from __future__ import annotations

import json
from typing import Any, Iterable

from optionfetch.models import OptionContract
from optionfetch.utils.formatting import fmt_count, fmt_float, fmt_number, fmt_pct, fmt_text


def _section(snapshot: dict[str, Any], key: str) -> dict[str, Any]:
    value = snapshot.get(key)
    return value if isinstance(value, dict) else {}


def format_contract(snapshot: dict[str, Any]) -> OptionContract:
    details = _section(snapshot, "details")
    last_quote = _section(snapshot, "last_quote")
    return OptionContract(
        contract_type=fmt_text(details.get("contract_type")),
        expiration_date=fmt_text(details.get("expiration_date")),
        implied_volatility=fmt_pct(snapshot.get("implied_volatility")),
        open_interest=fmt_count(snapshot.get("open_interest")),
        premium=fmt_float(last_quote.get("midpoint")),
        strike_price=fmt_number(details.get("strike_price")),
        ticker=fmt_text(details.get("ticker")),
    )


def format_contracts(snapshots: Iterable[Any]) -> list[OptionContract]:
    """Format every snapshot, skipping null or malformed entries."""
    return [format_contract(s) for s in snapshots if isinstance(s, dict)]


def render_response(contracts: Iterable[OptionContract], error: str | None = None) -> str:
    body: dict[str, Any] = {"option_contracts": [c.to_dict() for c in contracts]}
    if error:
        body["error"] = error
    return json.dumps(body, separators=(",", ":"))
