"""
Request and response records for option contract lookups.

ContractQuery is the validated form of the loosely-typed request
parameters; OptionContract is one row of the function's output.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from typing import Mapping

from optionfetch.config import QueryDefaults, Settings
from optionfetch.utils.dates import expiration_window

# contract_type values meaning "no filter"
ANY_CONTRACT_TYPE = {"", "all", "both", "any"}


class InvalidQueryError(ValueError):
    """Raised when request parameters cannot be turned into a query."""


def _parse_int(raw: str | None, default: int) -> int:
    if raw is None:
        return default
    try:
        return int(str(raw).strip())
    except ValueError:
        return default


@dataclass(frozen=True)
class ContractQuery:
    ticker: str
    api_key: str
    limit: int
    days_forward: int
    contract_type: str | None  # "call", "put", or None for both

    def expiration_window(self, today: date | None = None) -> tuple[date, date]:
        return expiration_window(self.days_forward, today)

    @classmethod
    def from_params(
        cls,
        raw: Mapping[str, str],
        settings: Settings,
        *,
        defaults: QueryDefaults | None = None,
        lookup: str = "chain",
    ) -> "ContractQuery":
        """
        Apply defaults and validation to raw request parameters.

        Unparseable limit/days_forward fall back to their defaults rather
        than failing the request. An unknown contract_type is an error.
        """
        d = defaults or QueryDefaults()

        ticker = (raw.get("ticker_symbol") or d.ticker).strip().upper()
        if not ticker:
            ticker = d.ticker

        api_key = raw.get("api_key") or settings.polygon_api_key or d.api_key

        max_limit = d.max_reference_limit if lookup == "details" else d.max_chain_limit
        limit = min(max(_parse_int(raw.get("limit"), d.limit), 1), max_limit)

        days_forward = _parse_int(raw.get("days_forward"), d.days_forward)
        if days_forward < 0:
            days_forward = d.days_forward
        days_forward = min(days_forward, d.max_days_forward)

        ct = raw.get("contract_type")
        ct = (d.contract_type if ct is None else ct).strip().lower()
        if ct in ANY_CONTRACT_TYPE:
            contract_type = None
        elif ct in ("call", "put"):
            contract_type = ct
        else:
            raise InvalidQueryError(f"contract_type must be 'call', 'put' or 'all', got {ct!r}")

        return cls(
            ticker=ticker,
            api_key=api_key,
            limit=limit,
            days_forward=days_forward,
            contract_type=contract_type,
        )


@dataclass(frozen=True)
class OptionContract:
    contract_type: str
    expiration_date: str
    implied_volatility: str
    open_interest: str
    premium: str
    strike_price: str
    ticker: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)
