"""
Lambda entry point.

Handler: optionfetch.handler.lambda_handler

Returns {"req_id": ..., "response": "<json>"} where the JSON body is
{"option_contracts": [...]} plus an "error" key when the lookup failed.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any

from optionfetch.config import LOOKUP_MODES, Settings, load_settings
from optionfetch.data.polygon import PolygonError, fetch_chain_snapshot, fetch_contract_details
from optionfetch.events import extract_request
from optionfetch.models import ContractQuery, InvalidQueryError, OptionContract
from optionfetch.transform import format_contracts, render_response
from optionfetch.utils.logging import configure_logging, log_event, mask_secret

logger = logging.getLogger(__name__)


def fetch_option_contracts(
    query: ContractQuery,
    settings: Settings,
    *,
    lookup: str | None = None,
    today: date | None = None,
) -> list[OptionContract]:
    """Fetch and format contracts for a validated query."""
    mode = (lookup or settings.lookup_mode).strip().lower()
    if mode not in LOOKUP_MODES:
        raise InvalidQueryError(f"Unknown lookup mode {mode!r}; expected one of {', '.join(LOOKUP_MODES)}")

    if mode == "details":
        snapshots = fetch_contract_details(settings, query, today=today)
    else:
        snapshots = fetch_chain_snapshot(settings, query, today=today)
    return format_contracts(snapshots)


def lambda_handler(event: Any, context: Any = None, *, settings: Settings | None = None) -> dict[str, str]:
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    params, request_id = extract_request(event, context)
    logger.info(f"Request {request_id}: received parameters {sorted(params)}")

    contracts: list[OptionContract] = []
    error: str | None = None
    try:
        query = ContractQuery.from_params(params, settings, lookup=settings.lookup_mode)
        first_expiry, last_expiry = query.expiration_window()
        log_event(
            "optionfetch.query",
            {
                "req_id": request_id,
                "ticker_symbol": query.ticker,
                "api_key": mask_secret(query.api_key),
                "limit": query.limit,
                "days_forward": query.days_forward,
                "expiration_date.gte": first_expiry,
                "expiration_date.lte": last_expiry,
                "contract_type": query.contract_type or "all",
                "lookup": settings.lookup_mode,
            },
        )
        contracts = fetch_option_contracts(query, settings)
    except InvalidQueryError as e:
        logger.error(f"Request {request_id}: invalid parameters: {e}")
        error = str(e)
    except PolygonError as e:
        logger.error(f"Request {request_id}: {e}")
        error = str(e)

    logger.info(f"Request {request_id}: returning {len(contracts)} contracts")
    return {"req_id": request_id, "response": render_response(contracts, error)}
