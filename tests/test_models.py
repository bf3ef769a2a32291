from __future__ import annotations

from datetime import date

import pytest

from optionfetch.models import ContractQuery, InvalidQueryError


def test_defaults_applied(settings):
    q = ContractQuery.from_params({}, settings)
    assert q.ticker == "AAPL"
    assert q.api_key == "env_key"
    assert q.limit == 10
    assert q.days_forward == 30
    assert q.contract_type == "call"


def test_placeholder_key_without_settings_key(settings):
    s = settings.model_copy(update={"POLYGON_API_KEY": None})
    assert ContractQuery.from_params({}, s).api_key == "YOUR_API_KEY"


def test_request_values_override(settings):
    q = ContractQuery.from_params(
        {"ticker_symbol": " tsla ", "api_key": "req_key", "limit": "25", "days_forward": "7", "contract_type": "PUT"},
        settings,
    )
    assert (q.ticker, q.api_key, q.limit, q.days_forward, q.contract_type) == ("TSLA", "req_key", 25, 7, "put")


def test_unparseable_numbers_fall_back(settings):
    q = ContractQuery.from_params({"limit": "lots", "days_forward": "soon"}, settings)
    assert q.limit == 10
    assert q.days_forward == 30
    assert ContractQuery.from_params({"days_forward": "-3"}, settings).days_forward == 30


def test_limit_clamped_per_lookup(settings):
    assert ContractQuery.from_params({"limit": "5000"}, settings).limit == 250
    assert ContractQuery.from_params({"limit": "5000"}, settings, lookup="details").limit == 1000
    assert ContractQuery.from_params({"limit": "0"}, settings).limit == 1


@pytest.mark.parametrize("raw", ["all", "both", "", "ANY"])
def test_contract_type_any(settings, raw):
    assert ContractQuery.from_params({"contract_type": raw}, settings).contract_type is None


def test_contract_type_invalid(settings):
    with pytest.raises(InvalidQueryError):
        ContractQuery.from_params({"contract_type": "straddle"}, settings)


def test_expiration_window(settings):
    q = ContractQuery.from_params({"days_forward": "30"}, settings)
    assert q.expiration_window(date(2026, 10, 19)) == (date(2026, 10, 19), date(2026, 11, 18))


def test_huge_days_forward_clamped(settings):
    q = ContractQuery.from_params({"days_forward": "99999999"}, settings)
    assert q.days_forward == 3650
    start, end = q.expiration_window(date(2026, 10, 19))
    assert (end - start).days == 3650
