import logging
from datetime import date

from optionfetch.utils.logging import log_event, mask_secret


def test_mask_secret():
    assert mask_secret("abcdef123456") == "********3456"
    assert mask_secret("abc") == "***"
    assert mask_secret(None) == ""


def test_log_event_renders_json(capsys, caplog):
    caplog.set_level(logging.INFO)
    log_event("optionfetch.query", {"ticker_symbol": "AAPL", "limit": 10, "expiration_date.lte": date(2026, 11, 18)})
    out = capsys.readouterr().out
    assert "optionfetch.query" in out
    assert '"ticker_symbol": "AAPL"' in out
    assert '"expiration_date.lte": "2026-11-18"' in out


def test_log_event_respects_level(capsys, caplog):
    caplog.set_level(logging.WARNING)
    log_event("optionfetch.query", {"ticker_symbol": "AAPL"})
    assert capsys.readouterr().out == ""
