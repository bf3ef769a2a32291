"""
OCC option symbol parser.

Handles both forms Polygon hands out:
- Bare OCC: "AAPL251219C00150000"
- Prefixed: "O:AAPL251219C00150000"
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class OccSymbol:
    underlying: str
    expiry: date
    opt_type: str  # "call" or "put"
    strike: float


def parse_occ_symbol(symbol: str) -> OccSymbol:
    """
    Parse an OCC-style option symbol.

    Args:
        symbol: e.g. "O:SPY250117C00600000" or "SPY250117C00600000"

    Returns:
        OccSymbol with underlying, expiry, type and strike.

    Raises:
        ValueError: If symbol cannot be parsed
    """
    raw = symbol.strip()
    if raw.startswith("O:"):
        raw = raw[2:]

    # Underlying runs until the first digit (YYMMDD)
    idx = 0
    while idx < len(raw) and not raw[idx].isdigit():
        idx += 1
    underlying = raw[:idx]
    option_part = raw[idx:]

    if not underlying:
        raise ValueError(f"Symbol {symbol} has no underlying ticker.")
    if len(option_part) != 15:
        raise ValueError(f"Symbol {symbol} is not OCC-style (YYMMDD+C/P+8 strike).")

    date_code = option_part[:6]
    cp_code = option_part[6].upper()
    strike_code = option_part[7:15]

    if cp_code == "C":
        opt_type = "call"
    elif cp_code == "P":
        opt_type = "put"
    else:
        raise ValueError(f"Unknown call/put code '{option_part[6]}' in symbol {symbol}.")

    if not (date_code.isdigit() and strike_code.isdigit()):
        raise ValueError(f"Symbol {symbol} has a malformed date or strike.")

    expiry = date(2000 + int(date_code[0:2]), int(date_code[2:4]), int(date_code[4:6]))
    # Strike is in 1000ths (00600000 = 600.000)
    strike = int(strike_code) / 1000.0
    return OccSymbol(underlying=underlying, expiry=expiry, opt_type=opt_type, strike=strike)


def underlying_of(symbol: str) -> str:
    """Return the underlying ticker of an OCC option symbol."""
    return parse_occ_symbol(symbol).underlying
