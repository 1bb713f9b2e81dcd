"""Shared helpers for manual provider-vs-CCXT comparisons."""
from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
import sys
from typing import Any

import ccxt  # type: ignore

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from deribit_basis.exchanges.deribit import DeribitDataSource
from deribit_basis.models.shared import Currency

CURRENCY = Currency.BTC


def make_ccxt() -> ccxt.Exchange:
    return ccxt.deribit({"enableRateLimit": True})


def make_source() -> DeribitDataSource:
    return DeribitDataSource()


def ccxt_futures_by_id(exchange: ccxt.Exchange, currency: str = CURRENCY.value) -> dict[str, dict[str, Any]]:
    """Return active inverse futures and swaps from CCXT keyed by exchange id."""

    exchange.load_markets()
    return {
        market["id"]: market
        for market in exchange.markets.values()
        if market.get("base") == currency
        and market.get("settle") == currency
        and (market.get("future") or market.get("swap"))
        and market.get("active", True)
    }


def iso_ms(ts_ms: int | float | None) -> str:
    if ts_ms is None:
        return "<missing>"
    try:
        return datetime.fromtimestamp(float(ts_ms) / 1000, tz=timezone.utc).isoformat()
    except (OverflowError, ValueError, OSError):
        return "<out of range>"
