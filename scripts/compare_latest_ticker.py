"""Compare ticker snapshots against CCXT tickers."""
from __future__ import annotations

import sys
from typing import Iterable

import ccxt  # type: ignore

from compare_utils import ccxt_futures_by_id, make_ccxt, make_source

from deribit_basis.core.errors import MarketDataError


def main(targets: Iterable[str] | None = None) -> None:
    exchange = make_ccxt()
    try:
        markets = ccxt_futures_by_id(exchange)
    except ccxt.BaseError as exc:
        print(f"ccxt error: {exc}")
        return
    names = list(targets) if targets else sorted(markets)
    with make_source() as source:
        for name in names:
            print(f"\n=== {name} latest ticker ===")
            try:
                ticker = source.get_ticker(name)
                print("provider", f"mark={ticker.mark_price}", f"index={ticker.index_price}")
            except MarketDataError as exc:
                print(f"provider error: {exc}")

            market = markets.get(name)
            if market is None:
                print("ccxt: market not listed")
                continue
            try:
                info = exchange.fetch_ticker(market["symbol"]).get("info", {})
                print("ccxt", f"mark={info.get('mark_price')}", f"index={info.get('index_price')}")
            except ccxt.BaseError as exc:
                print(f"ccxt error: {exc}")


if __name__ == "__main__":  # pragma: no cover
    main(sys.argv[1:] or None)
