"""Compare the instrument catalog against CCXT market definitions."""
from __future__ import annotations

import ccxt  # type: ignore

from compare_utils import CURRENCY, ccxt_futures_by_id, iso_ms, make_ccxt, make_source

from deribit_basis.core.catalog import list_instruments


def main() -> None:
    print(f"\n=== deribit {CURRENCY} instruments ===")
    with make_source() as source:
        ours = list_instruments(source, CURRENCY)
    for instrument in ours:
        flag = "perpetual" if instrument.perpetual else ""
        print("provider", instrument.name, iso_ms(instrument.expiration_timestamp), flag)

    exchange = make_ccxt()
    try:
        markets = ccxt_futures_by_id(exchange)
    except ccxt.BaseError as exc:
        print(f"ccxt error: {exc}")
        return
    for market_id, market in sorted(markets.items(), key=lambda item: item[1].get("expiry") or 0):
        print("ccxt", market_id, market.get("expiryDatetime") or "<perpetual>")

    names = {instrument.name for instrument in ours}
    print("only provider:", sorted(names - set(markets)))
    print("only ccxt:", sorted(set(markets) - names))


if __name__ == "__main__":  # pragma: no cover
    main()
