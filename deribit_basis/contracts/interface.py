"""Protocol describing a futures market data source."""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from ..models.shared import Currency, Instrument, InstrumentKind, TickerSnapshot


@runtime_checkable
class MarketDataSource(Protocol):
    """Data source serving instrument listings and ticker snapshots."""

    def get_instruments(self, currency: Currency, kind: InstrumentKind) -> Sequence[Instrument]:
        """Return the active instruments of ``kind`` settled in ``currency``."""

    def get_ticker(self, instrument_name: str) -> TickerSnapshot:
        """Return the latest mark/index price snapshot for one instrument."""

    def close(self) -> None:
        """Release any underlying network resources."""
