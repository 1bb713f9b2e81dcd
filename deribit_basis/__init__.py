"""Deribit futures basis monitor.

This module exposes the public API: the market data source, the catalog
builder, the yield calculator, the shared snapshot store and the presenters.
"""

from .contracts.interface import MarketDataSource
from .core.catalog import list_instruments, order_instruments
from .core.config import MonitorSettings
from .core.errors import ExchangeTransientError, MalformedPayloadError, MarketDataError
from .core.poller import PollerGroup
from .core.state import FeedStatus, SnapshotBook
from .core.yields import YieldResult, compute_yield, tenor
from .exchanges.deribit import DeribitDataSource
from .models.shared import Currency, Instrument, InstrumentKind, TickerSnapshot
from .render import BatchPresenter, LivePresenter, Presenter

__all__ = [
    "MarketDataSource",
    "DeribitDataSource",
    "MonitorSettings",
    "list_instruments",
    "order_instruments",
    "compute_yield",
    "tenor",
    "YieldResult",
    "SnapshotBook",
    "FeedStatus",
    "PollerGroup",
    "Presenter",
    "BatchPresenter",
    "LivePresenter",
    "Currency",
    "Instrument",
    "InstrumentKind",
    "TickerSnapshot",
    "MarketDataError",
    "ExchangeTransientError",
    "MalformedPayloadError",
]
