"""Core utilities: catalog building, yield arithmetic, shared state and polling."""

from __future__ import annotations

from importlib import import_module
from typing import Any

__all__ = [
    "MonitorSettings",
    "order_instruments",
    "list_instruments",
    "compute_yield",
    "tenor",
    "YieldResult",
    "SnapshotBook",
    "FeedStatus",
    "PollerGroup",
    "MarketDataError",
    "ExchangeTransientError",
    "MalformedPayloadError",
]

_lazy_targets = {
    "MonitorSettings": ("config", "MonitorSettings"),
    "order_instruments": ("catalog", "order_instruments"),
    "list_instruments": ("catalog", "list_instruments"),
    "compute_yield": ("yields", "compute_yield"),
    "tenor": ("yields", "tenor"),
    "YieldResult": ("yields", "YieldResult"),
    "SnapshotBook": ("state", "SnapshotBook"),
    "FeedStatus": ("state", "FeedStatus"),
    "PollerGroup": ("poller", "PollerGroup"),
    "MarketDataError": ("errors", "MarketDataError"),
    "ExchangeTransientError": ("errors", "ExchangeTransientError"),
    "MalformedPayloadError": ("errors", "MalformedPayloadError"),
}


def __getattr__(name: str) -> Any:
    try:
        module_name, attr_name = _lazy_targets[name]
    except KeyError as exc:
        raise AttributeError(f"module 'deribit_basis.core' has no attribute {name!r}") from exc
    module = import_module(f"{__name__}.{module_name}")
    value = getattr(module, attr_name)
    globals()[name] = value
    return value
