"""Premium and yield arithmetic."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass

from ..models.shared import Instrument, TickerSnapshot

MS_PER_MINUTE = 1000 * 60
MS_PER_HOUR = MS_PER_MINUTE * 60
MS_PER_DAY = MS_PER_HOUR * 24
MS_PER_YEAR = MS_PER_DAY * 365


@dataclass(frozen=True, slots=True)
class YieldResult:
    """Derived figures for one row. ``None`` marks an undefined value."""

    premium: float | None
    yield_: float | None
    annualized_yield: float | None
    ms_to_expiration: int


def now_ms() -> int:
    return int(time.time() * 1000)


def compute_yield(instrument: Instrument, snapshot: TickerSnapshot, now: int) -> YieldResult:
    """Compute premium, yield and annualized yield at wall-clock ``now`` (ms)."""

    ms_to_expiration = instrument.expiration_timestamp - now
    if snapshot.is_empty:
        return YieldResult(0.0, 0.0, 0.0, ms_to_expiration)

    premium = snapshot.mark_price - snapshot.index_price
    if snapshot.index_price == 0:
        return YieldResult(_finite(premium), None, None, ms_to_expiration)

    yield_ = _finite(premium / snapshot.index_price)
    annualized = None
    if yield_ is not None and not instrument.perpetual and ms_to_expiration > 0:
        annualized = _finite(yield_ / (ms_to_expiration / MS_PER_YEAR))
    return YieldResult(_finite(premium), yield_, annualized, ms_to_expiration)


def tenor(ms: int) -> str:
    """Render a duration as ``"  2d  3h 45m"``; negative durations clamp to zero."""

    ms = max(ms, 0)
    days = ms // MS_PER_DAY
    hours = (ms // MS_PER_HOUR) % 24
    minutes = (ms // MS_PER_MINUTE) % 60
    return f"{days:3d}d {hours:2d}h {minutes:2d}m"


def _finite(value: float) -> float | None:
    return value if math.isfinite(value) else None
