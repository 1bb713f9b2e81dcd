"""Runtime settings for the monitor."""

from __future__ import annotations

from dataclasses import dataclass

from ..models.shared import Currency, InstrumentKind

BASE_URL = "https://www.deribit.com"
DEFAULT_TIMEOUT = 10.0
POLL_INTERVAL = 1.0
REFRESH_PER_SECOND = 10


@dataclass(frozen=True, slots=True)
class MonitorSettings:
    """Settings shared by the data source, pollers and live display."""

    base_url: str = BASE_URL
    currency: Currency = Currency.BTC
    kind: InstrumentKind = InstrumentKind.FUTURE
    timeout: float = DEFAULT_TIMEOUT
    poll_interval: float = POLL_INTERVAL
    refresh_per_second: int = REFRESH_PER_SECOND

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if self.poll_interval <= 0:
            raise ValueError("poll_interval must be positive")
        if self.refresh_per_second <= 0:
            raise ValueError("refresh_per_second must be a positive integer")

    @property
    def frame_interval(self) -> float:
        """Seconds between two redraws of the live table."""

        return 1.0 / self.refresh_per_second
