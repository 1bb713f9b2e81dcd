"""Per-instrument polling threads feeding a :class:`SnapshotBook`."""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence

from ..contracts.interface import MarketDataSource
from ..models.shared import Instrument
from .config import POLL_INTERVAL
from .errors import MalformedPayloadError, MarketDataError
from .state import FeedStatus, SnapshotBook

logger = logging.getLogger(__name__)


def poll_once(source: MarketDataSource, book: SnapshotBook, instrument: Instrument) -> FeedStatus:
    """Fetch one ticker into ``book``; failures are logged, never raised."""

    try:
        snapshot = source.get_ticker(instrument.name)
    except MalformedPayloadError as exc:
        logger.warning("Malformed ticker payload for %s: %s", instrument.name, exc)
        book.record_failure(instrument, FeedStatus.MALFORMED)
        return FeedStatus.MALFORMED
    except MarketDataError as exc:
        logger.info("No ticker update for %s: %s", instrument.name, exc)
        book.record_failure(instrument, FeedStatus.STALE)
        return FeedStatus.STALE
    book.update(instrument, snapshot)
    return FeedStatus.OK


class TickerPoller(threading.Thread):
    """Polls one instrument every ``interval`` seconds until ``stop_event`` is set."""

    def __init__(
        self,
        source: MarketDataSource,
        book: SnapshotBook,
        instrument: Instrument,
        stop_event: threading.Event,
        interval: float = POLL_INTERVAL,
    ) -> None:
        super().__init__(name=f"poller-{instrument.name}", daemon=True)
        self._source = source
        self._book = book
        self._instrument = instrument
        self._stop_event = stop_event
        self._interval = interval

    def run(self) -> None:
        while not self._stop_event.is_set():
            poll_once(self._source, self._book, self._instrument)
            self._stop_event.wait(self._interval)
        logger.debug("Poller for %s stopped", self._instrument.name)


class PollerGroup:
    """Starts one :class:`TickerPoller` per instrument and stops them together."""

    def __init__(
        self,
        source: MarketDataSource,
        book: SnapshotBook,
        instruments: Sequence[Instrument],
        *,
        interval: float = POLL_INTERVAL,
    ) -> None:
        self._stop_event = threading.Event()
        self._pollers = [
            TickerPoller(source, book, instrument, self._stop_event, interval)
            for instrument in instruments
        ]

    def __enter__(self) -> PollerGroup:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def start(self) -> None:
        for poller in self._pollers:
            poller.start()
        logger.info("Started %d pollers", len(self._pollers))

    def stop(self) -> None:
        self._stop_event.set()

    def join(self, timeout: float | None = None) -> bool:
        """Wait for every poller to exit; returns ``True`` when all did."""

        for poller in self._pollers:
            if poller.is_alive():
                poller.join(timeout)
        return not any(poller.is_alive() for poller in self._pollers)
