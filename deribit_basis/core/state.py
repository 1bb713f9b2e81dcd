"""Thread-safe store of the latest ticker snapshot per instrument."""

from __future__ import annotations

import threading
from enum import StrEnum

from ..models.shared import Instrument, TickerSnapshot


class FeedStatus(StrEnum):
    """Outcome of the most recent poll of an instrument."""

    WAITING = "waiting"
    OK = "ok"
    STALE = "stale"
    MALFORMED = "bad payload"


class SnapshotBook:
    """Owns the instrument -> snapshot mapping.

    Writers are the polling threads, the reader is the renderer. Every access
    goes through one lock and snapshots are immutable, so a reader sees either
    the previous or the next snapshot of an instrument, never a mix.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._snapshots: dict[Instrument, TickerSnapshot] = {}
        self._status: dict[Instrument, FeedStatus] = {}

    def update(self, instrument: Instrument, snapshot: TickerSnapshot) -> None:
        with self._lock:
            self._snapshots[instrument] = snapshot
            self._status[instrument] = FeedStatus.OK

    def record_failure(self, instrument: Instrument, status: FeedStatus) -> None:
        """Flag the last poll as failed; the previous snapshot stays visible."""

        if status in (FeedStatus.OK, FeedStatus.WAITING):
            raise ValueError(f"{status!r} is not a failure status")
        with self._lock:
            self._status[instrument] = status

    def get(self, instrument: Instrument) -> TickerSnapshot:
        with self._lock:
            return self._snapshots.get(instrument, TickerSnapshot.EMPTY)

    def status(self, instrument: Instrument) -> FeedStatus:
        with self._lock:
            return self._status.get(instrument, FeedStatus.WAITING)

    def read(self, instrument: Instrument) -> tuple[TickerSnapshot, FeedStatus]:
        """Return snapshot and status of one instrument under a single lock."""

        with self._lock:
            return (
                self._snapshots.get(instrument, TickerSnapshot.EMPTY),
                self._status.get(instrument, FeedStatus.WAITING),
            )

    def items(self) -> dict[Instrument, TickerSnapshot]:
        with self._lock:
            return dict(self._snapshots)

    def __len__(self) -> int:
        with self._lock:
            return len(self._snapshots)
