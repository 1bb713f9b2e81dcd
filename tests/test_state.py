from __future__ import annotations

import threading

import pytest

from deribit_basis.core.state import FeedStatus, SnapshotBook
from deribit_basis.models.shared import Instrument, TickerSnapshot

PERP = Instrument("BTC-PERPETUAL", 32503708800000, perpetual=True)
SEP = Instrument("BTC-27SEP", 1727424000000)


def test_missing_instrument_reads_empty_and_waiting():
    book = SnapshotBook()

    assert book.get(PERP) is TickerSnapshot.EMPTY
    assert book.status(PERP) is FeedStatus.WAITING
    assert len(book) == 0


def test_update_replaces_snapshot():
    book = SnapshotBook()
    book.update(SEP, TickerSnapshot(1.0, 2.0))
    book.update(SEP, TickerSnapshot(3.0, 4.0))

    assert book.read(SEP) == (TickerSnapshot(3.0, 4.0), FeedStatus.OK)
    assert book.items() == {SEP: TickerSnapshot(3.0, 4.0)}


def test_failure_keeps_previous_snapshot():
    book = SnapshotBook()
    book.update(SEP, TickerSnapshot(30500.0, 30000.0))

    book.record_failure(SEP, FeedStatus.MALFORMED)

    assert book.get(SEP) == TickerSnapshot(30500.0, 30000.0)
    assert book.status(SEP) is FeedStatus.MALFORMED


def test_record_failure_rejects_success_status():
    with pytest.raises(ValueError):
        SnapshotBook().record_failure(SEP, FeedStatus.OK)


def test_concurrent_writers_never_expose_mixed_snapshots():
    book = SnapshotBook()
    instruments = [Instrument(f"BTC-{i}", i) for i in range(8)]
    stop = threading.Event()
    errors: list[str] = []

    def writer(instrument: Instrument) -> None:
        value = 0
        while not stop.is_set():
            value += 1
            book.update(instrument, TickerSnapshot(float(value), float(value)))

    def reader() -> None:
        for _ in range(2_000):
            for instrument in instruments:
                snapshot = book.get(instrument)
                if snapshot.mark_price != snapshot.index_price:
                    errors.append(f"{instrument.name}: {snapshot}")

    threads = [threading.Thread(target=writer, args=(item,)) for item in instruments]
    for thread in threads:
        thread.start()
    try:
        reader()
    finally:
        stop.set()
        for thread in threads:
            thread.join()

    assert errors == []
    assert len(book) == len(instruments)
