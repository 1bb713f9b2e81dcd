"""One-shot presenter: fetch every ticker once, print, exit."""

from __future__ import annotations

import sys
from collections.abc import Callable, Sequence
from typing import TextIO

from ..contracts.interface import MarketDataSource
from ..core.poller import poll_once
from ..core.state import SnapshotBook
from ..core.yields import now_ms
from ..models.shared import Instrument
from .rows import EMPTY_MESSAGE, render_lines


class BatchPresenter:
    """Sequentially polls each instrument once and prints the table."""

    def __init__(
        self,
        source: MarketDataSource,
        *,
        out: TextIO | None = None,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self._source = source
        self._out = out
        self._clock = clock
        self.book = SnapshotBook()

    def run(self, instruments: Sequence[Instrument]) -> int:
        out = self._out or sys.stdout
        if not instruments:
            print(EMPTY_MESSAGE, file=out)
            return 0
        for instrument in instruments:
            poll_once(self._source, self.book, instrument)
        for line in render_lines(instruments, self.book, self._clock()):
            print(line, file=out)
        return 0
