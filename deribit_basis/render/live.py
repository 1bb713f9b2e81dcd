"""Full-screen presenter redrawn at a fixed frame rate while pollers run."""

from __future__ import annotations

import logging
import sys
import threading
from collections.abc import Callable, Sequence

from rich import box
from rich.console import Console
from rich.errors import LiveError
from rich.live import Live
from rich.padding import Padding
from rich.table import Table

from ..contracts.interface import MarketDataSource
from ..core.config import MonitorSettings
from ..core.poller import PollerGroup
from ..core.state import FeedStatus, SnapshotBook
from ..core.yields import compute_yield, now_ms, tenor
from ..models.shared import Instrument
from .rows import EMPTY_MESSAGE, format_annualized, format_premium, name_width

logger = logging.getLogger(__name__)

# top, right, bottom, left
MARGIN = (1, 2, 0, 2)


def build_table(
    instruments: Sequence[Instrument],
    book: SnapshotBook,
    now: int,
    *,
    title: str | None = None,
) -> Table:
    """Build one frame of the table from the latest snapshots in ``book``."""

    table = Table(box=box.SIMPLE, show_header=True, padding=(0, 1), title=title)
    table.add_column("Instrument", style="cyan", min_width=name_width(instruments), no_wrap=True)
    table.add_column("Premium", justify="right", no_wrap=True)
    table.add_column("Ann. yield", justify="right", no_wrap=True)
    table.add_column("Tenor", justify="right", no_wrap=True)
    table.add_column("", style="dim", no_wrap=True)
    if not instruments:
        table.caption = EMPTY_MESSAGE
        return table

    for instrument in instruments:
        snapshot, status = book.read(instrument)
        result = compute_yield(instrument, snapshot, now)
        note = "" if status is FeedStatus.OK else status.value
        if instrument.perpetual:
            table.add_row(instrument.name, format_premium(result.premium), "", "", note)
        else:
            table.add_row(
                instrument.name,
                format_premium(result.premium),
                format_annualized(result.annualized_yield),
                tenor(result.ms_to_expiration),
                note,
            )
    return table


class LivePresenter:
    """Starts one poller per instrument and redraws until interrupted."""

    def __init__(
        self,
        source: MarketDataSource,
        settings: MonitorSettings | None = None,
        *,
        console: Console | None = None,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self._source = source
        self._settings = settings or MonitorSettings()
        self._console = console or Console()
        self._clock = clock
        self._stop_event = threading.Event()
        self.book = SnapshotBook()

    def stop(self) -> None:
        """Ask the render loop to exit after the current frame."""

        self._stop_event.set()

    def run(self, instruments: Sequence[Instrument]) -> int:
        title = f"{self._settings.currency} futures premium"
        live = Live(
            self._frame(instruments, title),
            console=self._console,
            screen=True,
            refresh_per_second=self._settings.refresh_per_second,
        )
        try:
            live.start(refresh=True)
        except (LiveError, OSError) as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1

        group = PollerGroup(
            self._source,
            self.book,
            instruments,
            interval=self._settings.poll_interval,
        )
        try:
            group.start()
            while not self._stop_event.wait(self._settings.frame_interval):
                live.update(self._frame(instruments, title))
        except KeyboardInterrupt:
            logger.info("Interrupted, shutting down")
        finally:
            group.stop()
            live.stop()
        return 0

    def _frame(self, instruments: Sequence[Instrument], title: str) -> Padding:
        return Padding(build_table(instruments, self.book, self._clock(), title=title), MARGIN)
