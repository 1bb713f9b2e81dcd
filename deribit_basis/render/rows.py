"""Fixed-width text formatting of table rows."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from ..core.state import SnapshotBook
from ..core.yields import YieldResult, compute_yield, tenor
from ..models.shared import Instrument

NAME_WIDTH = 13
PREMIUM_WIDTH = 8
YIELD_WIDTH = 6
NOT_AVAILABLE = "N/A"
EMPTY_MESSAGE = "No instruments available."


def name_width(instruments: Iterable[Instrument]) -> int:
    """Width of the name column; stable for a given catalog."""

    return max([NAME_WIDTH, *(len(item.name) for item in instruments)])


def format_premium(value: float | None) -> str:
    if value is None:
        return f"{NOT_AVAILABLE:>{PREMIUM_WIDTH}}"
    return f"{value:{PREMIUM_WIDTH}.2f}"


def format_annualized(value: float | None) -> str:
    if value is None:
        return f"{NOT_AVAILABLE:>{YIELD_WIDTH}}"
    return f"{value * 100:5.2f}%"


def format_row(instrument: Instrument, result: YieldResult, width: int = NAME_WIDTH) -> str:
    """Perpetual rows show name and premium; dated rows add yield and tenor."""

    head = f"{instrument.name:<{width}} {format_premium(result.premium)}"
    if instrument.perpetual:
        return head
    return f"{head} {format_annualized(result.annualized_yield)} {tenor(result.ms_to_expiration)}"


def render_lines(instruments: Sequence[Instrument], book: SnapshotBook, now: int) -> list[str]:
    width = name_width(instruments)
    return [
        format_row(instrument, compute_yield(instrument, book.get(instrument), now), width)
        for instrument in instruments
    ]
