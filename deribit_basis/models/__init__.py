"""Domain models for the basis monitor."""

from .shared import Currency, Instrument, InstrumentKind, TickerSnapshot

__all__ = [
    "Currency",
    "Instrument",
    "InstrumentKind",
    "TickerSnapshot",
]
