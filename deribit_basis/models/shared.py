"""Domain models shared by the data source, calculator and renderers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import ClassVar


class Currency(StrEnum):
    """Settlement currencies listed by Deribit."""

    BTC = "BTC"
    ETH = "ETH"


class InstrumentKind(StrEnum):
    """Instrument kinds accepted by ``get_instruments``."""

    FUTURE = "future"
    OPTION = "option"


@dataclass(frozen=True, slots=True)
class Instrument:
    """A listed futures contract.

    ``expiration_timestamp`` is in milliseconds. Deribit lists the perpetual
    with an expiration far beyond every dated future; the catalog builder
    flags it through ``perpetual``.
    """

    name: str
    expiration_timestamp: int
    perpetual: bool = False

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Instrument name must be a non-empty string.")


@dataclass(frozen=True, slots=True)
class TickerSnapshot:
    """Mark and index price of one instrument at one poll."""

    EMPTY: ClassVar[TickerSnapshot]

    mark_price: float = 0.0
    index_price: float = 0.0

    @property
    def is_empty(self) -> bool:
        return self.mark_price == 0.0 and self.index_price == 0.0


TickerSnapshot.EMPTY = TickerSnapshot()
