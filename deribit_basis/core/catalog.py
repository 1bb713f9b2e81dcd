"""Build the ordered list of instruments shown by the monitor."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable

from ..contracts.interface import MarketDataSource
from ..models.shared import Currency, Instrument, InstrumentKind
from .errors import MalformedPayloadError, MarketDataError

logger = logging.getLogger(__name__)


def order_instruments(instruments: Iterable[Instrument]) -> list[Instrument]:
    """Return instruments sorted by expiration with the perpetual first.

    The perpetual carries the longest expiration of the set; it is flagged
    and moved to the front, everything else stays in ascending order.
    """

    ordered = sorted(instruments, key=lambda item: item.expiration_timestamp)
    if not ordered:
        return []
    perpetual = dataclasses.replace(ordered[-1], perpetual=True)
    return [perpetual, *ordered[:-1]]


def list_instruments(
    source: MarketDataSource,
    currency: Currency = Currency.BTC,
    kind: InstrumentKind = InstrumentKind.FUTURE,
) -> list[Instrument]:
    """Fetch and order the active instruments; any fetch failure yields ``[]``."""

    try:
        instruments = source.get_instruments(currency, kind)
    except MalformedPayloadError as exc:
        logger.error("Malformed instrument listing for %s %s: %s", currency, kind, exc)
        return []
    except MarketDataError as exc:
        logger.error("Could not list %s %s instruments: %s", currency, kind, exc)
        return []
    ordered = order_instruments(instruments)
    logger.info("Loaded %d %s %s instruments", len(ordered), currency, kind)
    return ordered
