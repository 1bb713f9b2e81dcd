"""Command line entry point for the basis monitor."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

from rich.console import Console
from rich.logging import RichHandler

from .core.catalog import list_instruments
from .core.config import MonitorSettings
from .exchanges.deribit import DeribitDataSource
from .render.base import Presenter
from .render.batch import BatchPresenter
from .render.live import LivePresenter

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="deribit-basis",
        description="Show premium and annualized yield of Deribit BTC futures.",
    )
    parser.add_argument("--once", action="store_true", help="print the table once and exit")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging threshold (default: WARNING)",
    )
    parser.add_argument("--log-file", metavar="PATH", help="write logs to PATH instead of the console")
    return parser


def configure_logging(level: str, console: Console, log_file: str | None = None) -> None:
    if log_file:
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    else:
        handler = RichHandler(console=console, show_path=False)
    logging.basicConfig(level=level, handlers=[handler], force=True)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = MonitorSettings()
    console = Console(stderr=True) if args.once else Console()
    configure_logging(args.log_level, console, args.log_file)

    with DeribitDataSource(base_url=settings.base_url, timeout=settings.timeout) as source:
        instruments = list_instruments(source, settings.currency, settings.kind)
        presenter: Presenter
        if args.once:
            presenter = BatchPresenter(source)
        else:
            presenter = LivePresenter(source, settings, console=console)
        return presenter.run(instruments)
