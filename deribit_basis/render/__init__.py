"""Presentation strategies for the basis table."""

from .base import Presenter
from .batch import BatchPresenter
from .live import LivePresenter
from .rows import format_row, render_lines

__all__ = [
    "Presenter",
    "BatchPresenter",
    "LivePresenter",
    "format_row",
    "render_lines",
]
