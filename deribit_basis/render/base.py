"""Protocol shared by the one-shot and live presenters."""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from ..models.shared import Instrument


@runtime_checkable
class Presenter(Protocol):
    """Renders the basis table for a fixed, ordered set of instruments."""

    def run(self, instruments: Sequence[Instrument]) -> int:
        """Render until done and return the process exit status."""
