"""Output port describing where formatted text goes.

Contents
--------
* :class:`OutputPort` - runtime-checkable protocol with ``write``/``flush``.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class OutputPort(Protocol):
    """Receive formatted report text in arrival order."""

    def write(self, text: str) -> None:
        """Append ``text`` to the output."""

    def flush(self) -> None:
        """Hand buffered text to the underlying stream."""


__all__ = ["OutputPort"]
