"""Palette port describing the colour table handed to the formatter.

Purpose
-------
Let the formatter and its helpers colour text without consulting process-wide
state: colour support is resolved once at construction and passed in as a
value object satisfying this protocol.

Contents
--------
* :class:`PalettePort` - ``enabled`` flag plus ``paint(text, role)``.
* :data:`ROLES` - the style roles the formatter paints with.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

ROLES: tuple[str, ...] = (
    "pass",
    "fail",
    "skip",
    "diagnostic",
    "info",
    "muted",
    "emphasis",
)


@runtime_checkable
class PalettePort(Protocol):
    """Colour table resolved once per formatter."""

    @property
    def enabled(self) -> bool:
        """Return ``True`` when ANSI colour output is active."""

    def paint(self, text: str, role: str) -> str:
        """Return ``text`` wrapped in the escape codes configured for ``role``."""


__all__ = ["PalettePort", "ROLES"]
