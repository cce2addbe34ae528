"""Protocols the application layer depends on."""

from __future__ import annotations

from .palette import ROLES, PalettePort
from .sink import OutputPort

__all__ = ["OutputPort", "PalettePort", "ROLES"]
