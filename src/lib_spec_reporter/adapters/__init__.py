"""Adapters implementing the application ports."""

from __future__ import annotations

from .palette import PALETTE_THEMES, RichPalette, detect_color_support
from .sink import BufferSink, TextStreamSink

__all__ = ["BufferSink", "PALETTE_THEMES", "RichPalette", "TextStreamSink", "detect_color_support"]
