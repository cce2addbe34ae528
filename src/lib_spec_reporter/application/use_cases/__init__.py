"""Use cases: the stream formatter, its summary, and the report driver."""

from __future__ import annotations

from .format_stream import StreamFormatter
from .report_stream import create_report_stream
from .summary import NO_TESTS_MESSAGE, render_summary

__all__ = ["NO_TESTS_MESSAGE", "StreamFormatter", "create_report_stream", "render_summary"]
