"""Public package surface of the spec reporter.

The stream formatter consumes test-runner lifecycle events one at a time and
returns indented, optionally coloured progress text plus a final summary.
"""

from __future__ import annotations

from .application.use_cases import StreamFormatter
from .domain import EventDecodeError, ReportEvent, decode_event, decode_line
from .domain.rendering import format_duration, nice_join, pluralize
from .runtime import ReporterConfig, create_formatter, report_events, report_lines

__all__ = [
    "EventDecodeError",
    "ReportEvent",
    "ReporterConfig",
    "StreamFormatter",
    "create_formatter",
    "decode_event",
    "decode_line",
    "format_duration",
    "nice_join",
    "pluralize",
    "report_events",
    "report_lines",
]
