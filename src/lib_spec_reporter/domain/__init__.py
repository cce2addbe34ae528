"""Domain entities and value objects used by the spec reporter."""

from __future__ import annotations

from .events import EventDecodeError, EventType, ReportData, ReportEvent, ReportedError, decode_event, decode_line
from .execution import COUNTER_NAMES, ExecutionContext, FailureRecord
from .failures import FailureExplanation, FailureType, explain_failure

__all__ = [
    "COUNTER_NAMES",
    "EventDecodeError",
    "EventType",
    "ExecutionContext",
    "FailureExplanation",
    "FailureRecord",
    "FailureType",
    "ReportData",
    "ReportEvent",
    "ReportedError",
    "decode_event",
    "decode_line",
    "explain_failure",
]
