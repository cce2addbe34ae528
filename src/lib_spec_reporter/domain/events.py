"""Domain events describing the lifecycle of a test run.

Purpose
-------
Provide immutable, typed representations of the events emitted by an external
test runner, plus the decoder that shapes raw ``{type, data}`` payloads into
those records.

Contents
--------
* :class:`EventType` enum of recognised event kinds.
* :class:`ReportedError`, :class:`ReportData`, :class:`ReportEvent` dataclasses.
* :func:`decode_event` / :func:`decode_line` - the structural event decoder.
* :class:`EventDecodeError` raised for malformed payloads.

System Role
-----------
Sits in the domain layer. The decoder is purely structural and holds no
state; the stream formatter consumes the records it produces.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


class EventDecodeError(ValueError):
    """Raised when a raw payload cannot be shaped into a :class:`ReportEvent`."""


class EventType(Enum):
    """Event kinds emitted by the upstream test runner."""

    ENQUEUE = "test:enqueue"
    START = "test:start"
    PASS = "test:pass"
    FAIL = "test:fail"
    DIAGNOSTIC = "test:diagnostic"
    STDOUT = "test:stdout"
    STDERR = "test:stderr"
    SUMMARY = "test:summary"

    @classmethod
    def from_wire(cls, value: Any) -> "EventType | None":
        """Return the member for ``value`` or ``None`` when it is not recognised.

        Examples
        --------
        >>> EventType.from_wire("test:pass") is EventType.PASS
        True
        >>> EventType.from_wire("test:coverage") is None
        True
        """
        try:
            return cls(value)
        except ValueError:
            return None


ErrorCause = Union["ReportedError", str, None]


@dataclass(slots=True, frozen=True)
class ReportedError:
    """Structured error attached to a failed test.

    Attributes
    ----------
    message:
        Human readable error message.
    code:
        Optional machine code (``ERR_TEST_FAILURE`` for runner-wrapped errors).
    failure_type:
        Optional runner classification (``testCodeFailure``, ``hookFailed`` ...).
    cause:
        Next link of the cause chain: another error, a plain string, or ``None``.
    stack:
        Optional stack trace; usually starts with ``<Name>: <message>``.
    """

    message: str
    code: str | None = None
    failure_type: str | None = None
    cause: ErrorCause = None
    stack: str | None = None

    @classmethod
    def from_value(cls, value: Any) -> ErrorCause:
        """Build an error (or string cause) from a decoded JSON value.

        Examples
        --------
        >>> err = ReportedError.from_value({"message": "outer", "cause": {"message": "inner"}})
        >>> err.cause.message
        'inner'
        >>> ReportedError.from_value("plain reason")
        'plain reason'
        """
        if value is None:
            return None
        if isinstance(value, str):
            return value
        if not isinstance(value, Mapping):
            return str(value)

        # Walk the chain first, then build it bottom-up so deep chains never recurse.
        links: list[Mapping[str, Any]] = []
        terminal: ErrorCause = None
        current: Any = value
        while True:
            if isinstance(current, Mapping):
                links.append(current)
                current = current.get("cause")
                continue
            terminal = None if current is None else str(current)
            break

        built: ErrorCause = terminal
        for link in reversed(links):
            message = link.get("message")
            built = cls(
                message="" if message is None else str(message),
                code=_optional_str(link.get("code")),
                failure_type=_optional_str(link.get("failureType")),
                cause=built,
                stack=_optional_str(link.get("stack")),
            )
        return built


@dataclass(slots=True, frozen=True)
class ReportData:
    """Payload carried by every :class:`ReportEvent`."""

    name: str = ""
    nesting: int = 0
    file: str | None = None
    line: int | None = None
    column: int | None = None
    message: str | None = None
    success: bool | None = None
    counts: dict[str, float] = field(default_factory=dict)
    duration_ms: float | None = None
    error: ReportedError | None = None
    todo: bool | str | None = None
    skip: bool | str | None = None

    def __post_init__(self) -> None:
        if self.nesting < 0:
            raise EventDecodeError("nesting must be non-negative")
        object.__setattr__(self, "counts", dict(self.counts))


@dataclass(slots=True, frozen=True)
class ReportEvent:
    """A single lifecycle notification: ``{type, data}``."""

    type: EventType
    data: ReportData


def decode_event(payload: Any) -> ReportEvent | None:
    """Shape a raw ``{type, data}`` mapping into a :class:`ReportEvent`.

    Returns ``None`` for event kinds this package does not render.

    Raises
    ------
    EventDecodeError
        When the payload is structurally malformed.

    Examples
    --------
    >>> event = decode_event({"type": "test:pass", "data": {"name": "t", "nesting": 0, "details": {"duration_ms": 5}}})
    >>> event.type.name, event.data.name, event.data.duration_ms
    ('PASS', 't', 5)
    >>> decode_event({"type": "test:dequeue", "data": {}}) is None
    True
    """
    if not isinstance(payload, Mapping):
        raise EventDecodeError(f"event must be a mapping, got {type(payload).__name__}")
    event_type = EventType.from_wire(payload.get("type"))
    if event_type is None:
        return None
    raw = payload.get("data")
    if raw is None:
        raw = {}
    if not isinstance(raw, Mapping):
        raise EventDecodeError("event data must be a mapping")
    return ReportEvent(type=event_type, data=_decode_data(raw))


def decode_line(line: str) -> ReportEvent | None:
    """Decode one newline-delimited JSON event; blank lines yield ``None``."""

    text = line.strip()
    if not text:
        return None
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise EventDecodeError(f"invalid JSON event: {exc.msg}") from exc
    return decode_event(payload)


def _decode_data(raw: Mapping[str, Any]) -> ReportData:
    details = raw.get("details")
    if not isinstance(details, Mapping):
        details = {}

    duration = details.get("duration_ms", raw.get("duration_ms"))
    error = ReportedError.from_value(details.get("error"))
    if isinstance(error, str):
        error = ReportedError(message=error)

    counts = raw.get("counts")
    if not isinstance(counts, Mapping):
        counts = {}

    name = raw.get("name")
    return ReportData(
        name="" if name is None else str(name),
        nesting=_coerce_nesting(raw.get("nesting", 0)),
        file=_optional_str(raw.get("file")),
        line=_optional_int(raw.get("line")),
        column=_optional_int(raw.get("column")),
        message=_optional_str(raw.get("message")),
        success=None if raw.get("success") is None else bool(raw.get("success")),
        counts={str(key): value for key, value in counts.items() if _is_number(value)},
        duration_ms=duration if _is_number(duration) else None,
        error=error,
        todo=_flag(raw.get("todo")),
        skip=_flag(raw.get("skip")),
    )


def _coerce_nesting(value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise EventDecodeError(f"nesting must be an integer, got {value!r}")
    return value


def _flag(value: Any) -> bool | str | None:
    if value is None or isinstance(value, (bool, str)):
        return value
    return bool(value)


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)


def _optional_int(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return int(value)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


__all__ = [
    "ErrorCause",
    "EventDecodeError",
    "EventType",
    "ReportData",
    "ReportEvent",
    "ReportedError",
    "decode_event",
    "decode_line",
]
