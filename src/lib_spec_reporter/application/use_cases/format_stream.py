"""Stateful, single-pass formatter turning test events into spec-style text.

Purpose
-------
Consume one :class:`~lib_spec_reporter.domain.events.ReportEvent` at a time,
return the text it produces, and render the aggregate summary on flush.

Contents
--------
* :class:`StreamFormatter` - event dispatch over an owned
  :class:`~lib_spec_reporter.domain.execution.ExecutionContext`.

System Role
-----------
The only stateful component of the package. It performs no I/O; callers hand
the returned strings to an :class:`~lib_spec_reporter.application.ports.OutputPort`.
Formatting is best-effort: an exception while handling one event is logged and
never stops the stream.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Callable, Mapping

from lib_spec_reporter.application.ports import PalettePort
from lib_spec_reporter.domain import (
    COUNTER_NAMES,
    EventType,
    ExecutionContext,
    FailureExplanation,
    FailureRecord,
    ReportData,
    ReportEvent,
    explain_failure,
)
from lib_spec_reporter.domain.rendering import (
    ARROW_GLYPH,
    DIAGNOSTIC_GLYPH,
    FAIL_GLYPH,
    HIERARCHY_SEPARATOR,
    PASS_GLYPH,
    dump_error,
    format_milliseconds,
    indentation,
    is_file_node,
    relative_path,
)

from .summary import render_summary

logger = logging.getLogger(__name__)

_COUNTER_LINE = re.compile(r"^(\w+) (\d+(?:\.\d+)?)$")


class StreamFormatter:
    """Render a stream of test events as indented, optionally coloured text.

    Parameters
    ----------
    palette:
        Colour table resolved once by the caller.
    base_dir:
        Directory file paths are shown relative to (defaults to the cwd at
        construction time).
    context:
        Optional pre-built execution state, mainly for tests.

    Examples
    --------
    >>> from lib_spec_reporter.adapters.palette import RichPalette
    >>> from lib_spec_reporter.domain import decode_event
    >>> formatter = StreamFormatter(palette=RichPalette(enabled=False), base_dir="/work")
    >>> formatter.process(decode_event({"type": "test:start", "data": {"name": "t", "nesting": 0, "file": "/work/a.test.js"}}))
    '▶ File a.test.js\\n\\n'
    >>> formatter.process(decode_event({"type": "test:pass", "data": {"name": "t", "nesting": 0, "details": {"duration_ms": 5}}}))
    '  ✔ t (5ms)\\n'
    """

    def __init__(
        self,
        *,
        palette: PalettePort,
        base_dir: str | os.PathLike[str] | None = None,
        context: ExecutionContext | None = None,
    ) -> None:
        self._palette = palette
        self._base_dir = os.fspath(base_dir) if base_dir is not None else os.getcwd()
        self.context = context if context is not None else ExecutionContext()
        self._handlers: Mapping[EventType, Callable[[ReportData], str]] = {
            EventType.ENQUEUE: self._on_enqueue,
            EventType.START: self._on_start,
            EventType.PASS: self._on_pass,
            EventType.FAIL: self._on_fail,
            EventType.DIAGNOSTIC: self._on_diagnostic,
            EventType.STDOUT: self._on_output,
            EventType.STDERR: self._on_output,
            EventType.SUMMARY: self._on_summary,
        }

    @property
    def base_dir(self) -> str:
        return self._base_dir

    def process(self, event: ReportEvent | None) -> str:
        """Return the text produced by ``event`` (possibly empty)."""

        if event is None:
            return ""
        handler = self._handlers.get(event.type)
        if handler is None:
            logger.debug("ignoring event type %s", event.type)
            return ""
        try:
            return handler(event.data)
        except Exception:
            logger.exception("failed to format %s event for %r", event.type.value, event.data.name)
            return ""

    def flush(self) -> str:
        """Return the end-of-run summary for everything seen so far."""

        try:
            return render_summary(self.context, palette=self._palette, base_dir=self._base_dir)
        except Exception:
            logger.exception("failed to render the run summary")
            return ""

    # Event handlers -----------------------------------------------------

    def _on_enqueue(self, data: ReportData) -> str:
        if data.file:
            self.context.seen_files.add(data.file)
        return ""

    def _on_start(self, data: ReportData) -> str:
        ctx = self.context
        if data.file:
            ctx.seen_files.add(data.file)
        if is_file_node(data.name, data.file):
            return ""

        parts: list[str] = []
        if data.file and data.file != ctx.current_file:
            if ctx.current_file:
                parts.append("\n")
            parts.append(self._file_header(data.file))
            ctx.current_file = data.file
            ctx.diagnostic_shown = False

        if ctx.diagnostic_shown:
            parts.append("\n")
            ctx.diagnostic_shown = False

        if data.nesting > ctx.nesting and ctx.stack:
            parts.append(self._breadcrumb(ctx.stack[-1], ctx.depth - 1))

        ctx.push(data.name)
        ctx.nesting = data.nesting
        return "".join(parts)

    def _on_pass(self, data: ReportData) -> str:
        if is_file_node(data.name, data.file):
            return ""
        ctx = self.context
        ctx.pop()
        separator = self._settle_nesting(data.nesting)
        role = "skip" if data.skip else "pass"
        return (
            f"{separator}{self._indent(ctx.depth, 1)}{self._paint(PASS_GLYPH + data.name, role)} "
            f"{self._paint(f'({format_milliseconds(data.duration_ms)})', 'muted')}{self._annotation(data)}\n"
        )

    def _on_fail(self, data: ReportData) -> str:
        ctx = self.context
        explanation = explain_failure(data.error)
        if explanation is None and data.error is not None:
            logger.warning("unrecognised failureType %r for test %r", data.error.failure_type, data.name)

        if data.file and is_file_node(data.name, data.file):
            ctx.seen_files.add(data.file)
            shown = relative_path(data.file, self._base_dir)
            ctx.record_failure(data.file, FailureRecord(shown, shown, data.line, data.error))
            ctx.diagnostic_shown = False
            return "\n" + self._failure_block(shown, data, 0, explanation)

        full_name = ctx.hierarchical_name(data.name, HIERARCHY_SEPARATOR)
        ctx.pop()
        separator = self._settle_nesting(data.nesting)
        bucket = data.file or ctx.current_file
        ctx.record_failure(bucket, FailureRecord(data.name, full_name, data.line, data.error))
        return separator + self._failure_block(data.name, data, ctx.depth, explanation)

    def _on_diagnostic(self, data: ReportData) -> str:
        ctx = self.context
        message = data.message or ""
        match = _COUNTER_LINE.match(message.strip())
        if match and match.group(1) in COUNTER_NAMES:
            value = float(match.group(2))
            ctx.add_counter(match.group(1), int(value) if value.is_integer() else value)
            return ""
        if not message:
            return ""

        pad = self._indent(ctx.depth, 1)
        first, *rest = message.splitlines() or [""]
        lines = [f"{pad}{self._paint(DIAGNOSTIC_GLYPH + first, 'diagnostic')}\n"]
        lines.extend(f"{pad}  {self._paint(line, 'diagnostic')}\n" for line in rest)
        ctx.diagnostic_shown = True
        return "".join(lines)

    def _on_output(self, data: ReportData) -> str:
        return data.message or ""

    def _on_summary(self, data: ReportData) -> str:
        if data.success is not None:
            self.context.success = data.success
        self.context.remember_summary_counts(data.counts)
        if data.duration_ms is not None:
            self.context.summary_duration_ms = data.duration_ms
        return ""

    # Rendering helpers --------------------------------------------------

    def _settle_nesting(self, nesting: int) -> str:
        """Record ``nesting`` after a test finished; a dedent yields a blank line."""

        ctx = self.context
        separator = "\n" if nesting < ctx.nesting else ""
        ctx.nesting = nesting
        ctx.diagnostic_shown = False
        return separator

    def _file_header(self, file: str) -> str:
        shown = relative_path(file, self._base_dir)
        return f"{self._paint(ARROW_GLYPH + 'File ', 'muted')}{self._paint(shown, 'emphasis')}\n\n"

    def _breadcrumb(self, name: str, depth: int) -> str:
        return f"{self._indent(depth, 1)}{self._paint(ARROW_GLYPH, 'muted')}{name}\n"

    def _failure_block(
        self,
        name: str,
        data: ReportData,
        depth: int,
        explanation: FailureExplanation | None,
    ) -> str:
        line = (
            f"{self._indent(depth, 1)}{self._paint(FAIL_GLYPH + name, 'fail')} "
            f"{self._paint(f'({format_milliseconds(data.duration_ms)})', 'muted')}"
        )
        if explanation is not None and explanation.message:
            line += f" {self._paint(explanation.message, 'fail')}"
        line += f"{self._annotation(data)}\n"

        if explanation is None or explanation.error is None:
            return line
        pad = self._indent(depth, 2)
        dumped = "".join(f"{pad}{text}\n" for text in dump_error(explanation.error))
        return f"{line}\n{dumped}\n"

    def _annotation(self, data: ReportData) -> str:
        if data.todo is True or (isinstance(data.todo, str) and data.todo):
            label = "# TODO" if data.todo is True else f"# TODO: {data.todo}"
        elif data.skip is True or (isinstance(data.skip, str) and data.skip):
            label = "# SKIP" if data.skip is True else f"# SKIP: {data.skip}"
        else:
            return ""
        return f" {self._paint(label, 'muted')}"

    def _indent(self, depth: int, level: int = 0) -> str:
        if not self._palette.enabled:
            return indentation(depth, level)
        return indentation(depth, level, bars=True, paint=lambda text: self._palette.paint(text, "muted"))

    def _paint(self, text: str, role: str) -> str:
        return self._palette.paint(text, role)


__all__ = ["StreamFormatter"]
