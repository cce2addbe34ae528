"""End-of-run summary rendered when the event stream closes."""

from __future__ import annotations

from lib_spec_reporter.application.ports import PalettePort
from lib_spec_reporter.domain import ExecutionContext
from lib_spec_reporter.domain.rendering import (
    ARROW_GLYPH,
    FAIL_GLYPH,
    format_duration,
    indentation,
    nice_join,
    pluralize,
    relative_path,
)

NO_TESTS_MESSAGE = "No tests to run or all test might have been skipped or excluded."
UNKNOWN_FILE = "(unknown file)"


def render_summary(context: ExecutionContext, *, palette: PalettePort, base_dir: str) -> str:
    """Return the final report for ``context``.

    Examples
    --------
    >>> from lib_spec_reporter.adapters.palette import RichPalette
    >>> render_summary(ExecutionContext(), palette=RichPalette(enabled=False), base_dir="/")
    '▶ No tests to run or all test might have been skipped or excluded.\\n'
    """
    if not context.current_file and not context.has_failures:
        return f"{palette.paint(ARROW_GLYPH + NO_TESTS_MESSAGE, 'info')}\n"

    parts = ["\n", _headline(context, palette), "\n"]
    if context.has_failures:
        parts.append(_failure_listing(context, palette, base_dir))
    return "".join(parts)


def _headline(context: ExecutionContext, palette: PalettePort) -> str:
    counters = context.effective_counters()
    tests = counters.get("tests", 0)
    todo = counters.get("todo", 0)
    skipped = counters.get("skipped", 0)
    cancelled = counters.get("cancelled", 0)
    passing = counters.get("pass", 0) + todo
    files = max(len(context.seen_files), 1)

    outcome = palette.paint("PASSED", "pass") if context.passed() else palette.paint("FAILED", "fail")

    tail = ""
    if "duration_ms" in counters:
        tail += f" in {format_duration(counters['duration_ms'])}"
    tail += f" with {_number(passing)} {pluralize('test', passing)} passing out of {_number(tests)}"
    if todo:
        tail += f", including {_number(todo)} TODO"

    not_executed = [
        f"{_number(count)} {pluralize('test', count)} {'was' if count == 1 else 'were'} {label}"
        for count, label in ((skipped, "skipped"), (cancelled, "cancelled"))
        if count
    ]
    if not_executed:
        tail += f" ({nice_join(not_executed)})"
    tail += f" over {files} {pluralize('file', files)}."

    return f"{palette.paint(ARROW_GLYPH + 'Execution ', 'info')}{outcome}{palette.paint(tail, 'info')}"


def _failure_listing(context: ExecutionContext, palette: PalettePort, base_dir: str) -> str:
    lines = ["\n", f"{palette.paint(FAIL_GLYPH + 'Failed tests:', 'fail')}\n", "\n"]
    for file, records in context.failures.items():
        shown = _shown_path(file, base_dir)
        lines.append(f"{indentation(0, 1)}{palette.paint(ARROW_GLYPH, 'muted')}{palette.paint(shown, 'emphasis')}\n")
        for record in records:
            location = shown if record.line is None else f"{shown}:{record.line}"
            lines.append(
                f"{indentation(0, 2)}{palette.paint('-', 'muted')} {palette.paint(record.full_name, 'emphasis')} "
                f"{palette.paint(f'({location})', 'muted')}\n"
            )

    lines.extend(["\n", f"{palette.paint(FAIL_GLYPH + 'Files with failures:', 'fail')}\n", "\n"])
    for file in context.failures:
        lines.append(f"{indentation(0, 1)}{palette.paint('-', 'muted')} {palette.paint(_shown_path(file, base_dir), 'emphasis')}\n")
    return "".join(lines)


def _shown_path(file: str, base_dir: str) -> str:
    return relative_path(file, base_dir) if file else UNKNOWN_FILE


def _number(value: float) -> int | float:
    return int(value) if float(value).is_integer() else value


__all__ = ["NO_TESTS_MESSAGE", "render_summary"]
