"""Runtime façade assembling formatters from configuration.

Purpose
-------
Expose a small entry point for host code and the CLI: build a formatter, or
render a whole event source in one call.

Contents
--------
* :func:`create_formatter` - fresh :class:`StreamFormatter` for a config.
* :func:`report_events` - render an iterable of ``{type, data}`` mappings.
* :func:`report_lines` - render an iterable of NDJSON lines.
* :class:`ReporterConfig` - re-exported settings object.

System Role
-----------
Outer shell of the package; configuration is read here, once per formatter,
and passed inward as explicit values.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any

from lib_spec_reporter.adapters import detect_color_support
from lib_spec_reporter.application.ports import OutputPort
from lib_spec_reporter.application.use_cases import StreamFormatter
from lib_spec_reporter.application.use_cases.report_stream import ReportResult
from lib_spec_reporter.domain import decode_line

from ._composition import build_formatter, build_palette, build_report
from ._settings import ReporterConfig, parse_styles, resolve_color


def create_formatter(
    config: ReporterConfig | None = None,
    *,
    detect: Callable[[], bool] = detect_color_support,
) -> StreamFormatter:
    """Return a formatter configured from ``config`` or the environment."""

    return build_formatter(config if config is not None else ReporterConfig.from_env(), detect=detect)


def report_events(
    events: Iterable[Mapping[str, Any]],
    *,
    config: ReporterConfig | None = None,
    sink: OutputPort | None = None,
    detect: Callable[[], bool] = detect_color_support,
) -> ReportResult:
    """Render decoded-JSON event mappings to ``sink`` (stdout by default)."""

    report = build_report(config if config is not None else ReporterConfig.from_env(), sink=sink, detect=detect)
    return report(events)


def report_lines(
    lines: Iterable[str],
    *,
    config: ReporterConfig | None = None,
    sink: OutputPort | None = None,
    detect: Callable[[], bool] = detect_color_support,
) -> ReportResult:
    """Render newline-delimited JSON events to ``sink`` (stdout by default)."""

    report = build_report(
        config if config is not None else ReporterConfig.from_env(),
        sink=sink,
        decoder=decode_line,
        detect=detect,
    )
    return report(lines)


__all__ = [
    "ReporterConfig",
    "build_palette",
    "create_formatter",
    "parse_styles",
    "report_events",
    "report_lines",
    "resolve_color",
]
