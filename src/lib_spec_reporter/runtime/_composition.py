"""Composition helpers wiring settings, adapters, and use cases together.

The helpers here are the only place where colour support is probed; every
formatter receives an already-resolved palette.
"""

from __future__ import annotations

from collections.abc import Callable

from lib_spec_reporter.adapters import RichPalette, TextStreamSink, detect_color_support
from lib_spec_reporter.application.ports import OutputPort
from lib_spec_reporter.application.use_cases import StreamFormatter, create_report_stream
from lib_spec_reporter.application.use_cases.report_stream import Decoder, ReportResult
from lib_spec_reporter.domain import decode_event

from ._settings import ReporterConfig


def build_palette(config: ReporterConfig, *, detect: Callable[[], bool] = detect_color_support) -> RichPalette:
    """Resolve colour support once and return the matching palette."""

    return RichPalette(enabled=config.use_color(detect), theme=config.theme, styles=config.styles)


def build_formatter(config: ReporterConfig, *, detect: Callable[[], bool] = detect_color_support) -> StreamFormatter:
    """Return a fresh formatter for ``config``."""

    return StreamFormatter(palette=build_palette(config, detect=detect), base_dir=config.base_dir)


def build_report(
    config: ReporterConfig,
    *,
    sink: OutputPort | None = None,
    decoder: Decoder | None = None,
    detect: Callable[[], bool] = detect_color_support,
) -> Callable[..., ReportResult]:
    """Return the report callable for one run."""

    formatter = build_formatter(config, detect=detect)
    target = sink if sink is not None else TextStreamSink()
    return create_report_stream(formatter=formatter, sink=target, decoder=decoder or decode_event)


__all__ = ["build_formatter", "build_palette", "build_report"]
