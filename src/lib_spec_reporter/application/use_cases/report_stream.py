"""Use case driving raw events through the decoder, formatter, and sink.

Purpose
-------
Tie together the structural decoder, the stateful
:class:`~lib_spec_reporter.application.use_cases.format_stream.StreamFormatter`
and an :class:`~lib_spec_reporter.application.ports.OutputPort`.

Contents
--------
* :func:`create_report_stream` factory returning the runtime callable.

System Role
-----------
Events are processed strictly in arrival order, one at a time. The summary is
written from a ``finally`` block so a source that stops abruptly (including
one that raises) still produces a final report.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any

from lib_spec_reporter.application.ports import OutputPort
from lib_spec_reporter.domain import EventDecodeError, ReportEvent, decode_event

from .format_stream import StreamFormatter

logger = logging.getLogger(__name__)

Decoder = Callable[[Any], "ReportEvent | None"]
ReportResult = dict[str, int]


def create_report_stream(
    *,
    formatter: StreamFormatter,
    sink: OutputPort,
    decoder: Decoder = decode_event,
) -> Callable[[Iterable[Any]], ReportResult]:
    """Build the callable that renders a whole event source to ``sink``.

    Parameters
    ----------
    formatter:
        Fresh formatter owning the run's execution state.
    sink:
        Destination for the produced text.
    decoder:
        Shapes one raw item into a :class:`ReportEvent`; ``decode_event`` for
        mappings, ``decode_line`` for NDJSON text.

    Returns
    -------
    Callable[[Iterable[Any]], dict[str, int]]
        Function consuming the source and returning ``processed``, ``ignored``
        and ``malformed`` tallies.

    Examples
    --------
    >>> from lib_spec_reporter.adapters.palette import RichPalette
    >>> from lib_spec_reporter.adapters.sink import BufferSink
    >>> sink = BufferSink()
    >>> report = create_report_stream(formatter=StreamFormatter(palette=RichPalette(enabled=False)), sink=sink)
    >>> report([{"type": "test:plan", "data": {}}])
    {'processed': 0, 'ignored': 1, 'malformed': 0}
    >>> "No tests to run" in sink.getvalue()
    True
    """

    def report(source: Iterable[Any]) -> ReportResult:
        result: ReportResult = {"processed": 0, "ignored": 0, "malformed": 0}
        try:
            for raw in source:
                try:
                    event = decoder(raw)
                except EventDecodeError as exc:
                    logger.warning("skipping malformed event: %s", exc)
                    result["malformed"] += 1
                    continue
                if event is None:
                    result["ignored"] += 1
                    continue
                sink.write(formatter.process(event))
                result["processed"] += 1
        finally:
            sink.write(formatter.flush())
            sink.flush()
        return result

    return report


__all__ = ["Decoder", "ReportResult", "create_report_stream"]
