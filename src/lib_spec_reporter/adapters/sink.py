"""Text sinks implementing :class:`OutputPort`.

Contents
--------
* :class:`TextStreamSink` - writes through :func:`click.echo` to a text stream.
* :class:`BufferSink` - collects text in memory (tests, embedding).
"""

from __future__ import annotations

from io import StringIO
from typing import TextIO

import click

from lib_spec_reporter.application.ports.sink import OutputPort


class TextStreamSink(OutputPort):
    """Write report text to ``stream`` (stdout when omitted).

    ANSI escapes are passed through unchanged: whether to colour was decided
    when the palette was built.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def write(self, text: str) -> None:
        if text:
            click.echo(text, file=self._stream, nl=False, color=True)

    def flush(self) -> None:
        stream = self._stream if self._stream is not None else click.get_text_stream("stdout")
        stream.flush()


class BufferSink(OutputPort):
    """Accumulate report text in memory.

    Examples
    --------
    >>> sink = BufferSink()
    >>> sink.write("a"); sink.write("b"); sink.flush()
    >>> sink.getvalue(), sink.chunks
    ('ab', ['a', 'b'])
    """

    def __init__(self) -> None:
        self._buffer = StringIO()
        self.chunks: list[str] = []

    def write(self, text: str) -> None:
        if text:
            self._buffer.write(text)
            self.chunks.append(text)

    def flush(self) -> None:
        return None

    def getvalue(self) -> str:
        return self._buffer.getvalue()


__all__ = ["BufferSink", "TextStreamSink"]
