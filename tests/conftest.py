from __future__ import annotations

from collections.abc import Callable

import pytest

from lib_spec_reporter.adapters.palette import RichPalette
from lib_spec_reporter.adapters.sink import BufferSink
from lib_spec_reporter.application.use_cases import StreamFormatter
from lib_spec_reporter.domain import ReportEvent


@pytest.fixture
def plain_palette() -> RichPalette:
    return RichPalette(enabled=False)


@pytest.fixture
def color_palette() -> RichPalette:
    return RichPalette(enabled=True)


@pytest.fixture
def formatter(plain_palette: RichPalette) -> StreamFormatter:
    return StreamFormatter(palette=plain_palette, base_dir="/work")


@pytest.fixture
def render() -> Callable[..., str]:
    """Feed events to a fresh plain formatter and return all output including the summary."""

    def _render(*events: ReportEvent, flush: bool = True, palette: RichPalette | None = None) -> str:
        fmt = StreamFormatter(palette=palette or RichPalette(enabled=False), base_dir="/work")
        text = "".join(fmt.process(item) for item in events)
        return text + fmt.flush() if flush else text

    return _render


@pytest.fixture
def buffer_sink() -> BufferSink:
    return BufferSink()
