from __future__ import annotations

from pathlib import Path

from lib_spec_reporter.adapters.sink import BufferSink
from lib_spec_reporter.runtime import ReporterConfig, build_palette, create_formatter, report_events, report_lines
from tests._events import raw, strip_ansi

FIXTURE = Path(__file__).resolve().parents[1] / "fixtures" / "nested_run.ndjson"

EXPECTED_NESTED_RUN = (
    "▶ File tests/math.test.js\n"
    "\n"
    "  ▶ arithmetic\n"
    "    ✔ adds (0.500ms)\n"
    "    ✖ divides (2ms)\n"
    "\n"
    "      Error: expected 2 to equal 3\n"
    "\n"
    "\n"
    "  ✖ arithmetic (4ms) 1 subtest failed.\n"
    "\n"
    "▶ Execution FAILED in 0.012 seconds with 1 test passing out of 2 over 1 file.\n"
    "\n"
    "✖ Failed tests:\n"
    "\n"
    "  ▶ tests/math.test.js\n"
    "    - arithmetic ▶ divides (tests/math.test.js:8)\n"
    "    - arithmetic (tests/math.test.js:3)\n"
    "\n"
    "✖ Files with failures:\n"
    "\n"
    "  - tests/math.test.js\n"
)


def _plain(**kwargs: object) -> ReporterConfig:
    return ReporterConfig(no_color=True, base_dir=Path("/work"), **kwargs)


def test_report_lines_renders_the_recorded_run() -> None:
    sink = BufferSink()

    with FIXTURE.open(encoding="utf-8") as handle:
        result = report_lines(handle, config=_plain(), sink=sink)

    assert result == {"processed": 15, "ignored": 1, "malformed": 0}
    assert sink.getvalue() == EXPECTED_NESTED_RUN


def test_forced_colour_output_matches_plain_text_once_stripped() -> None:
    sink = BufferSink()

    with FIXTURE.open(encoding="utf-8") as handle:
        report_lines(handle, config=ReporterConfig(force_color=True, base_dir=Path("/work")), sink=sink, detect=lambda: False)

    colored = sink.getvalue()
    assert "\x1b[" in colored
    assert strip_ansi(colored).replace("│ ", "  ") == EXPECTED_NESTED_RUN


def test_report_events_accepts_decoded_mappings() -> None:
    sink = BufferSink()

    result = report_events(
        [
            raw("start", name="a", nesting=0, file="/work/a.test.js"),
            raw("pass", name="a", nesting=0, file="/work/a.test.js", details={"duration_ms": 3}),
            "not an event",
        ],
        config=_plain(),
        sink=sink,
    )

    assert result == {"processed": 2, "ignored": 0, "malformed": 1}
    assert "  ✔ a (3ms)\n" in sink.getvalue()


def test_create_formatter_resolves_colour_once() -> None:
    probes: list[bool] = []

    def detect() -> bool:
        probes.append(True)
        return True

    formatter = create_formatter(ReporterConfig(base_dir=Path("/work")), detect=detect)

    assert probes == [True]
    assert formatter.base_dir == "/work"
    formatter.process(None)
    assert probes == [True]


def test_build_palette_honours_theme_and_styles() -> None:
    palette = build_palette(ReporterConfig(force_color=True, theme="bold", styles={"pass": "cyan"}))
    assert palette.enabled is True
    assert palette.paint("ok", "pass") == "\x1b[36mok\x1b[0m"
    assert palette.paint("bad", "fail") == "\x1b[1;31mbad\x1b[0m"
