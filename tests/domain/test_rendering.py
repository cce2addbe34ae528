from __future__ import annotations

import re

import pytest

from lib_spec_reporter.domain.events import ReportedError
from lib_spec_reporter.domain.rendering import (
    dump_error,
    format_duration,
    format_milliseconds,
    indentation,
    is_file_node,
    nice_join,
    pluralize,
    relative_path,
)


@pytest.mark.parametrize(
    "milliseconds, expected",
    [
        (2 * 3600 * 1000 + 30 * 60 * 1000 + 15 * 1000, "2 hours, 30 minutes and 15 seconds"),
        (3 * 60 * 1000 + 15 * 1000, "3 minutes and 15 seconds"),
        (5 * 1000, "5 seconds"),
        (3661 * 1000, "1 hour, 1 minute and 1 second"),
        (61 * 1000, "1 minute and 1 second"),
        (1000, "1 second"),
        (0, "0 seconds"),
        (3600 * 1000, "1 hour and 0 seconds"),
    ],
)
def test_format_duration_units(milliseconds: float, expected: str) -> None:
    assert format_duration(milliseconds) == expected


def test_format_duration_fractional_seconds_use_three_decimals() -> None:
    assert re.match(r"^1\.23\d seconds$", format_duration(1.2345678 * 1000))


@pytest.mark.parametrize("milliseconds", [1000, 60_000, 3_600_000, 61_000, 3_601_000])
def test_format_duration_never_prints_zero_higher_units(milliseconds: int) -> None:
    text = format_duration(milliseconds)
    assert "0 hours" not in text
    assert "0 minutes" not in text


def test_nice_join() -> None:
    assert nice_join([]) == ""
    assert nice_join(["one"]) == "one"
    assert nice_join(["one", "two"]) == "one and two"
    assert nice_join(["one", "two", "three"]) == "one, two and three"
    assert nice_join(["one", "two", "three", "four"]) == "one, two, three and four"
    assert nice_join(["one", "two", "three"], " or ") == "one, two or three"
    assert nice_join(["one", "two", "three"], " or ", "; ") == "one; two or three"


@pytest.mark.parametrize("count, expected", [(0, "tests"), (1, "test"), (2, "tests"), (1.5, "tests"), (1.0, "test")])
def test_pluralize(count: float, expected: str) -> None:
    assert pluralize("test", count) == expected


@pytest.mark.parametrize("value, expected", [(5, "5ms"), (5.0, "5ms"), (0.41234, "0.412ms"), (None, "n/a")])
def test_format_milliseconds(value: float | None, expected: str) -> None:
    assert format_milliseconds(value) == expected


def test_indentation_uses_spaces_without_bars() -> None:
    assert indentation(0) == ""
    assert indentation(2, 1) == "      "


def test_indentation_draws_painted_bars() -> None:
    assert indentation(1, 1, bars=True, paint=lambda text: f"<{text}>") == "<│ │ >"
    assert indentation(0, 0, bars=True, paint=lambda text: f"<{text}>") == ""


def test_indentation_never_goes_negative() -> None:
    assert indentation(-3, 1) == ""


def test_dump_error_prefers_stack_and_walks_causes() -> None:
    error = ReportedError(
        message="wrapper",
        code="ERR_TEST_FAILURE",
        stack="Error: wrapper\n    at run (file.js:1:1)",
        cause=ReportedError(message="inner", stack="TypeError: inner\n    at fn (file.js:2:2)", cause="root"),
    )

    assert dump_error(error) == [
        "Error: wrapper",
        "    at run (file.js:1:1)",
        "  code: 'ERR_TEST_FAILURE'",
        "  [cause]: TypeError: inner",
        "      at fn (file.js:2:2)",
        "    [cause]: 'root'",
    ]


def test_dump_error_without_stack_uses_message() -> None:
    assert dump_error(ReportedError(message="Test error")) == ["Error: Test error"]


def test_dump_error_of_plain_string() -> None:
    assert dump_error("just text") == ["'just text'"]


@pytest.mark.parametrize(
    "name, file, expected",
    [
        ("math.test.js", "/work/math.test.js", True),
        ("/work/math.test.js", "/work/math.test.js", True),
        ("math.test.js", "C:\\work\\math.test.js", True),
        ("foo.test.ts", "/path/to/test.ts", False),
        ("adds", "/work/math.test.js", False),
        ("adds", None, False),
    ],
)
def test_is_file_node(name: str, file: str | None, expected: bool) -> None:
    assert is_file_node(name, file) is expected


def test_relative_path() -> None:
    assert relative_path("/work/tests/a.js", "/work") == "tests/a.js"
    assert relative_path("", "/work") == ""
