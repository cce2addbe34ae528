"""Pure text helpers shared by the formatter and the summary renderer.

Contents
--------
* :func:`pluralize`, :func:`nice_join` - natural-language helpers.
* :func:`format_duration`, :func:`format_milliseconds` - duration rendering.
* :func:`indentation` - nesting-aware indentation strings.
* :func:`dump_error` - multi-line representation of an error cause chain.
* :func:`relative_path`, :func:`is_file_node` - path helpers.

None of these functions hold state or read process-global configuration.
"""

from __future__ import annotations

import ntpath
import os
from collections.abc import Callable, Sequence

from .events import ErrorCause, ReportedError

_MS_PER_SECOND = 1000
_SECONDS_PER_MINUTE = 60
_SECONDS_PER_HOUR = 3600

BAR = "│ "
SPACE = "  "

PASS_GLYPH = "✔ "
FAIL_GLYPH = "✖ "
DIAGNOSTIC_GLYPH = "ℹ "
ARROW_GLYPH = "▶ "
HIERARCHY_SEPARATOR = " ▶ "


def pluralize(word: str, count: float) -> str:
    """Append ``s`` unless ``count`` is exactly one.

    Examples
    --------
    >>> pluralize("test", 1), pluralize("test", 0), pluralize("second", 1.5)
    ('test', 'tests', 'seconds')
    """
    return word if count == 1 else f"{word}s"


def nice_join(items: Sequence[str], last_separator: str = " and ", separator: str = ", ") -> str:
    """Join ``items`` the way a sentence would.

    Examples
    --------
    >>> nice_join([])
    ''
    >>> nice_join(["a", "b"])
    'a and b'
    >>> nice_join(["a", "b", "c"])
    'a, b and c'
    >>> nice_join(["a", "b", "c"], " or ", "; ")
    'a; b or c'
    """
    if not items:
        return ""
    if len(items) == 1:
        return items[0]
    return separator.join(items[:-1]) + last_separator + items[-1]


def format_duration(milliseconds: float) -> str:
    """Render ``milliseconds`` as hours, minutes and seconds.

    Zero hours or minutes are omitted; seconds are always present.

    Examples
    --------
    >>> format_duration(1000)
    '1 second'
    >>> format_duration(3661000)
    '1 hour, 1 minute and 1 second'
    >>> format_duration(1234.5678)
    '1.235 seconds'
    """
    total_seconds = max(float(milliseconds), 0.0) / _MS_PER_SECOND
    hours = int(total_seconds // _SECONDS_PER_HOUR)
    minutes = int((total_seconds % _SECONDS_PER_HOUR) // _SECONDS_PER_MINUTE)
    seconds = round(total_seconds - hours * _SECONDS_PER_HOUR - minutes * _SECONDS_PER_MINUTE, 3)

    parts: list[str] = []
    if hours:
        parts.append(f"{hours} {pluralize('hour', hours)}")
    if minutes:
        parts.append(f"{minutes} {pluralize('minute', minutes)}")
    if seconds == int(seconds):
        parts.append(f"{int(seconds)} {pluralize('second', int(seconds))}")
    else:
        parts.append(f"{seconds:.3f} {pluralize('second', seconds)}")
    return nice_join(parts)


def format_milliseconds(value: float | None) -> str:
    """Render a per-test duration; missing values become ``n/a``.

    Examples
    --------
    >>> format_milliseconds(5), format_milliseconds(0.41234), format_milliseconds(None)
    ('5ms', '0.412ms', 'n/a')
    """
    if value is None:
        return "n/a"
    if float(value).is_integer():
        return f"{int(value)}ms"
    return f"{value:.3f}ms"


def indentation(
    depth: int,
    level: int = 0,
    *,
    bars: bool = False,
    paint: Callable[[str], str] | None = None,
) -> str:
    """Return the prefix for a line ``depth + level`` units deep.

    Each unit is two columns: spaces, or a vertical bar connecting nested
    levels when ``bars`` is set (used when colour is enabled).

    Examples
    --------
    >>> indentation(1, 1)
    '    '
    >>> indentation(2, bars=True)
    '│ │ '
    """
    units = max(depth + level, 0)
    if not bars:
        return SPACE * units
    text = BAR * units
    return paint(text) if paint is not None and text else text


def dump_error(error: ErrorCause) -> list[str]:
    """Return the lines of a human-readable representation of ``error``.

    Every cause link is introduced by ``[cause]:`` and indented two columns
    further than the previous link. String causes are printed quoted.

    Examples
    --------
    >>> from lib_spec_reporter.domain.events import ReportedError
    >>> dump_error(ReportedError("outer", cause="why"))
    ['Error: outer', "  [cause]: 'why'"]
    """
    lines: list[str] = []
    current: ErrorCause = error
    prefix = ""
    first = True
    while current is not None:
        if isinstance(current, str):
            body = [repr(current)]
        else:
            body = _error_body(current)
        if not first:
            body[0] = f"[cause]: {body[0]}"
        lines.extend(f"{prefix}{line}" for line in body)
        if isinstance(current, str):
            break
        current = current.cause
        prefix = f"{prefix}{SPACE}"
        first = False
    return lines


def _error_body(error: ReportedError) -> list[str]:
    body = error.stack.splitlines() if error.stack else []
    if not body:
        body = f"Error: {error.message}".splitlines()
    if error.code:
        body.append(f"{SPACE}code: {error.code!r}")
    return body


def relative_path(path: str, base_dir: str) -> str:
    """Return ``path`` relative to ``base_dir`` when possible.

    Examples
    --------
    >>> relative_path("/work/tests/a.test.js", "/work")
    'tests/a.test.js'
    """
    if not path:
        return path
    try:
        return os.path.relpath(path, base_dir)
    except ValueError:
        return path


def basename(path: str) -> str:
    """Return the last component of ``path`` for POSIX and Windows separators."""

    return ntpath.basename(path) if "\\" in path else os.path.basename(path)


def is_file_node(name: str, file: str | None) -> bool:
    """Return ``True`` when an event describes a whole file rather than a test.

    Examples
    --------
    >>> is_file_node("a.test.js", "/work/a.test.js")
    True
    >>> is_file_node("/work/a.test.js", "/work/a.test.js")
    True
    >>> is_file_node("a test", "/work/a.test.js")
    False
    """
    if not file:
        return False
    return name == file or name == basename(file)


__all__ = [
    "ARROW_GLYPH",
    "BAR",
    "DIAGNOSTIC_GLYPH",
    "FAIL_GLYPH",
    "HIERARCHY_SEPARATOR",
    "PASS_GLYPH",
    "SPACE",
    "basename",
    "dump_error",
    "format_duration",
    "format_milliseconds",
    "indentation",
    "is_file_node",
    "nice_join",
    "pluralize",
    "relative_path",
]
