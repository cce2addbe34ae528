"""Mutable execution state tracked while a test run streams by.

Purpose
-------
Keep every piece of state the stream formatter needs in one explicit object so
the formatter stays unit-testable without any stream plumbing.

Contents
--------
* :class:`FailureRecord` - one failed test, kept for the final summary.
* :class:`ExecutionContext` - current file, execution stack, nesting,
  failure buckets, seen files, counters, and the overall success flag.
* :data:`COUNTER_NAMES` - counters recognised in diagnostic summary lines.

System Role
-----------
Owned exclusively by one :class:`~lib_spec_reporter.application.use_cases.format_stream.StreamFormatter`.
Created fresh per formatter, mutated incrementally, consumed once at flush.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from .events import ErrorCause

COUNTER_NAMES: frozenset[str] = frozenset(
    {"tests", "suites", "pass", "fail", "cancelled", "skipped", "todo", "duration_ms"}
)

_SUMMARY_COUNT_ALIASES = {"passed": "pass", "failed": "fail"}


@dataclass(slots=True, frozen=True)
class FailureRecord:
    """A failed test remembered for the end-of-run summary."""

    name: str
    full_name: str
    line: int | None
    error: ErrorCause = None


@dataclass(slots=True)
class ExecutionContext:
    """Everything the formatter has learned about the run so far."""

    current_file: str = ""
    stack: list[str] = field(default_factory=list)
    nesting: int = 0
    diagnostic_shown: bool = False
    failures: dict[str, list[FailureRecord]] = field(default_factory=dict)
    seen_files: set[str] = field(default_factory=set)
    counters: dict[str, float] = field(default_factory=dict)
    summary_counts: dict[str, float] = field(default_factory=dict)
    summary_duration_ms: float | None = None
    success: bool | None = None

    @property
    def depth(self) -> int:
        """Number of tests currently executing."""

        return len(self.stack)

    def push(self, name: str) -> None:
        self.stack.append(name)

    def pop(self) -> str | None:
        """Remove the innermost running test; an empty stack stays empty."""

        return self.stack.pop() if self.stack else None

    def hierarchical_name(self, name: str, separator: str) -> str:
        """Join the running ancestors of ``name`` with ``name`` itself.

        Examples
        --------
        >>> ctx = ExecutionContext(stack=["suite", "inner", "leaf"])
        >>> ctx.hierarchical_name("leaf", " > ")
        'suite > inner > leaf'
        """
        ancestors = self.stack[:-1] if self.stack and self.stack[-1] == name else self.stack
        return separator.join([*ancestors, name])

    def record_failure(self, file: str, record: FailureRecord) -> None:
        """Append ``record`` to the bucket of ``file`` (created on first failure)."""

        self.failures.setdefault(file, []).append(record)

    def add_counter(self, name: str, value: float) -> None:
        """Accumulate a counter; counters never decrease."""

        if value < 0:
            return
        self.counters[name] = self.counters.get(name, 0) + value

    def remember_summary_counts(self, counts: Mapping[str, float]) -> None:
        """Keep the structured counts of the latest summary event."""

        if counts:
            self.summary_counts = {_SUMMARY_COUNT_ALIASES.get(key, key): value for key, value in counts.items()}

    def effective_counters(self) -> dict[str, float]:
        """Return diagnostic counters, or summary counts when none were parsed.

        A run duration missing from both falls back to the summary event's
        own ``duration_ms``.
        """
        result = dict(self.counters) if self.counters else dict(self.summary_counts)
        if "duration_ms" not in result and self.summary_duration_ms is not None:
            result["duration_ms"] = self.summary_duration_ms
        return result

    @property
    def has_failures(self) -> bool:
        return bool(self.failures)

    def passed(self) -> bool:
        """Overall outcome: the summary flag, else whether nothing failed."""

        if self.success is not None:
            return self.success
        return not self.failures


__all__ = ["COUNTER_NAMES", "ExecutionContext", "FailureRecord"]
