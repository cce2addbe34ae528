from __future__ import annotations

from lib_spec_reporter.domain.execution import ExecutionContext, FailureRecord


def test_pop_on_empty_stack_keeps_depth_at_zero() -> None:
    ctx = ExecutionContext()
    assert ctx.pop() is None
    assert ctx.depth == 0


def test_hierarchical_name_joins_ancestors() -> None:
    ctx = ExecutionContext(stack=["suite", "inner", "leaf"])
    assert ctx.hierarchical_name("leaf", " > ") == "suite > inner > leaf"


def test_hierarchical_name_when_test_was_never_started() -> None:
    ctx = ExecutionContext(stack=["suite"])
    assert ctx.hierarchical_name("orphan", " > ") == "suite > orphan"


def test_record_failure_keeps_first_failure_order() -> None:
    ctx = ExecutionContext()
    ctx.record_failure("b.js", FailureRecord("x", "x", 1))
    ctx.record_failure("a.js", FailureRecord("y", "y", 2))
    ctx.record_failure("b.js", FailureRecord("z", "z", 3))

    assert list(ctx.failures) == ["b.js", "a.js"]
    assert [record.name for record in ctx.failures["b.js"]] == ["x", "z"]


def test_counters_accumulate_and_never_decrease() -> None:
    ctx = ExecutionContext()
    ctx.add_counter("tests", 3)
    ctx.add_counter("tests", 2)
    ctx.add_counter("tests", -10)
    assert ctx.counters == {"tests": 5}


def test_effective_counters_prefer_diagnostics_over_summary_counts() -> None:
    ctx = ExecutionContext()
    ctx.remember_summary_counts({"passed": 2, "failed": 1, "tests": 3})
    assert ctx.effective_counters() == {"pass": 2, "fail": 1, "tests": 3}

    ctx.add_counter("tests", 10)
    assert ctx.effective_counters() == {"tests": 10}


def test_passed_uses_success_flag_then_failures() -> None:
    ctx = ExecutionContext()
    assert ctx.passed() is True
    ctx.record_failure("a.js", FailureRecord("x", "x", 1))
    assert ctx.passed() is False
    ctx.success = True
    assert ctx.passed() is True


def test_summary_duration_fills_in_a_missing_run_duration() -> None:
    ctx = ExecutionContext(summary_duration_ms=250.0)
    ctx.remember_summary_counts({"tests": 1})
    assert ctx.effective_counters() == {"tests": 1, "duration_ms": 250.0}

    ctx.add_counter("duration_ms", 900)
    assert ctx.effective_counters() == {"duration_ms": 900}
