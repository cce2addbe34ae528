from __future__ import annotations

import pytest

from lib_spec_reporter.domain.events import ReportedError
from lib_spec_reporter.domain.failures import (
    FailureExplanation,
    explain_failure,
    extract_hook_name,
    extract_subtest_count,
    extract_timeout_ms,
)


@pytest.mark.parametrize(
    "failure_type, expected",
    [
        ("callbackAndPromisePresent", "Test both accepted a callback but returned a Promise."),
        ("cancelledByParent", "Test cancelled by its parent."),
        ("testAborted", "Test aborted."),
        ("parentAlreadyFinished", "Parent test already completed."),
    ],
)
def test_fixed_messages(failure_type: str, expected: str) -> None:
    explanation = explain_failure(ReportedError(message="whatever", failure_type=failure_type))
    assert explanation == FailureExplanation(message=expected)


@pytest.mark.parametrize("message, expected", [("1 subtest failed", "1 subtest failed."), ("4 subtests failed", "4 subtests failed.")])
def test_subtests_failed_counts(message: str, expected: str) -> None:
    explanation = explain_failure(ReportedError(message=message, failure_type="subtestsFailed"))
    assert explanation is not None
    assert explanation.message == expected
    assert explanation.error is None


def test_timeout_failure_extracts_milliseconds() -> None:
    explanation = explain_failure(ReportedError(message="test timed out after 300ms", failure_type="testTimeoutFailure"))
    assert explanation is not None
    assert explanation.message == "Test timed out after 300ms."


def test_hook_failure_names_hook_and_dumps_cause() -> None:
    cause = ReportedError(message="wyalla")
    explanation = explain_failure(
        ReportedError(message="failed running after hook", failure_type="hookFailed", cause=cause)
    )
    assert explanation == FailureExplanation(message="Error while running after hook.", error=cause)


def test_code_failure_dumps_cause() -> None:
    cause = ReportedError(message="fail")
    explanation = explain_failure(ReportedError(message="wrapper", failure_type="testCodeFailure", cause=cause))
    assert explanation == FailureExplanation(error=cause)


def test_code_failure_without_cause_dumps_error_itself() -> None:
    error = ReportedError(message="fail", failure_type="testCodeFailure")
    assert explain_failure(error) == FailureExplanation(error=error)


def test_unknown_failure_type_is_reported_as_none() -> None:
    assert explain_failure(ReportedError(message="?", failure_type="brandNew")) is None


def test_runner_wrapped_error_without_type_is_unwrapped() -> None:
    cause = ReportedError(message="Actual error cause")
    error = ReportedError(message="Test failure", code="ERR_TEST_FAILURE", cause=cause)
    assert explain_failure(error) == FailureExplanation(error=cause)


def test_plain_error_is_dumped_as_is() -> None:
    error = ReportedError(message="Test error")
    assert explain_failure(error) == FailureExplanation(error=error)


def test_missing_error_explains_nothing() -> None:
    assert explain_failure(None) == FailureExplanation()


@pytest.mark.parametrize(
    "failure_type, message, expected",
    [
        ("subtestsFailed", "odd", "Some subtests failed."),
        ("testTimeoutFailure", "odd", "Test timed out."),
        ("hookFailed", "odd", "Error while running a hook."),
    ],
)
def test_unparseable_messages_fall_back_to_generic_text(failure_type: str, message: str, expected: str) -> None:
    explanation = explain_failure(ReportedError(message=message, failure_type=failure_type))
    assert explanation is not None
    assert explanation.message == expected


def test_extractors() -> None:
    assert extract_subtest_count("2 subtests failed") == 2
    assert extract_subtest_count("2 subtests failed badly") is None
    assert extract_timeout_ms("test timed out after 100ms") == 100
    assert extract_timeout_ms("timed out") is None
    assert extract_hook_name("failed running beforeEach hook") == "beforeEach"
    assert extract_hook_name("nope") is None
