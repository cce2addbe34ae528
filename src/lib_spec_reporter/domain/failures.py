"""Failure classification and message extraction for failed tests.

Purpose
-------
Translate the runner's ``failureType`` classification into the short sentence
shown next to a failed test and the error (if any) dumped beneath it.

Contents
--------
* :class:`FailureType` enum with the known runner classifications.
* :func:`extract_subtest_count`, :func:`extract_timeout_ms`,
  :func:`extract_hook_name` - named parsers over free-text runner messages.
* :class:`FailureExplanation` and :func:`explain_failure`.

System Role
-----------
Domain helper used by the stream formatter. The extraction functions isolate
the coupling to the runner's message wording so the strategy can change without
touching rendering code.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from .events import ErrorCause, ReportedError
from .rendering import pluralize

RUNNER_FAILURE_CODE = "ERR_TEST_FAILURE"

_SUBTESTS_FAILED = re.compile(r"^(\d+) subtests? failed$")
_TIMED_OUT = re.compile(r"^test timed out after (\d+)ms$")
_HOOK_FAILED = re.compile(r"failed running (.+) hook")


class FailureType(Enum):
    """Runner classification attached to failed tests."""

    CALLBACK_AND_PROMISE_PRESENT = "callbackAndPromisePresent"
    CANCELLED_BY_PARENT = "cancelledByParent"
    TEST_ABORTED = "testAborted"
    PARENT_ALREADY_FINISHED = "parentAlreadyFinished"
    SUBTESTS_FAILED = "subtestsFailed"
    TEST_CODE_FAILURE = "testCodeFailure"
    TEST_TIMEOUT_FAILURE = "testTimeoutFailure"
    HOOK_FAILED = "hookFailed"

    @classmethod
    def from_wire(cls, value: str | None) -> "FailureType | None":
        if value is None:
            return None
        try:
            return cls(value)
        except ValueError:
            return None


_FIXED_MESSAGES = {
    FailureType.CALLBACK_AND_PROMISE_PRESENT: "Test both accepted a callback but returned a Promise.",
    FailureType.CANCELLED_BY_PARENT: "Test cancelled by its parent.",
    FailureType.TEST_ABORTED: "Test aborted.",
    FailureType.PARENT_ALREADY_FINISHED: "Parent test already completed.",
}


def extract_subtest_count(message: str) -> int | None:
    """Return the number of failed subtests named in ``message``.

    Examples
    --------
    >>> extract_subtest_count("3 subtests failed")
    3
    >>> extract_subtest_count("1 subtest failed")
    1
    >>> extract_subtest_count("boom") is None
    True
    """
    match = _SUBTESTS_FAILED.match(message)
    return int(match.group(1)) if match else None


def extract_timeout_ms(message: str) -> int | None:
    """Return the timeout in milliseconds named in ``message``.

    Examples
    --------
    >>> extract_timeout_ms("test timed out after 300ms")
    300
    """
    match = _TIMED_OUT.match(message)
    return int(match.group(1)) if match else None


def extract_hook_name(message: str) -> str | None:
    """Return the hook name from a ``failed running <hook> hook`` message.

    Examples
    --------
    >>> extract_hook_name("failed running afterEach hook")
    'afterEach'
    """
    match = _HOOK_FAILED.search(message)
    return match.group(1) if match else None


@dataclass(slots=True, frozen=True)
class FailureExplanation:
    """What to print for a failed test.

    Attributes
    ----------
    message:
        Sentence appended to the failure line, or ``None``.
    error:
        Error (or string cause) dumped beneath the failure line, or ``None``.
    """

    message: str | None = None
    error: ErrorCause = None


def explain_failure(error: ReportedError | None) -> FailureExplanation | None:
    """Map ``error`` to the message/error pair rendered for a failed test.

    Returns ``None`` when ``error`` carries a ``failureType`` this package does
    not know; callers render the duration only.

    Examples
    --------
    >>> explain_failure(ReportedError("test timed out after 300ms", failure_type="testTimeoutFailure")).message
    'Test timed out after 300ms.'
    >>> explain_failure(ReportedError("x", failure_type="somethingNew")) is None
    True
    """
    if error is None:
        return FailureExplanation()

    if error.failure_type is None:
        # Plain errors: runner-wrapped ones are unwrapped to the user's error.
        if error.code == RUNNER_FAILURE_CODE and error.cause is not None:
            return FailureExplanation(error=error.cause)
        return FailureExplanation(error=error)

    failure_type = FailureType.from_wire(error.failure_type)
    if failure_type is None:
        return None

    if failure_type in _FIXED_MESSAGES:
        return FailureExplanation(message=_FIXED_MESSAGES[failure_type])

    if failure_type is FailureType.SUBTESTS_FAILED:
        count = extract_subtest_count(error.message)
        if count is None:
            return FailureExplanation(message="Some subtests failed.")
        return FailureExplanation(message=f"{count} {pluralize('subtest', count)} failed.")

    if failure_type is FailureType.TEST_TIMEOUT_FAILURE:
        timeout = extract_timeout_ms(error.message)
        if timeout is None:
            return FailureExplanation(message="Test timed out.")
        return FailureExplanation(message=f"Test timed out after {timeout}ms.")

    if failure_type is FailureType.HOOK_FAILED:
        hook = extract_hook_name(error.message)
        message = "Error while running a hook." if hook is None else f"Error while running {hook} hook."
        return FailureExplanation(message=message, error=error.cause)

    # testCodeFailure
    return FailureExplanation(error=error.cause if error.cause is not None else error)


__all__ = [
    "FailureExplanation",
    "FailureType",
    "RUNNER_FAILURE_CODE",
    "explain_failure",
    "extract_hook_name",
    "extract_subtest_count",
    "extract_timeout_ms",
]
