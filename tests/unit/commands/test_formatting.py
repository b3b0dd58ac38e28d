"""Tests for response data formatting."""

from filtered_test_runner.commands.formatting import (
    format_failed_detail,
    format_results_summary,
    format_run_outcome,
    run_message,
)
from filtered_test_runner.models.result import RunOutcome
from filtered_test_runner.testing.factories import (
    FailedTestDetailFactory,
    TestCaseResultFactory,
)


def test_format_failed_detail() -> None:
    """Uses camelCase keys and rounds the duration."""
    detail = FailedTestDetailFactory.build(duration_seconds=0.123456)

    formatted = format_failed_detail(detail)

    assert formatted["testName"] == detail.test_name
    assert formatted["testSuite"] == detail.test_suite
    assert formatted["duration"] == 0.123
    assert formatted["result"] == "Failed"


def test_format_run_outcome_lists_results_in_order() -> None:
    """Every per-test result is included in order."""
    results = TestCaseResultFactory.batch(3, status="passed")
    outcome = RunOutcome(total=3, passed=3, test_results=tuple(results))

    formatted = format_run_outcome(outcome)

    assert [r["fullName"] for r in formatted["results"]] == [
        r.full_name for r in results
    ]
    assert formatted["totalTests"] == 3
    assert formatted["failedTestDetails"] == []


def test_format_results_summary() -> None:
    """Adds derived rate and flags."""
    outcome = RunOutcome(
        total=3,
        passed=2,
        failed=1,
        duration_seconds=1.23456,
        failed_details=(FailedTestDetailFactory.build(),),
    )

    formatted = format_results_summary(outcome)

    assert formatted["successRate"] == 66.67
    assert formatted["durationSeconds"] == 1.235
    assert formatted["hasFailures"] is True
    assert formatted["allTestsPassed"] is False
    assert len(formatted["failedTestDetails"]) == 1
    assert "results" not in formatted


def test_run_message() -> None:
    """Summarises the counters."""
    outcome = RunOutcome(total=4, passed=2, failed=1, skipped=1)

    assert run_message(outcome) == "Executed 4 tests: 2 passed, 1 failed, 1 skipped"
