"""Conversion of run outcomes into command response data."""

from pathlib import Path
from typing import Any

from filtered_test_runner.models.result import FailedTestDetail, RunOutcome


def format_path(path: Path | None) -> str | None:
    return str(path) if path is not None else None


def format_failed_detail(detail: FailedTestDetail) -> dict[str, Any]:
    return {
        "testName": detail.test_name,
        "testSuite": detail.test_suite,
        "failureMessage": detail.failure_message,
        "stackTrace": detail.stack_trace,
        "duration": round(detail.duration_seconds, 3),
        "result": detail.result_label,
    }


def format_run_outcome(outcome: RunOutcome) -> dict[str, Any]:
    """Format a live run outcome, including every per-test result."""
    return {
        "totalTests": outcome.total,
        "passedTests": outcome.passed,
        "failedTests": outcome.failed,
        "skippedTests": outcome.skipped,
        "duration": outcome.duration_seconds,
        "startTime": outcome.start_time,
        "endTime": outcome.end_time,
        "results": [
            {
                "fullName": result.full_name,
                "status": result.status,
                "message": result.message,
                "stackTrace": result.stack_trace,
                "duration": result.duration_seconds,
            }
            for result in outcome.test_results
        ],
        "failedTestDetails": [
            format_failed_detail(detail) for detail in outcome.failed_details
        ],
    }


def format_results_summary(outcome: RunOutcome) -> dict[str, Any]:
    """Format an outcome parsed from a results document."""
    return {
        "totalTests": outcome.total,
        "passedTests": outcome.passed,
        "failedTests": outcome.failed,
        "skippedTests": outcome.skipped,
        "successRate": round(outcome.success_rate, 2),
        "durationSeconds": round(outcome.duration_seconds, 3),
        "startTime": outcome.start_time,
        "endTime": outcome.end_time,
        "failedTestDetails": [
            format_failed_detail(detail) for detail in outcome.failed_details
        ],
        "hasFailures": outcome.has_failures,
        "allTestsPassed": outcome.all_passed,
    }


def run_message(outcome: RunOutcome) -> str:
    return (
        f"Executed {outcome.total} tests: {outcome.passed} passed, "
        f"{outcome.failed} failed, {outcome.skipped} skipped"
    )


def summary_message(outcome: RunOutcome) -> str:
    if outcome.total == 0:
        return "No tests found in test results"
    if outcome.failed == 0:
        return (
            f"All {outcome.passed} tests passed! "
            f"Duration: {outcome.duration_seconds:.2f}s"
        )
    return (
        f"Test results: {outcome.passed}/{outcome.total} passed, "
        f"{outcome.failed} failed"
    )
