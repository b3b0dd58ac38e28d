"""Models for test run outcomes."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

type TestStatus = Literal["passed", "failed", "skipped", "inconclusive"]


@dataclass(frozen=True, kw_only=True)
class TestCaseResult:
    """Result of a single leaf test reported by a live run."""

    __test__ = False

    full_name: str
    status: TestStatus
    message: str = ""
    stack_trace: str = ""
    duration_seconds: float = 0.0


@dataclass(frozen=True, kw_only=True)
class FailedTestDetail:
    """Details of a failed test, from a live run or a results document."""

    test_name: str
    test_suite: str = ""
    failure_message: str = ""
    stack_trace: str = ""
    duration_seconds: float = 0.0
    result_label: str = ""


@dataclass(frozen=True, kw_only=True)
class RunOutcome:
    """Aggregated result of a test run.

    Produced both by the execution bridge and by the results document parser.
    ``test_results`` is only populated for live runs.
    """

    total: int = 0
    passed: int = 0
    failed: int = 0
    skipped: int = 0
    duration_seconds: float = 0.0
    start_time: str = ""
    end_time: str = ""
    test_results: Sequence[TestCaseResult] = ()
    failed_details: Sequence[FailedTestDetail] = ()

    @classmethod
    def empty(cls) -> "RunOutcome":
        return cls()

    @property
    def success_rate(self) -> float:
        """Percentage of passed tests, 0 when nothing ran."""
        if self.total <= 0:
            return 0.0
        return self.passed / self.total * 100.0

    @property
    def has_failures(self) -> bool:
        return self.failed > 0

    @property
    def all_passed(self) -> bool:
        return self.failed == 0 and self.total > 0
