"""Collaborators available to command handlers."""

from dataclasses import dataclass, field

from filtered_test_runner.coverage.base import CoverageService
from filtered_test_runner.coverage.unavailable import UnavailableCoverageService
from filtered_test_runner.engines.base import ExecutionEngine
from filtered_test_runner.errors import NotAvailableError
from filtered_test_runner.results.locator import ResultsLocatorConfig


@dataclass(frozen=True, kw_only=True)
class CommandContext:
    """Engine, coverage service and locator settings shared by commands."""

    engine: ExecutionEngine | None = None
    coverage: CoverageService = field(default_factory=UnavailableCoverageService)
    locator: ResultsLocatorConfig = field(default_factory=ResultsLocatorConfig)
    run_timeout: float | None = None

    def require_engine(self) -> ExecutionEngine:
        if self.engine is None:
            raise NotAvailableError("No test execution engine is configured")
        return self.engine
