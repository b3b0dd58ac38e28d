"""Coverage service used when no coverage backend is installed."""

from pathlib import Path
from typing import NoReturn

from filtered_test_runner.coverage.base import CoverageService
from filtered_test_runner.errors import NotAvailableError

NOT_INSTALLED_MESSAGE = (
    "Code coverage backend is not installed. "
    "Use an engine that provides coverage support."
)


class UnavailableCoverageService(CoverageService):
    """Reports coverage as unavailable and refuses every mutating call."""

    def is_available(self) -> bool:
        return False

    def is_enabled(self) -> bool:
        return False

    def auto_generate_report(self) -> bool:
        return False

    def is_recording(self) -> bool:
        return False

    def set_enabled(self, enabled: bool, auto_generate_report: bool = False) -> None:
        self._not_available()

    def start_recording(self) -> None:
        self._not_available()

    def stop_recording(self) -> None:
        self._not_available()

    async def generate_report(self) -> Path:
        self._not_available()

    def results_path(self) -> Path | None:
        return None

    def _not_available(self) -> NoReturn:
        raise NotAvailableError(NOT_INSTALLED_MESSAGE)
