"""Abstract base class for code coverage collaborators."""

from abc import ABC, abstractmethod
from pathlib import Path


class CoverageService(ABC):
    """Controls coverage recording for the engine's test runs.

    Coverage support is optional; callers should check ``is_available``
    before relying on anything else.
    """

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the coverage backend is installed."""

    @abstractmethod
    def is_enabled(self) -> bool:
        """Check if coverage recording is enabled."""

    @abstractmethod
    def auto_generate_report(self) -> bool:
        """Check if a report is generated whenever recording stops."""

    @abstractmethod
    def is_recording(self) -> bool:
        """Check if coverage is currently being recorded."""

    @abstractmethod
    def set_enabled(self, enabled: bool, auto_generate_report: bool = False) -> None:
        """Enable or disable coverage recording.

        Raises:
            NotAvailableError: If the coverage backend is not installed

        """

    @abstractmethod
    def start_recording(self) -> None:
        """Reset collected data and start recording.

        Raises:
            CoverageNotEnabledError: If coverage has not been enabled
            NotAvailableError: If the coverage backend is not installed

        """

    @abstractmethod
    def stop_recording(self) -> None:
        """Stop recording.

        Raises:
            NotAvailableError: If the coverage backend is not installed

        """

    @abstractmethod
    async def generate_report(self) -> Path:
        """Generate an HTML report and return the path of its index page.

        Raises:
            NotAvailableError: If the coverage backend is not installed

        """

    @abstractmethod
    def results_path(self) -> Path | None:
        """Directory holding coverage results, or None if unavailable."""
