"""Abstract base class for event-driven test execution engines."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from filtered_test_runner.models.tree import TestMode, TestNode


@dataclass(frozen=True, kw_only=True)
class TestFinishedEvent:
    """Payload of a test-finished callback.

    ``outcome`` is the engine's own status code (e.g. "Passed", "Failed").
    """

    __test__ = False

    test: TestNode
    outcome: str
    message: str | None = None
    stack_trace: str | None = None
    duration_seconds: float = 0.0


class RunCallbacks(Protocol):
    """Listener for the events an engine emits during a run.

    Engines may invoke these from any thread.
    """

    def run_started(self, tree: TestNode) -> None:
        """Called once when the run begins."""

    def run_finished(self, outcome: str) -> None:
        """Called once when the run is over, with the engine's overall code."""

    def test_started(self, test: TestNode) -> None:
        """Called before a leaf test executes."""

    def test_finished(self, event: TestFinishedEvent) -> None:
        """Called after a leaf test executes."""


class ExecutionEngine(ABC):
    """Abstract base for test execution engines.

    Execution is fire-and-forget: ``execute`` only triggers a run, and
    progress is reported to registered callbacks.
    """

    @abstractmethod
    async def retrieve_test_tree(self, mode: TestMode | None) -> TestNode:
        """Return the test tree for the given mode (None for every mode).

        Args:
            mode: Execution environment to list tests for

        Returns:
            Root node of the test tree

        """

    @abstractmethod
    def execute(self, selection: Sequence[TestNode]) -> None:
        """Trigger execution of the given leaves.

        Args:
            selection: Leaf tests to run, in the order they were selected

        Raises:
            Exception: Any failure to start the run, synchronously

        """

    @abstractmethod
    def register_callbacks(self, callbacks: RunCallbacks) -> None:
        """Subscribe a listener to run events."""

    @abstractmethod
    def unregister_callbacks(self, callbacks: RunCallbacks) -> None:
        """Unsubscribe a listener; unknown listeners are ignored."""
