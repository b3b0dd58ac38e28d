"""Bridge from an event-driven execution engine to a single awaitable outcome."""

import asyncio
import logging
import time
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from filtered_test_runner.engines.base import ExecutionEngine, TestFinishedEvent
from filtered_test_runner.models.result import (
    FailedTestDetail,
    RunOutcome,
    TestCaseResult,
    TestStatus,
)
from filtered_test_runner.models.tree import TestNode

log = logging.getLogger(__name__)

OUTCOME_TO_STATUS: Mapping[str, TestStatus] = {
    "passed": "passed",
    "failed": "failed",
    "skipped": "skipped",
    "inconclusive": "inconclusive",
}


def classify_outcome(outcome: str | None) -> TestStatus:
    """Map an engine outcome code to a status; unknown codes are inconclusive."""
    if not outcome:
        return "inconclusive"
    return OUTCOME_TO_STATUS.get(outcome.strip().lower(), "inconclusive")


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class RunListener:
    """Collects the events of one run and resolves a future when it finishes.

    Engine callbacks may arrive on any thread. They are re-posted to the
    event loop that owns the future, so the accumulated results are only
    ever touched from that loop, in emission order.
    """

    def __init__(
        self, loop: asyncio.AbstractEventLoop, future: asyncio.Future[RunOutcome]
    ) -> None:
        self._loop = loop
        self._future = future
        self._results: list[TestCaseResult] = []
        self._failed_details: list[FailedTestDetail] = []
        self._started_at: float | None = None
        self._start_time = ""
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def run_started(self, tree: TestNode) -> None:
        self._post(self._on_run_started, time.monotonic(), _utc_timestamp())

    def run_finished(self, outcome: str) -> None:
        self._post(self._on_run_finished, outcome, time.monotonic(), _utc_timestamp())

    def test_started(self, test: TestNode) -> None:
        log.debug("Starting test: %s", test.full_name)

    def test_finished(self, event: TestFinishedEvent) -> None:
        self._post(self._on_test_finished, event)

    def reject(self, error: BaseException) -> None:
        """Fail the pending outcome unless it is already resolved."""
        if not self._future.done():
            self._future.set_exception(error)

    def close(self) -> bool:
        """Stop accepting events. Returns False if already closed."""
        if self._closed:
            return False
        self._closed = True
        return True

    def _post(self, callback: Callable[..., None], *args: Any) -> None:
        if self._closed:
            return
        try:
            self._loop.call_soon_threadsafe(callback, *args)
        except RuntimeError:
            log.debug("Dropping run event, event loop is closed")

    def _on_run_started(self, started_at: float, start_time: str) -> None:
        if self._future.done():
            return
        self._started_at = started_at
        self._start_time = start_time
        log.info("Test run started")

    def _on_test_finished(self, event: TestFinishedEvent) -> None:
        if self._future.done():
            return

        full_name = event.test.full_name
        status = classify_outcome(event.outcome)
        message = event.message or ""
        stack_trace = event.stack_trace or ""

        self._results.append(
            TestCaseResult(
                full_name=full_name,
                status=status,
                message=message,
                stack_trace=stack_trace,
                duration_seconds=event.duration_seconds,
            )
        )

        if status == "failed":
            self._failed_details.append(
                FailedTestDetail(
                    test_name=full_name,
                    test_suite=full_name.rpartition(".")[0],
                    failure_message=message,
                    stack_trace=stack_trace,
                    duration_seconds=event.duration_seconds,
                    result_label=event.outcome,
                )
            )
            log.error("Test failed: %s\n%s", full_name, message)
        else:
            log.info("Test %s: %s", status, full_name)

    def _on_run_finished(self, outcome: str, finished_at: float, end_time: str) -> None:
        if self._future.done():
            return

        if self._started_at is None:
            log.warning("Run finished without a run-started event")
            duration = 0.0
        else:
            duration = max(finished_at - self._started_at, 0.0)

        results = tuple(self._results)
        run_outcome = RunOutcome(
            total=len(results),
            passed=sum(1 for r in results if r.status == "passed"),
            failed=sum(1 for r in results if r.status == "failed"),
            skipped=sum(1 for r in results if r.status == "skipped"),
            duration_seconds=duration,
            start_time=self._start_time,
            end_time=end_time,
            test_results=results,
            failed_details=tuple(self._failed_details),
        )

        log.info(
            "Test run finished (%s): %d passed, %d failed, %d skipped",
            outcome,
            run_outcome.passed,
            run_outcome.failed,
            run_outcome.skipped,
        )
        self._future.set_result(run_outcome)


@dataclass(kw_only=True)
class ExecutionBridge:
    """Runs a selection on an engine and awaits its aggregated outcome.

    Only one run may be in flight per bridge.
    """

    engine: ExecutionEngine
    _listener: RunListener | None = field(default=None, init=False, repr=False)

    @property
    def running(self) -> bool:
        return self._listener is not None

    async def run(
        self, selection: Sequence[TestNode], timeout: float | None = None
    ) -> RunOutcome:
        """Execute the selected leaves and wait for the run to finish.

        An empty selection resolves immediately without touching the engine.

        Args:
            selection: Leaf tests to run
            timeout: Maximum wait time in seconds (None waits forever)

        Returns:
            Aggregated outcome with per-test results in emission order

        Raises:
            RuntimeError: If another run is in progress on this bridge
            TimeoutError: If the run does not finish within timeout
            Exception: Whatever the engine raised when triggering the run

        """
        if not selection:
            log.info("No tests selected, skipping execution")
            return RunOutcome.empty()

        if self._listener is not None:
            raise RuntimeError("A test run is already in progress on this bridge")

        loop = asyncio.get_running_loop()
        future: asyncio.Future[RunOutcome] = loop.create_future()
        listener = RunListener(loop, future)
        self._listener = listener

        try:
            # Subscribe first so events emitted while triggering are not lost.
            self.engine.register_callbacks(listener)

            log.info("Running %d selected test(s)", len(selection))
            try:
                self.engine.execute(list(selection))
            except Exception as e:
                log.error("Test execution failed to start: %s", e)
                listener.reject(e)

            async with asyncio.timeout(timeout):
                return await future
        finally:
            self._teardown(listener)

    def close(self) -> None:
        """Unregister the current listener, if any. Safe to call repeatedly."""
        if self._listener is not None:
            self._teardown(self._listener)

    def _teardown(self, listener: RunListener) -> None:
        if self._listener is listener:
            self._listener = None
        if listener.close():
            self.engine.unregister_callbacks(listener)
