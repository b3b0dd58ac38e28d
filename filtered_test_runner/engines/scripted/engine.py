"""Scripted engine that replays a declared test tree."""

import asyncio
import logging
from collections.abc import AsyncGenerator, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass, field

from filtered_test_runner.engines.base import (
    ExecutionEngine,
    RunCallbacks,
    TestFinishedEvent,
)
from filtered_test_runner.engines.scripted.config import (
    ScriptedEngineConfig,
    ScriptedOutcome,
)
from filtered_test_runner.models.tree import TestMode, TestNode

log = logging.getLogger(__name__)


@dataclass(kw_only=True)
class ScriptedEngine(ExecutionEngine):
    """Engine whose tests and outcomes come entirely from its configuration.

    Runs are played back as a task on the running event loop, so callbacks
    arrive asynchronously after ``execute`` returns, like a real engine.
    """

    config: ScriptedEngineConfig
    _callbacks: list[RunCallbacks] = field(default_factory=list, init=False, repr=False)
    _tasks: set[asyncio.Task[None]] = field(default_factory=set, init=False, repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: ScriptedEngineConfig
    ) -> AsyncGenerator["ScriptedEngine", None]:
        """Create engine and cancel unfinished playbacks on exit."""
        engine = cls(config=config)
        try:
            yield engine
        finally:
            await engine.cancel_pending()

    async def retrieve_test_tree(self, mode: TestMode | None) -> TestNode:
        """Return the configured tree; mode selection is left to the filter."""
        return self.config.tree

    def execute(self, selection: Sequence[TestNode]) -> None:
        """Schedule playback of the selected leaves."""
        known = {leaf.full_name for leaf in self.config.tree.iter_leaves()}
        unknown = [test.full_name for test in selection if test.full_name not in known]
        if unknown:
            raise ValueError(f"Tests not found in scripted tree: {unknown}")

        task = asyncio.get_running_loop().create_task(self._play(tuple(selection)))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def register_callbacks(self, callbacks: RunCallbacks) -> None:
        if callbacks not in self._callbacks:
            self._callbacks.append(callbacks)

    def unregister_callbacks(self, callbacks: RunCallbacks) -> None:
        if callbacks in self._callbacks:
            self._callbacks.remove(callbacks)

    async def cancel_pending(self) -> None:
        """Cancel playbacks that have not finished yet."""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    async def _play(self, selection: Sequence[TestNode]) -> None:
        log.info("Playing back %d scripted test(s)", len(selection))
        for listener in tuple(self._callbacks):
            listener.run_started(self.config.tree)

        any_failed = False
        for test in selection:
            await asyncio.sleep(self.config.event_interval)

            for listener in tuple(self._callbacks):
                listener.test_started(test)

            scripted = self.config.outcomes.get(
                test.full_name, ScriptedOutcome(outcome=self.config.default_outcome)
            )
            any_failed = any_failed or scripted.outcome.lower() == "failed"
            event = TestFinishedEvent(
                test=test,
                outcome=scripted.outcome,
                message=scripted.message,
                stack_trace=scripted.stack_trace,
                duration_seconds=scripted.duration_seconds,
            )
            for listener in tuple(self._callbacks):
                listener.test_finished(event)

        for listener in tuple(self._callbacks):
            listener.run_finished("Failed" if any_failed else "Passed")
