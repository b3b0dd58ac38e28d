"""Engine manifest definition for the plugin system."""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass

from pydantic import BaseModel

from filtered_test_runner.coverage.base import CoverageService
from filtered_test_runner.engines.base import ExecutionEngine


@dataclass(frozen=True, kw_only=True)
class EngineManifest[ConfigT: BaseModel]:
    """Manifest describing an execution engine plugin.

    The manifest references the configuration class and the factories used
    to lazily build the engine (and, optionally, its coverage service) from
    a validated configuration.
    """

    config_cls: type[ConfigT]
    engine_factory: Callable[[ConfigT], AbstractAsyncContextManager[ExecutionEngine]]
    coverage_factory: Callable[[ConfigT], CoverageService] | None = None
