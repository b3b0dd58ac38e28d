"""Scripted engine module."""

from filtered_test_runner.engines.scripted.config import (
    ScriptedEngineConfig,
    ScriptedOutcome,
)
from filtered_test_runner.engines.scripted.engine import ScriptedEngine
from filtered_test_runner.engines.scripted.manifest import scripted_manifest

__all__ = [
    "ScriptedEngine",
    "ScriptedEngineConfig",
    "ScriptedOutcome",
    "scripted_manifest",
]
