"""Scripted engine manifest."""

from filtered_test_runner.engines.manifest import EngineManifest
from filtered_test_runner.engines.scripted.config import ScriptedEngineConfig
from filtered_test_runner.engines.scripted.engine import ScriptedEngine

scripted_manifest = EngineManifest(
    config_cls=ScriptedEngineConfig,
    engine_factory=ScriptedEngine.from_config,
)
