"""Configuration for the scripted engine."""

from pydantic import BaseModel, Field

from filtered_test_runner.models.tree import TestNode


class ScriptedOutcome(BaseModel):
    """Outcome reported for one test by the scripted engine."""

    outcome: str = "Passed"
    message: str | None = None
    stack_trace: str | None = None
    duration_seconds: float = Field(default=0.0, ge=0)


class ScriptedEngineConfig(BaseModel):
    """Configuration for the scripted engine."""

    tree: TestNode
    # Keyed by full test name; tests not listed report default_outcome
    outcomes: dict[str, ScriptedOutcome] = Field(default_factory=dict)
    default_outcome: str = "Passed"
    event_interval: float = Field(default=0.0, ge=0)
