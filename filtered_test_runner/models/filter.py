"""Selection criteria for filtered test runs."""

from pydantic import Field

from filtered_test_runner.models.base import Model
from filtered_test_runner.models.tree import TestMode


class FilterSpec(Model):
    """Criteria used to select leaf tests from a test tree.

    Every criterion is optional; an empty spec selects every leaf.
    """

    mode: TestMode | None = Field(
        default=None, description="Execution environment (None means both)"
    )
    name_pattern: str | None = Field(
        default=None, description="Substring or regex matched against full names"
    )
    categories: frozenset[str] = Field(
        default_factory=frozenset, description="Categories to include (any of)"
    )
    assemblies: frozenset[str] = Field(
        default_factory=frozenset, description="Assembly name fragments (any of)"
    )
    explicit_names: tuple[str, ...] | None = Field(
        default=None,
        description="Exact full names to run; overrides name_pattern when non-empty",
    )
