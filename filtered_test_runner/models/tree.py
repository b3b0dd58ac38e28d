"""Test tree supplied by an execution engine."""

from collections.abc import Iterator
from typing import Literal

from pydantic import Field

from filtered_test_runner.models.base import Model

type TestMode = Literal["edit", "play"]

# Engines that do not report a mode per node are assumed to run edit mode tests.
DEFAULT_TEST_MODE: TestMode = "edit"


class TestNode(Model):
    """A suite or leaf test case in a test tree.

    A node is a leaf iff it has no children. ``mode`` and ``assembly`` are
    optional because not every engine knows them; when they are missing
    they are derived from the node's full name.
    """

    __test__ = False

    id: str = Field(..., description="Engine-specific node identifier")
    name: str = Field(default="", description="Short display name")
    full_name: str = Field(..., description="Dotted name, e.g. Namespace.Class.Method")
    categories: frozenset[str] = Field(
        default_factory=frozenset, description="Category tags"
    )
    mode: TestMode | None = Field(
        default=None, description="Execution environment, if known"
    )
    assembly: str | None = Field(
        default=None, description="Assembly or module name, if known"
    )
    children: tuple["TestNode", ...] = Field(
        default=(), description="Child nodes in declaration order"
    )

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def effective_mode(self) -> TestMode:
        """Explicit mode, or the default mode when the engine gave none."""
        return self.mode if self.mode is not None else DEFAULT_TEST_MODE

    @property
    def assembly_name(self) -> str:
        """Explicit assembly, or the first segment of the full name.

        The fallback is only an approximation: root namespaces often match
        the assembly name but nothing guarantees it.
        """
        if self.assembly is not None:
            return self.assembly
        return self.full_name.split(".", 1)[0]

    def iter_leaves(self) -> Iterator["TestNode"]:
        """Yield every leaf below this node in pre-order."""
        stack: list[TestNode] = [self]
        while stack:
            node = stack.pop()
            if node.is_leaf:
                yield node
            else:
                stack.extend(reversed(node.children))
