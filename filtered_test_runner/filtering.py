"""Selection of leaf tests from a test tree."""

import logging
import re
from collections.abc import Callable, Collection
from dataclasses import dataclass

from filtered_test_runner.errors import InvalidArgumentError
from filtered_test_runner.models.filter import FilterSpec
from filtered_test_runner.models.tree import TestMode, TestNode

log = logging.getLogger(__name__)

REGEX_METACHARACTERS = frozenset("^$*+?[](){}|\\")

type Predicate = Callable[[TestNode], bool]


def parse_mode(value: str | None) -> TestMode | None:
    """Parse a user supplied mode string.

    Returns None (both modes) for an empty value.

    Raises:
        InvalidArgumentError: If the value is neither 'edit' nor 'play'

    """
    if not value:
        return None

    match value.lower():
        case "edit":
            return "edit"
        case "play":
            return "play"

    raise InvalidArgumentError(
        f"Invalid test mode: '{value}'. Must be 'edit' or 'play'."
    )


def is_regex_pattern(pattern: str) -> bool:
    """Check if a pattern contains any regex metacharacter."""
    return any(char in REGEX_METACHARACTERS for char in pattern)


@dataclass(frozen=True, kw_only=True)
class NameMatcher:
    """Matches full names against a substring or a case-insensitive regex."""

    pattern: str
    regex: re.Pattern[str] | None = None

    @classmethod
    def from_pattern(cls, pattern: str) -> "NameMatcher":
        """Compile the pattern, degrading to substring matching if invalid."""
        if not is_regex_pattern(pattern):
            return cls(pattern=pattern)

        try:
            regex = re.compile(pattern, re.IGNORECASE)
        except re.error as e:
            log.debug("Invalid regex %r, using substring matching: %s", pattern, e)
            return cls(pattern=pattern)

        return cls(pattern=pattern, regex=regex)

    def __call__(self, full_name: str) -> bool:
        if self.regex is not None:
            return self.regex.search(full_name) is not None
        return self.pattern.casefold() in full_name.casefold()


@dataclass(frozen=True, kw_only=True)
class TestFilter:
    """Compiled predicate for a FilterSpec.

    Only leaves are meant to be matched; suites are never selected directly.
    """

    __test__ = False

    mode: TestMode | None = None
    name_matcher: NameMatcher | None = None
    explicit_names: frozenset[str] = frozenset()
    categories: frozenset[str] = frozenset()
    assemblies: Collection[str] = ()

    def __call__(self, node: TestNode) -> bool:
        return self.matches(node)

    def matches(self, node: TestNode) -> bool:
        """Check a leaf against every clause; empty clauses always match."""
        if self.mode is not None and node.effective_mode != self.mode:
            return False

        if self.explicit_names:
            if node.full_name not in self.explicit_names:
                return False
        elif self.name_matcher is not None and not self.name_matcher(node.full_name):
            return False

        if self.categories and self.categories.isdisjoint(node.categories):
            return False

        if self.assemblies:
            assembly = node.assembly_name.casefold()
            if not any(fragment in assembly for fragment in self.assemblies):
                return False

        return True


def compile_filter(spec: FilterSpec) -> TestFilter:
    """Compile selection criteria into a reusable predicate.

    Raises:
        InvalidArgumentError: If spec is None

    """
    if spec is None:
        raise InvalidArgumentError("Filter spec is required")

    return TestFilter(
        mode=spec.mode,
        name_matcher=(
            NameMatcher.from_pattern(spec.name_pattern) if spec.name_pattern else None
        ),
        explicit_names=frozenset(spec.explicit_names or ()),
        categories=spec.categories,
        assemblies=tuple(fragment.casefold() for fragment in spec.assemblies),
    )


def select_tests(tree: TestNode, predicate: Predicate) -> list[TestNode]:
    """Collect matching leaves of a tree in depth-first pre-order.

    Every node is visited; suites are recursed into regardless of whether
    anything below them matches.

    Args:
        tree: Root of the test tree
        predicate: Leaf predicate, usually from compile_filter

    Returns:
        Matching leaves in discovery order (possibly empty)

    Raises:
        InvalidArgumentError: If tree or predicate is None

    """
    if tree is None:
        raise InvalidArgumentError("Test tree is required")
    if predicate is None:
        raise InvalidArgumentError("Filter predicate is required")

    selected = [leaf for leaf in tree.iter_leaves() if predicate(leaf)]

    log.debug("Filtered %d tests from tree %s", len(selected), tree.full_name)
    return selected
