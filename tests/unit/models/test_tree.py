"""Tests for test tree models."""

import pytest
from pydantic import ValidationError

from filtered_test_runner.models.tree import TestNode
from filtered_test_runner.testing.factories import TestNodeFactory
from filtered_test_runner.testing.trees import leaf, suite


def test_node_without_children_is_leaf() -> None:
    """A node with no children is a leaf."""
    node = TestNodeFactory.build()

    assert node.is_leaf
    assert not suite("Suite", node).is_leaf


def test_effective_mode_defaults_to_edit() -> None:
    """Nodes without a mode are edit mode tests."""
    assert leaf("A.B").effective_mode == "edit"
    assert leaf("A.B", mode="play").effective_mode == "play"


def test_assembly_name_falls_back_to_first_segment() -> None:
    """The first dotted segment stands in for a missing assembly."""
    assert leaf("Game.Tests.Case").assembly_name == "Game"
    assert leaf("Standalone").assembly_name == "Standalone"
    assert leaf("Game.Tests.Case", assembly="Game.Tests").assembly_name == "Game.Tests"


def test_iter_leaves_in_pre_order() -> None:
    """Leaves are yielded depth first in declaration order."""
    tree = suite(
        "root",
        suite("A", leaf("A.1"), suite("A.B", leaf("A.B.1"))),
        leaf("C"),
    )

    assert [node.full_name for node in tree.iter_leaves()] == ["A.1", "A.B.1", "C"]


def test_empty_suite_has_no_leaves_below_it() -> None:
    """A suite with no children counts as a leaf itself."""
    node = suite("Empty")

    assert list(node.iter_leaves()) == [node]


def test_node_is_frozen() -> None:
    """Nodes are immutable."""
    node = leaf("A.B")

    with pytest.raises(ValidationError):
        node.full_name = "C.D"  # type: ignore[misc]


def test_validates_nested_tree_from_json() -> None:
    """Engine trees can be loaded from JSON documents."""
    node = TestNode.model_validate_json(
        """{
            "id": "1",
            "full_name": "Game",
            "children": [
                {"id": "2", "full_name": "Game.Case", "categories": ["Unit"], "mode": "play"}
            ]
        }"""
    )

    child = node.children[0]
    assert child.categories == frozenset({"Unit"})
    assert child.mode == "play"


def test_rejects_unknown_mode() -> None:
    """Only edit and play are valid modes."""
    with pytest.raises(ValidationError):
        TestNode(id="1", full_name="A", mode="runtime")  # type: ignore[arg-type]
