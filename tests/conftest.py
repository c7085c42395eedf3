"""
Shared pytest fixtures for tree, service and HTTP tests.
"""

import pytest

from avltree.models.node import Node
from avltree.models.sortedcontainers import BalancedSearchTree
from avltree.service import TreeService


def check_subtree(node: Node | None, policy) -> tuple[int, int]:
    """Recompute (height, count) of a subtree and assert every AVL invariant on the way."""
    if node is None:
        return 0, 0

    left_height, left_count = check_subtree(node.left, policy)
    right_height, right_count = check_subtree(node.right, policy)

    if node.left is not None:
        assert policy.compare(node.left.key, node.key) < 0
    if node.right is not None:
        assert policy.compare(node.right.key, node.key) > 0

    assert abs(left_height - right_height) <= 1, f"unbalanced at {node.key!r}"
    height = 1 + max(left_height, right_height)
    assert node.height == height, f"stale height at {node.key!r}"
    return height, 1 + left_count + right_count


@pytest.fixture
def assert_avl():
    """Provide a checker asserting balance, cached heights, ordering and node count."""

    def check(tree: BalancedSearchTree) -> None:
        height, count = check_subtree(tree.root, tree.policy)
        assert tree.height() == height
        assert tree.size() == count

        keys = tree.keys()
        assert len(keys) == count
        assert all(tree.policy.compare(a, b) < 0 for a, b in zip(keys, keys[1:]))

    return check


@pytest.fixture
def numeric_tree():
    """Provide an empty integer-keyed tree."""
    return BalancedSearchTree.integers()


@pytest.fixture
def word_tree():
    """Provide an empty word-keyed tree."""
    return BalancedSearchTree.words()


@pytest.fixture
def sample_words():
    """Provide the sample vocabulary used by the auto-suggest demo."""
    return [
        "Apple", "Banana", "Cherry", "Date", "Elderberry", "Fig", "Grape", "Honeydew",
        "India", "Japan", "Kenya", "London", "Mumbai", "Norway", "Orlando", "Paris",
        "Quebec", "Russia", "Spain", "Turkey", "Ukraine", "Vietnam", "Wales", "Xavier",
        "Amazon", "Boeing", "Cisco", "Dell", "eBay", "Facebook", "Google", "HP",
        "JavaScript", "Python", "React", "Angular", "Vue", "Node", "Express", "MongoDB",
    ]


@pytest.fixture
def numeric_service():
    """Provide a TreeService owning an integer tree."""
    return TreeService(BalancedSearchTree.integers(), name="numbers")


@pytest.fixture
def word_service():
    """Provide a TreeService owning a word tree."""
    return TreeService(BalancedSearchTree.words(), name="words", max_suggestions=20)
