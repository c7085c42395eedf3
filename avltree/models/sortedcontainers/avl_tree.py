"""
AVL tree implementation for ordered unique keys.

Keeps |height(left) - height(right)| <= 1 at every node, so insert, delete
and lookup are all O(log N).
"""

import logging
from collections.abc import Iterator
from typing import Any

from avltree.interfaces.sorted_container import SortedContainer
from avltree.models.exceptions import PrefixQueryUnsupportedError
from avltree.models.key_policy import IntegerKeys, KeyPolicy, WordKeys
from avltree.models.node import Node, balance_of
from avltree.models.outcome import Mutation, Outcome, Suggestion, TreeStats
from avltree.models.rotation import Rotation, RotationKind

logger = logging.getLogger(__name__)


class BalancedSearchTree(SortedContainer):
    """
    AVL tree implementation of SortedContainer.

    The same algorithm serves every key shape; a KeyPolicy decides how raw
    input is validated, normalized and compared.

    Properties maintained:
    1. Keys are unique and in-order traversal is strictly ascending
    2. Every node caches height = 1 + max(height(left), height(right))
    3. Every node has a balance factor in {-1, 0, 1}
    4. size() equals the number of nodes reachable from the root
    """

    def __init__(self, policy: KeyPolicy | None = None) -> None:
        self._policy: KeyPolicy = policy if policy is not None else IntegerKeys()
        self._root: Node | None = None
        self._size: int = 0
        self._rotations: list[Rotation] = []

    @classmethod
    def integers(cls) -> "BalancedSearchTree":
        return cls(IntegerKeys())

    @classmethod
    def words(cls) -> "BalancedSearchTree":
        return cls(WordKeys())

    @property
    def policy(self) -> KeyPolicy:
        return self._policy

    @property
    def root(self) -> Node | None:
        return self._root

    @property
    def last_rotations(self) -> list[Rotation]:
        """Rotations applied by the most recent insert or delete."""
        return list(self._rotations)

    def insert(self, raw: Any) -> Mutation:
        """
        Insert a key. O(log N)

        Raises:
            InvalidKeyError: If the policy rejects the input. The tree is untouched.
        """
        key, display = self._policy.parse(raw)

        self._rotations = []
        size_before = self._size
        self._root = self._insert(self._root, key, display)

        outcome = Outcome.INSERTED if self._size > size_before else Outcome.DUPLICATE
        return Mutation(outcome=outcome, key=key, rotations=list(self._rotations))

    def delete(self, raw: Any) -> Mutation:
        """
        Delete a key. O(log N)

        Raises:
            InvalidKeyError: If the policy rejects the input. The tree is untouched.
        """
        key, _ = self._policy.parse(raw)

        self._rotations = []
        size_before = self._size
        self._root = self._delete(self._root, key)

        outcome = Outcome.DELETED if self._size < size_before else Outcome.NOT_FOUND
        return Mutation(outcome=outcome, key=key, rotations=list(self._rotations))

    def get(self, raw: Any) -> Any | None:
        """Return the display value of a key (the key itself if it has none)."""
        key, _ = self._policy.parse(raw)
        node = self._find_node(key)
        if node is None:
            return None
        return node.display if node.display is not None else node.key

    def has(self, raw: Any) -> bool:
        key, _ = self._policy.parse(raw)
        return self._find_node(key) is not None

    def suggest(self, prefix: Any, limit: int = 10) -> list[Suggestion]:
        """
        Return up to `limit` keys starting with `prefix`, in ascending order.

        Subtrees that cannot hold a match are pruned and the walk stops as
        soon as `limit` hits are collected. A blank prefix matches nothing.

        Raises:
            PrefixQueryUnsupportedError: If the key policy has no notion of prefixes.
            ValueError: If limit is not a positive integer.
        """
        if not self._policy.supports_prefix:
            raise PrefixQueryUnsupportedError(self._policy.name)

        if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
            raise ValueError(f"limit must be a positive integer, got {limit!r}")

        normalized = self._policy.parse_prefix(prefix)
        if not normalized:
            return []

        hits: list[Suggestion] = []
        self._collect_prefix(self._root, normalized, limit, hits)
        return hits

    def size(self) -> int:
        return self._size

    def __len__(self) -> int:
        return self._size

    def __contains__(self, raw: Any) -> bool:
        return self.has(raw)

    def height(self) -> int:
        return self._root.height if self._root is not None else 0

    def min_height(self) -> int:
        """
        Smallest height any binary tree holding size() keys could have.

        Informational only; never used to validate or reshape the tree.
        """
        # ceil(log2(n + 1)) computed exactly
        return self._size.bit_length()

    def stats(self) -> TreeStats:
        height = self.height()
        return TreeStats(
            node_count=self._size,
            height=height,
            min_height=self.min_height(),
            depth=max(height - 1, 0),
        )

    def snapshot(self) -> dict[str, Any] | None:
        """Serializable copy of the whole tree, or None when empty."""
        return self._root.to_dict() if self._root is not None else None

    def clear(self) -> None:
        """Drop every node."""
        logger.info(f"Clearing {self._policy.name} tree with {self._size} keys")
        self._root = None
        self._size = 0
        self._rotations = []

    def keys(self) -> list[Any]:
        return [key for key, _ in self.in_order()]

    def displays(self) -> list[Any]:
        return [display if display is not None else key for key, display in self.in_order()]

    def __iter__(self) -> Iterator[tuple[Any, Any]]:
        return self.in_order()

    def in_order(self) -> Iterator[tuple[Any, Any]]:
        return _InOrderIterator(self._root)

    def _find_node(self, key: Any) -> Node | None:
        """Find node by normalized key."""
        current = self._root
        while current is not None:
            comparison = self._policy.compare(key, current.key)
            if comparison < 0:
                current = current.left
            elif comparison > 0:
                current = current.right
            else:
                return current
        return None

    def _insert(self, node: Node | None, key: Any, display: Any) -> Node:
        if node is None:
            self._size += 1
            return Node(key=key, display=display)

        comparison = self._policy.compare(key, node.key)
        if comparison < 0:
            node.left = self._insert(node.left, key, display)
        elif comparison > 0:
            node.right = self._insert(node.right, key, display)
        else:
            # Duplicate, leave the tree as it is
            return node

        node.update_height()
        balance = node.balance()

        if balance > 1:
            if self._policy.compare(key, node.left.key) < 0:
                return self._rotate_right(node)
            return self._rotate_left_right(node)

        if balance < -1:
            if self._policy.compare(key, node.right.key) > 0:
                return self._rotate_left(node)
            return self._rotate_right_left(node)

        return node

    def _delete(self, node: Node | None, key: Any) -> Node | None:
        if node is None:
            return None

        comparison = self._policy.compare(key, node.key)
        if comparison < 0:
            node.left = self._delete(node.left, key)
        elif comparison > 0:
            node.right = self._delete(node.right, key)
        else:
            if node.left is None or node.right is None:
                # At most one child: splice it out
                self._size -= 1
                return node.left if node.left is not None else node.right

            # Two children: take the successor's content, then remove the successor
            successor = node.right
            while successor.left is not None:
                successor = successor.left

            node.copy_content_from(successor)
            node.right = self._delete(node.right, successor.key)

        return self._rebalance_after_delete(node)

    def _rebalance_after_delete(self, node: Node) -> Node:
        node.update_height()
        balance = node.balance()

        if balance > 1:
            if balance_of(node.left) >= 0:
                return self._rotate_right(node)
            return self._rotate_left_right(node)

        if balance < -1:
            if balance_of(node.right) <= 0:
                return self._rotate_left(node)
            return self._rotate_right_left(node)

        return node

    def _rotate_right(self, y: Node) -> Node:
        """Right rotation around y. y.left must exist."""
        x = y.left
        y.left = x.right
        x.right = y

        # y first, x's height depends on it
        y.update_height()
        x.update_height()

        self._record(RotationKind.RIGHT, y, x)
        return x

    def _rotate_left(self, x: Node) -> Node:
        """Left rotation around x. x.right must exist."""
        y = x.right
        x.right = y.left
        y.left = x

        x.update_height()
        y.update_height()

        self._record(RotationKind.LEFT, x, y)
        return y

    def _rotate_left_right(self, node: Node) -> Node:
        node.left = self._rotate_left(node.left)
        return self._rotate_right(node)

    def _rotate_right_left(self, node: Node) -> Node:
        node.right = self._rotate_right(node.right)
        return self._rotate_left(node)

    def _record(self, kind: RotationKind, pivot: Node, new_root: Node) -> None:
        logger.debug(f"Rotate {kind.value} at {pivot.key!r}, new subtree root {new_root.key!r}")
        self._rotations.append(Rotation(kind=kind, pivot=pivot.key, new_root=new_root.key))

    def _collect_prefix(
        self, node: Node | None, prefix: Any, limit: int, hits: list[Suggestion]
    ) -> None:
        """In-order walk restricted to subtrees that can still hold a match."""
        if node is None or len(hits) >= limit:
            return

        matches = self._policy.matches_prefix(node.key, prefix)
        comparison = self._policy.compare(prefix, node.key)

        if comparison <= 0:
            self._collect_prefix(node.left, prefix, limit, hits)

        if matches and len(hits) < limit:
            hits.append(Suggestion(key=node.key, display=node.display))

        if comparison >= 0 or matches:
            self._collect_prefix(node.right, prefix, limit, hits)


class _InOrderIterator(Iterator[tuple[Any, Any]]):
    """Stack based in-order iterator over (key, display) pairs."""

    def __init__(self, root: Node | None) -> None:
        self._stack: list[Node] = []
        self._push_left_path(root)

    def __iter__(self) -> Iterator[tuple[Any, Any]]:
        return self

    def __next__(self) -> tuple[Any, Any]:
        if not self._stack:
            raise StopIteration

        node = self._stack.pop()
        result = (node.key, node.display)

        # Push right subtree's left path
        self._push_left_path(node.right)

        return result

    def _push_left_path(self, node: Node | None) -> None:
        while node is not None:
            self._stack.append(node)
            node = node.left
