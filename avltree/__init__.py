"""
AVL tree based ordered key container.

This package provides a self-balancing binary search tree with:
- insert(key) - O(log N), reports the rotations it applied
- delete(key) - O(log N), successor content copy for two-child nodes
- suggest(prefix, limit) - bounded prefix query for word keys
- stats() - node count, height and theoretical minimum height

TreeService wraps one tree behind a single asyncio lock for use from a server.
"""

from avltree.models.sortedcontainers import BalancedSearchTree
from avltree.service import TreeService

__all__ = ["BalancedSearchTree", "TreeService"]
