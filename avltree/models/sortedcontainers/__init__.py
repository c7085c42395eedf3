"""
Sorted container implementations.
"""

from avltree.models.sortedcontainers.avl_tree import BalancedSearchTree

__all__ = ["BalancedSearchTree"]
