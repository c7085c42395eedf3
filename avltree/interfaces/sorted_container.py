"""
SortedContainer abstract base class for ordered, unique-key containers.
"""

from abc import abstractmethod
from typing import Any

from avltree.interfaces.ordered_iterable import OrderedIterable


class SortedContainer(OrderedIterable):
    """
    Abstract base class for sorted containers with unique keys.

    Provides O(log N) insert, delete and lookup.
    Inherits in-order iteration from OrderedIterable.

    Implementations:
    - BalancedSearchTree: AVL tree with a pluggable key policy
    """

    @abstractmethod
    def insert(self, raw: Any) -> Any:
        """
        Insert a key if it is not already present.

        Args:
            raw: The raw key, validated by the container before use.

        Returns:
            An implementation-defined mutation result.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def delete(self, raw: Any) -> Any:
        """
        Remove a key if present.

        Args:
            raw: The raw key to remove.

        Returns:
            An implementation-defined mutation result.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def get(self, raw: Any) -> Any | None:
        """
        Look up a key.

        Args:
            raw: The raw key to look up.

        Returns:
            The stored display value (or the key itself) if found, None otherwise.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def has(self, raw: Any) -> bool:
        """
        Check if a key exists.

        Args:
            raw: The raw key to check.

        Returns:
            True if the key exists, False otherwise.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def size(self) -> int:
        """
        Return the number of keys.

        Returns:
            The count of entries in the container.

        Time complexity: O(1)
        """
        pass

    @abstractmethod
    def height(self) -> int:
        """
        Return the height of the container's tree.

        Returns:
            0 when empty, otherwise the number of nodes on the longest root-to-leaf path.

        Time complexity: O(1)
        """
        pass
