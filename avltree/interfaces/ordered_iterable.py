"""
OrderedIterable protocol for data structures that can be walked in key order.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import Any


class OrderedIterable(ABC):
    """
    Protocol for data structures that support in-order iteration.

    Implementations must support:
    - Full iteration via __iter__
    - An explicit in_order() iterator yielding (key, display) pairs
    """

    @abstractmethod
    def __iter__(self) -> Iterator[tuple[Any, Any]]:
        """Return an iterator over all (key, display) pairs in ascending key order."""
        pass

    @abstractmethod
    def in_order(self) -> Iterator[tuple[Any, Any]]:
        """
        Return a fresh in-order iterator.

        Returns:
            Iterator yielding (key, display) tuples in strictly ascending key order.
        """
        pass
