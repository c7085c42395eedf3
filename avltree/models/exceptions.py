"""
Custom exceptions for the balanced tree.
"""

from typing import Any


class InvalidKeyError(ValueError):
    """
    Raised when a raw key cannot be used by a tree's key policy.

    Keys are validated before the tree is touched, so a rejected key never
    leaves the tree in a modified state.
    """

    def __init__(self, raw: Any, reason: str):
        """
        Initialize invalid key error.

        Args:
            raw: The rejected input, as received.
            reason: Human readable explanation.
        """
        self.raw = raw
        self.reason = reason
        super().__init__(f"Invalid key {raw!r}: {reason}")


class PrefixQueryUnsupportedError(TypeError):
    """Raised when a prefix query is made against a tree whose keys are not strings."""

    def __init__(self, policy_name: str):
        self.policy_name = policy_name
        super().__init__(f"Prefix queries are not supported for '{policy_name}' keys")
