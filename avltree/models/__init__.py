"""
Data models for the balanced tree.
"""

from avltree.models.exceptions import InvalidKeyError, PrefixQueryUnsupportedError
from avltree.models.key_policy import IntegerKeys, KeyPolicy, WordKeys
from avltree.models.node import Node
from avltree.models.outcome import Mutation, Outcome, Suggestion, TreeStats
from avltree.models.rotation import Rotation, RotationKind

__all__ = [
    "InvalidKeyError",
    "PrefixQueryUnsupportedError",
    "IntegerKeys",
    "KeyPolicy",
    "WordKeys",
    "Node",
    "Mutation",
    "Outcome",
    "Suggestion",
    "TreeStats",
    "Rotation",
    "RotationKind",
]
