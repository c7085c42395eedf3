"""
Result types returned by tree operations.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from avltree.models.rotation import Rotation


class Outcome(Enum):
    """Typed result of a mutation. None of these are fatal."""

    INSERTED = "inserted"
    DUPLICATE = "duplicate"
    DELETED = "deleted"
    NOT_FOUND = "not_found"
    INVALID_KEY = "invalid_key"

    @property
    def changed(self) -> bool:
        return self in (Outcome.INSERTED, Outcome.DELETED)


@dataclass
class Mutation:
    """
    Result of a single insert or delete.

    Attributes:
        outcome: What happened to the tree.
        key: The normalized key the call acted on (None if the key was invalid).
        rotations: Rotations applied during this call, in application order.
    """

    outcome: Outcome
    key: Any = None
    rotations: list[Rotation] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return self.outcome.changed


@dataclass(frozen=True)
class Suggestion:
    """A prefix query hit."""

    key: Any
    display: Any

    def to_dict(self) -> dict[str, Any]:
        return {"key": self.key, "display": self.display}


@dataclass(frozen=True)
class TreeStats:
    """
    Structural statistics of a tree.

    Attributes:
        node_count: Number of keys, tracked incrementally.
        height: Cached height of the root (0 when empty).
        min_height: ceil(log2(node_count + 1)), informational only.
        depth: Edge-count depth of the deepest leaf (height - 1, 0 when empty).
    """

    node_count: int
    height: int
    min_height: int
    depth: int

    def to_dict(self) -> dict[str, int]:
        return {
            "nodeCount": self.node_count,
            "height": self.height,
            "theoreticalMinHeight": self.min_height,
            "depth": self.depth,
        }
