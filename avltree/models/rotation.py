"""
Rotation records produced while rebalancing.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class RotationKind(Enum):
    """Direction of a single rotation."""

    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class Rotation:
    """
    One rotation applied during a single insert or delete.

    Attributes:
        kind: Direction of the rotation.
        pivot: Key of the node that was rotated down.
        new_root: Key of the node that took its place as subtree root.
    """

    kind: RotationKind
    pivot: Any
    new_root: Any

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind.value, "pivot": self.pivot, "newRoot": self.new_root}
