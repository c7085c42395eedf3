"""
Node of the balanced search tree.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(eq=False)
class Node:
    """
    Node in the AVL tree.

    Each node exclusively owns its children. `height` is 1 for a leaf and is
    kept equal to 1 + max(height(left), height(right)).
    """

    key: Any
    display: Any = None
    left: "Node | None" = None
    right: "Node | None" = None
    height: int = 1

    def balance(self) -> int:
        """Balance factor: height(left) - height(right)."""
        return height_of(self.left) - height_of(self.right)

    def update_height(self) -> None:
        self.height = 1 + max(height_of(self.left), height_of(self.right))

    def copy_content_from(self, other: "Node") -> None:
        """Take over another node's key and display. Links and height stay untouched."""
        self.key = other.key
        self.display = other.display

    def to_dict(self) -> dict[str, Any]:
        """Serialize this subtree recursively."""
        return {
            "key": self.key,
            "display": self.display,
            "height": self.height,
            "balance": self.balance(),
            "left": self.left.to_dict() if self.left else None,
            "right": self.right.to_dict() if self.right else None,
        }


def height_of(node: Node | None) -> int:
    """Height of a possibly absent subtree."""
    return node.height if node is not None else 0


def balance_of(node: Node | None) -> int:
    return node.balance() if node is not None else 0
