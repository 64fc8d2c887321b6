"""
Merkle Tree Nodes
Immutable node types for the commitment tree.

Three node shapes:
- LeafNode: wraps one commitment, no children
- InternalNode: two distinct children, hash = hash_pair(left, right)
- PairedWithSelf: the last node of an odd-length level, hashed with
  itself; hash = hash_pair(child, child)

PairedWithSelf keeps the duplicate-padding case explicit instead of
pointing both child slots at the same object, so the structure stays a
plain tree and proof generation can see where padding happened.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from votetree.crypto.hashing import hash_pair


@dataclass(frozen=True)
class LeafNode:
    """A base-level node holding one commitment."""
    hash: str

    is_leaf = True
    paired_with_self = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "hash": self.hash,
            "is_leaf": True,
            "paired_with_self": False,
        }


@dataclass(frozen=True)
class InternalNode:
    """A parent of two distinct children."""
    hash: str
    left: "Node"
    right: "Node"

    is_leaf = False
    paired_with_self = False

    @classmethod
    def pair(cls, left: "Node", right: "Node") -> "InternalNode":
        return cls(hash=hash_pair(left.hash, right.hash), left=left, right=right)

    def to_dict(self) -> dict[str, Any]:
        return {
            "hash": self.hash,
            "is_leaf": False,
            "paired_with_self": False,
            "left": self.left.to_dict(),
            "right": self.right.to_dict(),
        }


@dataclass(frozen=True)
class PairedWithSelf:
    """A parent formed by pairing a lone node with itself."""
    hash: str
    child: "Node"

    is_leaf = False
    paired_with_self = True

    @classmethod
    def of(cls, child: "Node") -> "PairedWithSelf":
        return cls(hash=hash_pair(child.hash, child.hash), child=child)

    @property
    def left(self) -> "Node":
        return self.child

    @property
    def right(self) -> "Node":
        return self.child

    def to_dict(self) -> dict[str, Any]:
        # The child is exported once; consumers render it on both sides.
        return {
            "hash": self.hash,
            "is_leaf": False,
            "paired_with_self": True,
            "child": self.child.to_dict(),
        }


Node = Union[LeafNode, InternalNode, PairedWithSelf]


__all__ = [
    "LeafNode",
    "InternalNode",
    "PairedWithSelf",
    "Node",
]
