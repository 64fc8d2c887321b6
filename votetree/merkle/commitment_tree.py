"""
Commitment Tree
Stateful, ordered collection of commitments with a fully rebuilt Merkle
tree behind it.

Every mutation rebuilds the whole tree from the leaf sequence. The new
levels are built before any field is touched and then swapped in
together, so a failed rebuild leaves the previous state intact.

Concurrency: at most one in-flight mutation per instance. Callers with
concurrent writers must serialize mutations; readers that need a stable
view take a snapshot() and prove against that.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from votetree.config.runtime import RuntimeConfig, get_default_config
from votetree.merkle.merkle_tree import (
    build_levels,
    proof_from_levels,
    root_of,
)
from votetree.merkle.nodes import Node
from votetree.schemas.errors import DuplicateLeafException
from votetree.schemas.proof import InclusionProof, MutationAction, MutationResult


logger = logging.getLogger(__name__)


def _check_leaf(leaf: Any) -> str:
    if not isinstance(leaf, str):
        raise TypeError(f"Leaf must be a string, got {type(leaf).__name__}")
    if not leaf:
        raise ValueError("Leaf must be a non-empty string")
    return leaf


@dataclass(frozen=True)
class TreeSnapshot:
    """
    Immutable view of a tree at one point in time.

    Safe to share between readers while the source tree keeps mutating.
    """
    leaves: tuple[str, ...]
    levels: tuple[tuple[Node, ...], ...]

    @property
    def root(self) -> str | None:
        return root_of(self.levels)

    @property
    def leaf_count(self) -> int:
        return len(self.leaves)

    def generate_proof(self, leaf: str) -> InclusionProof | None:
        if not self.levels or leaf not in self.leaves:
            return None
        return proof_from_levels(self.levels, self.leaves.index(leaf))


class CommitmentTree:
    """
    Ordered commitment set with root and proof access.

    Example:
        >>> tree = CommitmentTree()
        >>> tree.insert(commitment)
        >>> proof = tree.generate_proof(commitment)
        >>> verify_merkle_proof(proof)
        True
    """

    def __init__(
        self,
        leaves: Optional[Iterable[str]] = None,
        strict_duplicates: bool = False,
    ) -> None:
        self.strict_duplicates = strict_duplicates
        self._leaves: list[str] = []
        self._levels: list[list[Node]] = []
        self._last_mutation: MutationResult | None = None

        if leaves is not None:
            seed: list[str] = []
            for leaf in leaves:
                if _check_leaf(leaf) not in seed:
                    seed.append(leaf)
            self._commit(seed, "rebuild", None, changed=bool(seed))

    @classmethod
    def from_leaves(
        cls,
        leaves: Iterable[str],
        strict_duplicates: bool = False,
    ) -> "CommitmentTree":
        """Seed a tree from a persisted, ordered list of commitments."""
        return cls(leaves=leaves, strict_duplicates=strict_duplicates)

    @classmethod
    def from_config(
        cls,
        config: RuntimeConfig | None = None,
        leaves: Optional[Iterable[str]] = None,
    ) -> "CommitmentTree":
        config = config or get_default_config()
        return cls(leaves=leaves, strict_duplicates=config.tree.strict_duplicates)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def root(self) -> str | None:
        """Current root hash, or None when the tree is empty."""
        return root_of(self._levels)

    @property
    def leaves(self) -> list[str]:
        """A copy of the ordered leaf sequence."""
        return list(self._leaves)

    @property
    def leaf_count(self) -> int:
        return len(self._leaves)

    @property
    def depth(self) -> int:
        return len(self._levels)

    @property
    def last_mutation(self) -> MutationResult | None:
        return self._last_mutation

    def __len__(self) -> int:
        return len(self._leaves)

    def __contains__(self, leaf: object) -> bool:
        return leaf in self._leaves

    def contains(self, leaf: str) -> bool:
        return leaf in self._leaves

    def generate_proof(self, leaf: str) -> InclusionProof | None:
        """
        Build an inclusion proof for a leaf from the current levels.

        Returns:
            InclusionProof, or None if the tree is empty or the leaf is
            not present
        """
        if not self._levels or leaf not in self._leaves:
            return None
        return proof_from_levels(self._levels, self._leaves.index(leaf))

    def structure(self) -> dict[str, Any] | None:
        """Nested dict of the whole tree for display layers, or None."""
        if not self._levels:
            return None
        return self._levels[-1][0].to_dict()

    def snapshot(self) -> TreeSnapshot:
        return TreeSnapshot(
            leaves=tuple(self._leaves),
            levels=tuple(tuple(level) for level in self._levels),
        )

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def insert(self, leaf: str) -> MutationResult:
        """
        Append a commitment and rebuild.

        A leaf already present is a no-op (changed=False), unless the tree
        runs with strict_duplicates, in which case it raises.

        Raises:
            DuplicateLeafException: On a duplicate under strict_duplicates
        """
        _check_leaf(leaf)
        if leaf in self._leaves:
            self._reject_duplicate(leaf)
            return self._noop("insert", leaf)
        return self._commit(self._leaves + [leaf], "insert", leaf)

    def remove(self, leaf: str) -> MutationResult:
        """Remove a commitment and rebuild; unknown leaves are a no-op."""
        _check_leaf(leaf)
        if leaf not in self._leaves:
            return self._noop("remove", leaf)
        candidate = list(self._leaves)
        candidate.remove(leaf)
        return self._commit(candidate, "remove", leaf)

    def replace(self, old_leaf: str, new_leaf: str) -> MutationResult:
        """
        Swap one commitment for another in a single rebuild.

        This is the vote-update path: the old commitment leaves the tree
        and the new one is appended at the end. A missing old leaf is
        skipped; a new leaf that is already present is not added twice.

        Raises:
            DuplicateLeafException: If new_leaf is already present and the
                tree runs with strict_duplicates
        """
        _check_leaf(old_leaf)
        _check_leaf(new_leaf)
        if old_leaf == new_leaf:
            return self._noop("replace", new_leaf)

        candidate = list(self._leaves)
        if old_leaf in candidate:
            candidate.remove(old_leaf)
        if new_leaf in candidate:
            self._reject_duplicate(new_leaf)
        else:
            candidate.append(new_leaf)

        if candidate == self._leaves:
            return self._noop("replace", new_leaf)
        return self._commit(candidate, "replace", new_leaf)

    def rebuild(self) -> MutationResult:
        """Recompute every level from the current leaf sequence."""
        return self._commit(list(self._leaves), "rebuild", None, changed=False)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _reject_duplicate(self, leaf: str) -> None:
        if self.strict_duplicates:
            raise DuplicateLeafException(
                message="Commitment is already in the tree",
                leaf=leaf,
            )

    def _noop(self, action: MutationAction, leaf: str) -> MutationResult:
        logger.debug("%s of %s left the tree unchanged", action, leaf)
        result = MutationResult(
            action=action,
            leaf=leaf,
            changed=False,
            root=self.root,
            leaf_count=len(self._leaves),
        )
        self._last_mutation = result
        return result

    def _commit(
        self,
        candidate: list[str],
        action: MutationAction,
        leaf: str | None,
        changed: bool = True,
    ) -> MutationResult:
        # Build off to the side; nothing is assigned until this succeeds.
        levels = build_levels(candidate)

        self._leaves = candidate
        self._levels = levels

        result = MutationResult(
            action=action,
            leaf=leaf,
            changed=changed,
            root=root_of(levels),
            leaf_count=len(candidate),
        )
        self._last_mutation = result
        logger.debug(
            "Tree %s: root=%s leaf_count=%d", action, result.root, result.leaf_count
        )
        return result


__all__ = [
    "CommitmentTree",
    "TreeSnapshot",
]
