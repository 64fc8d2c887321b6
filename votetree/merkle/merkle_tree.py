"""
Merkle Tree Implementation
Deterministic Merkle tree construction, proof generation, and verification
over hex-encoded commitment strings.

This module provides:
- Level-by-level tree construction from an ordered leaf sequence
- Root computation
- Inclusion proof generation for any present leaf
- Inclusion proof verification

Canonical Commitment Rules (Hard Contracts):
1. Leaves are used as-is; a leaf's node hash is the leaf value itself
2. Parent hashing: parent = sha256_hex(left + right)
3. Padding rule: the last node of an odd-length level is paired with
   itself (PairedWithSelf), at every level
4. Empty leaves: no root (None)
5. Single leaf: root = leaf

Determinism Notes:
- No randomness or non-deterministic ordering
- Leaf ordering is insertion order, defined by the caller
- This module never sorts leaves - it trusts input order
"""
from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence, Union

from votetree.crypto.hashing import hash_pair
from votetree.merkle.nodes import InternalNode, LeafNode, Node, PairedWithSelf
from votetree.schemas.proof import InclusionProof, ProofStep


logger = logging.getLogger(__name__)

Levels = Sequence[Sequence[Node]]


def build_levels(leaves: Sequence[str]) -> list[list[Node]]:
    """
    Build every level of the tree, leaves first.

    Algorithm:
    1. If empty: return []
    2. Level 0 is one LeafNode per leaf, in order
    3. Pair adjacent nodes left-to-right into the next level; a lone
       last node becomes PairedWithSelf
    4. Repeat until a level holds a single node (the root)

    Example: [a, b, c] -> [[a, b, c], [ab, cc], [abcc]]

    Args:
        leaves: Ordered leaf values

    Returns:
        List of levels; levels[-1][0] is the root node
    """
    if len(leaves) == 0:
        return []

    current_level: list[Node] = [LeafNode(hash=leaf) for leaf in leaves]
    levels: list[list[Node]] = [current_level]

    while len(current_level) > 1:
        next_level: list[Node] = []
        for i in range(0, len(current_level), 2):
            if i + 1 < len(current_level):
                next_level.append(
                    InternalNode.pair(current_level[i], current_level[i + 1])
                )
            else:
                next_level.append(PairedWithSelf.of(current_level[i]))
        levels.append(next_level)
        current_level = next_level

    return levels


def root_of(levels: Levels) -> str | None:
    """Root hash of prebuilt levels, or None for an empty tree."""
    if not levels:
        return None
    return levels[-1][0].hash


def build_merkle_root(leaves: Sequence[str]) -> str | None:
    """
    Compute the Merkle root of an ordered leaf sequence.

    Returns:
        Root hex string, or None if leaves is empty
    """
    return root_of(build_levels(leaves))


def proof_from_levels(levels: Levels, index: int) -> InclusionProof:
    """
    Walk prebuilt levels upward from a leaf index, collecting siblings.

    At each level:
    - odd index: the tracked node is a right member; record the left
      sibling with position "left"
    - even index with a right neighbour: record it with position "right"
    - even index at the end of an odd-length level: the node was paired
      with itself, so record its own hash with position "right"
    Then move up: index = index // 2.

    Raises:
        IndexError: If index is out of range for the leaf level
    """
    if not levels or index < 0 or index >= len(levels[0]):
        raise IndexError(
            f"Leaf index {index} out of range for "
            f"{len(levels[0]) if levels else 0} leaves"
        )

    leaf = levels[0][index].hash
    path: list[ProofStep] = []
    current_index = index

    for level in levels[:-1]:
        if current_index % 2 == 1:
            path.append(ProofStep(hash=level[current_index - 1].hash, position="left"))
        elif current_index + 1 < len(level):
            path.append(ProofStep(hash=level[current_index + 1].hash, position="right"))
        else:
            path.append(ProofStep(hash=level[current_index].hash, position="right"))
        current_index = current_index // 2

    return InclusionProof(leaf=leaf, path=path, root=levels[-1][0].hash)


def build_merkle_proof(leaves: Sequence[str], leaf: str) -> InclusionProof | None:
    """
    Generate an inclusion proof for a leaf value.

    Args:
        leaves: Ordered leaf values
        leaf: The value to prove

    Returns:
        InclusionProof, or None if the tree is empty or the leaf absent
    """
    if len(leaves) == 0:
        return None
    try:
        index = list(leaves).index(leaf)
    except ValueError:
        return None
    return proof_from_levels(build_levels(leaves), index)


def fold_proof(leaf: str, path: Sequence[ProofStep]) -> str:
    """Fold a path onto a leaf and return the computed root."""
    current_hash = leaf
    for step in path:
        if step.position == "left":
            current_hash = hash_pair(step.hash, current_hash)
        else:
            current_hash = hash_pair(current_hash, step.hash)
    return current_hash


def verify_merkle_proof(proof: Union[InclusionProof, Mapping[str, Any]]) -> bool:
    """
    Verify an inclusion proof against its claimed root.

    Needs only the proof; no tree state is consulted.

    Args:
        proof: InclusionProof or its plain-dict form

    Returns:
        True iff folding the path onto the leaf reproduces the root

    Raises:
        MalformedProofException: If the proof is structurally invalid
    """
    if not isinstance(proof, InclusionProof):
        proof = InclusionProof.from_dict(proof)

    ok = fold_proof(proof.leaf, proof.path) == proof.root
    if not ok:
        logger.info("Inclusion proof for leaf %s does not fold to root %s", proof.leaf, proof.root)
    return ok


def compute_tree_depth(num_leaves: int) -> int:
    """
    Number of levels in a tree of num_leaves leaves, leaves and root
    included. 0 for an empty tree, 1 for a single leaf.
    """
    if num_leaves == 0:
        return 0

    depth = 1
    n = num_leaves
    while n > 1:
        n = (n + 1) // 2
        depth += 1

    return depth


__all__ = [
    "build_levels",
    "root_of",
    "build_merkle_root",
    "proof_from_levels",
    "build_merkle_proof",
    "fold_proof",
    "verify_merkle_proof",
    "compute_tree_depth",
]
