"""
Merkle Tree and Commitments
Deterministic Merkle tree construction + proof generation/verification
for vote commitments.

This module provides:
- CommitmentTree: ordered commitment set, rebuilt on every mutation
- TreeSnapshot: immutable published view of a tree
- build_merkle_root / build_merkle_proof / verify_merkle_proof
- MerkleProver / MerkleVerifier convenience wrappers

Canonical Commitment Rules:
1. Leaves are hex commitment strings, used as their own node hash
2. Parent hashing: sha256_hex(left + right)
3. Padding: the last node of an odd level is paired with itself
4. Empty tree: no root (None)
5. Single leaf: root = leaf

Usage:
    from votetree.merkle import CommitmentTree, verify_merkle_proof
    from votetree.crypto import create_commitment

    tree = CommitmentTree()
    tree.insert(create_commitment(secret, "option-a", salt))

    proof = tree.generate_proof(commitment)
    assert verify_merkle_proof(proof)
"""
from .nodes import (
    LeafNode,
    InternalNode,
    PairedWithSelf,
    Node,
)

from .merkle_tree import (
    build_levels,
    root_of,
    build_merkle_root,
    proof_from_levels,
    build_merkle_proof,
    fold_proof,
    verify_merkle_proof,
    compute_tree_depth,
)

from .commitment_tree import (
    CommitmentTree,
    TreeSnapshot,
)

from .merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Nodes
    "LeafNode",
    "InternalNode",
    "PairedWithSelf",
    "Node",
    # Core functions
    "build_levels",
    "root_of",
    "build_merkle_root",
    "proof_from_levels",
    "build_merkle_proof",
    "fold_proof",
    "verify_merkle_proof",
    "compute_tree_depth",
    # Stateful tree
    "CommitmentTree",
    "TreeSnapshot",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
