"""
Merkle Proofs Convenience Wrappers
Thin class-based wrappers around the functions in merkle_tree.py.

This module provides:
- MerkleProver: Generate proofs and roots from leaf sequences
- MerkleVerifier: Verify proofs, including straight from a voter's
  secret, choice and salt
"""
from __future__ import annotations

from typing import Any, Mapping, Sequence

from votetree.crypto.hashing import create_commitment
from votetree.merkle.merkle_tree import (
    build_merkle_proof,
    build_merkle_root,
    verify_merkle_proof,
)
from votetree.schemas.proof import InclusionProof


class MerkleProver:
    """
    Convenience class for generating Merkle proofs.

    Example:
        >>> proof = MerkleProver.prove(leaves, leaves[1])
        >>> proof.leaf == leaves[1]
        True
    """

    @staticmethod
    def prove(leaves: Sequence[str], leaf: str) -> InclusionProof | None:
        """
        Generate a proof for a leaf value.

        Returns:
            InclusionProof, or None if leaves is empty or leaf is absent
        """
        return build_merkle_proof(leaves, leaf)

    @staticmethod
    def compute_root(leaves: Sequence[str]) -> str | None:
        """Merkle root of leaves, or None if empty."""
        return build_merkle_root(leaves)


class MerkleVerifier:
    """
    Convenience class for verifying Merkle proofs.

    Example:
        >>> MerkleVerifier.verify(proof)
        True
    """

    @staticmethod
    def verify(proof: InclusionProof | Mapping[str, Any]) -> bool:
        return verify_merkle_proof(proof)

    @staticmethod
    def verify_leaf_in_root(
        leaf: str,
        path: Sequence[Any],
        root: str,
    ) -> bool:
        """
        Verify a leaf is included in a root using raw components.

        Args:
            leaf: The commitment to verify
            path: Proof steps, as ProofStep objects or {hash, position} dicts
            root: The claimed Merkle root

        Raises:
            MalformedProofException: If the components are malformed
        """
        proof = InclusionProof.from_dict({
            "leaf": leaf,
            "path": [
                step.model_dump() if hasattr(step, "model_dump") else step
                for step in path
            ],
            "root": root,
        })
        return verify_merkle_proof(proof)

    @staticmethod
    def verify_commitment_in_root(
        secret_identity: str,
        choice: str,
        salt: str,
        path: Sequence[Any],
        root: str,
    ) -> bool:
        """
        Verify a vote is included in a root, starting from its opening.

        The commitment is recomputed from secret, choice and salt, so a
        voter can check their own vote without holding the leaf value.
        """
        leaf = create_commitment(secret_identity, choice, salt)
        return MerkleVerifier.verify_leaf_in_root(leaf, path, root)


__all__ = [
    "MerkleProver",
    "MerkleVerifier",
]
