"""
votetree - anonymous, updatable vote commitments in a Merkle tree.

Modules:
- crypto: SHA-256 commitments, nullifiers and parent hashing
- merkle: CommitmentTree, proof generation and verification
- schemas: proof transport types and the error taxonomy
- ballot: cast / finalize / update lifecycle
- config: runtime configuration
"""

__version__ = "0.1.0"

from votetree.crypto import create_commitment, generate_nullifier, sha256_hex
from votetree.merkle import (
    CommitmentTree,
    TreeSnapshot,
    build_merkle_proof,
    build_merkle_root,
    verify_merkle_proof,
)
from votetree.schemas import InclusionProof, MutationResult, ProofStep

__all__ = [
    "__version__",
    "create_commitment",
    "generate_nullifier",
    "sha256_hex",
    "CommitmentTree",
    "TreeSnapshot",
    "build_merkle_proof",
    "build_merkle_root",
    "verify_merkle_proof",
    "InclusionProof",
    "MutationResult",
    "ProofStep",
]
