"""
Core cryptographic utilities.

SHA-256 hashing plus the nullifier and commitment constructions.
"""
from .hashing import (
    NULLIFIER_PREFIX,
    sha256_hex,
    hash_pair,
    generate_nullifier,
    default_salt,
    generate_salt,
    create_commitment,
    is_hex_digest,
)

__all__ = [
    "NULLIFIER_PREFIX",
    "sha256_hex",
    "hash_pair",
    "generate_nullifier",
    "default_salt",
    "generate_salt",
    "create_commitment",
    "is_hex_digest",
]
