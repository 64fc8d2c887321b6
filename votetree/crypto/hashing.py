"""
Crypto - Hashing Utilities
SHA-256 digests and the commitment/nullifier constructions.

This module provides:
- sha256_hex: lowercase hex SHA-256 of a UTF-8 string
- generate_nullifier: digest of "nullifier:" + secret identity
- create_commitment: digest of secret + ":" + choice + ":" + salt
- hash_pair: parent hash, digest of left + right

Compatibility Notes (Hard Contracts):
- Input construction must stay bit-for-bit identical so independently
  built verifiers agree on every root.
- Parent hashing concatenates hex strings with no separator; it is
  order-sensitive.
- The default salt is coarse wall-clock time. It is NOT unlinkable;
  callers needing that must pass generate_salt() or their own secret.
"""
from __future__ import annotations

import hashlib
import logging
import re
import secrets
import time

from votetree.schemas.errors import DigestException


logger = logging.getLogger(__name__)

NULLIFIER_PREFIX = "nullifier:"
COMMITMENT_SEPARATOR = ":"

_HEX_DIGEST_RE = re.compile(r"^[0-9a-f]{64}$")


def sha256_hex(message: str) -> str:
    """
    Compute the lowercase hex SHA-256 of a string's UTF-8 bytes.

    Args:
        message: String to hash

    Returns:
        64-character lowercase hex digest

    Raises:
        DigestException: If the digest primitive fails. Fatal.

    Example:
        >>> sha256_hex("hello")
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    try:
        return hashlib.sha256(message.encode("utf-8")).hexdigest()
    except Exception as e:
        logger.error("SHA-256 digest failed: %s", e)
        raise DigestException(
            message=f"SHA-256 digest failed: {e}",
            details={"input_type": type(message).__name__},
        ) from e


def hash_pair(left: str, right: str) -> str:
    """
    Compute the parent hash of two child hashes.

    parent = sha256_hex(left + right)
    """
    return sha256_hex(left + right)


def generate_nullifier(secret_identity: str) -> str:
    """
    Derive the nullifier for a secret identity.

    The nullifier depends only on the identity, so it flags repeat
    participation regardless of the choice made.
    """
    return sha256_hex(f"{NULLIFIER_PREFIX}{secret_identity}")


def default_salt() -> str:
    """Current wall-clock time in integer milliseconds, as a string."""
    return str(int(time.time() * 1000))


def generate_salt(nbytes: int = 16) -> str:
    """High-entropy hex salt for callers that need unlinkable commitments."""
    return secrets.token_hex(nbytes)


def create_commitment(
    secret_identity: str,
    choice: str,
    salt: str | None = None,
) -> str:
    """
    Create a vote commitment binding identity, choice and salt.

    commitment = sha256_hex(secret_identity + ":" + choice + ":" + salt)

    Args:
        secret_identity: The voter's secret
        choice: The vote option
        salt: Blinding salt; defaults to default_salt() when omitted, so
              pass one explicitly for a reproducible commitment

    Returns:
        64-character lowercase hex commitment
    """
    if salt is None:
        salt = default_salt()
    return sha256_hex(
        COMMITMENT_SEPARATOR.join((secret_identity, choice, salt))
    )


def is_hex_digest(value: object) -> bool:
    """True if value looks like a sha256_hex output."""
    return isinstance(value, str) and bool(_HEX_DIGEST_RE.match(value))


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
