"""
Schemas for the commitment tree engine.

Proof transport types, mutation results, canonical serialization and
the error taxonomy.
"""

from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    canonicalize_value,
    dumps_canonical,
    loads_canonical,
)
from .errors import (
    CanonicalizationException,
    ConfigException,
    DigestException,
    DuplicateLeafException,
    ErrorCodes,
    InvalidChoiceException,
    MalformedProofException,
    VoteNotFoundException,
    VoteTreeError,
    VoteTreeException,
)
from .proof import (
    InclusionProof,
    MutationAction,
    MutationResult,
    ProofStep,
    SiblingPosition,
)

__all__ = [
    # Canonical
    "CANONICAL_JSON_SEPARATORS",
    "canonicalize_value",
    "dumps_canonical",
    "loads_canonical",
    # Errors
    "ErrorCodes",
    "VoteTreeError",
    "VoteTreeException",
    "CanonicalizationException",
    "ConfigException",
    "DigestException",
    "DuplicateLeafException",
    "InvalidChoiceException",
    "MalformedProofException",
    "VoteNotFoundException",
    # Proofs
    "InclusionProof",
    "MutationAction",
    "MutationResult",
    "ProofStep",
    "SiblingPosition",
]
