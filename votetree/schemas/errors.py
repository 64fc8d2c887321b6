"""
Schemas - Error Taxonomy
File: errors.py

Purpose: Standard error taxonomy for the commitment tree engine.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.

Not-found and empty-tree conditions are NOT errors: the engine returns
None for those. Exceptions are reserved for caller programming errors
(malformed proofs) and unrecoverable faults (a broken digest primitive).
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the engine."""

    # Hashing
    DIGEST_FAILURE = "DIGEST_FAILURE"
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"

    # Merkle & Commitment Errors
    MALFORMED_PROOF = "MALFORMED_PROOF"
    DUPLICATE_LEAF = "DUPLICATE_LEAF"

    # Ballot Errors
    INVALID_CHOICE = "INVALID_CHOICE"
    VOTE_NOT_FOUND = "VOTE_NOT_FOUND"

    # Configuration
    CONFIG_ERROR = "CONFIG_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class VoteTreeError(BaseModel):
    """
    Base error model for structured error communication.

    Used when an error has to cross a serialization boundary (CLI JSON
    output, a transport layer) without raising.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.MALFORMED_PROOF],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "VoteTreeException":
        """Convert this error model to a raised exception."""
        return VoteTreeException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class VoteTreeException(Exception):
    """
    Base exception for all votetree errors.

    Carries structured error information and can be converted to/from
    VoteTreeError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "VOTETREE_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> VoteTreeError:
        """Convert this exception to a VoteTreeError model."""
        return VoteTreeError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class DigestException(VoteTreeException):
    """
    Raised when the digest primitive itself fails.

    Fatal: every root and proof computed by a broken primitive is
    meaningless, so callers must halt rather than retry.
    """

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.DIGEST_FAILURE,
            details=details,
            retryable=False,
        )


class CanonicalizationException(VoteTreeException):
    """Exception raised when canonical serialization fails."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CANONICALIZATION_ERROR,
            details=details,
            retryable=False,
        )


class MalformedProofException(VoteTreeException):
    """
    Raised when a proof is structurally invalid.

    Distinct from a proof that is well-formed but does not fold to its
    claimed root, which is reported as a False verification result.
    """

    def __init__(
        self,
        message: str,
        field_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if field_path:
            full_details["field_path"] = field_path
        super().__init__(
            message=message,
            code=ErrorCodes.MALFORMED_PROOF,
            details=full_details,
            retryable=False,
        )


class DuplicateLeafException(VoteTreeException):
    """Raised on duplicate insertion when the tree runs with strict_duplicates."""

    def __init__(
        self,
        message: str,
        leaf: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if leaf is not None:
            full_details["leaf"] = leaf
        super().__init__(
            message=message,
            code=ErrorCodes.DUPLICATE_LEAF,
            details=full_details,
            retryable=False,
        )


class InvalidChoiceException(VoteTreeException):
    """Raised when a vote names an option the ballot does not offer."""

    def __init__(
        self,
        message: str,
        choice: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if choice is not None:
            full_details["choice"] = choice
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_CHOICE,
            details=full_details,
            retryable=False,
        )


class VoteNotFoundException(VoteTreeException):
    """Raised when finalizing a nullifier that has no pending vote."""

    def __init__(
        self,
        message: str,
        nullifier: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if nullifier is not None:
            full_details["nullifier"] = nullifier
        super().__init__(
            message=message,
            code=ErrorCodes.VOTE_NOT_FOUND,
            details=full_details,
            retryable=False,
        )


class ConfigException(VoteTreeException):
    """Raised when configuration cannot be loaded or is invalid."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIG_ERROR,
            details=details,
            retryable=False,
        )
