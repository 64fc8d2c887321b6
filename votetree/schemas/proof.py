"""
Schemas - Inclusion Proofs
File: proof.py

Purpose: Transport schemas for Merkle inclusion proofs and mutation
results. Proofs serialize to plain nested JSON:

    {"leaf": "...", "path": [{"hash": "...", "position": "left"}], "root": "..."}
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from .canonical import dumps_canonical, loads_canonical
from .errors import MalformedProofException


# Side the sibling occupies relative to the running hash
SiblingPosition = Literal["left", "right"]

MutationAction = Literal["insert", "remove", "replace", "rebuild"]


class ProofStep(BaseModel):
    """One level of an inclusion path."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    hash: str = Field(..., min_length=1, description="Sibling hash at this level")
    position: SiblingPosition = Field(
        ...,
        description="Side the sibling occupies relative to the running hash",
    )


class InclusionProof(BaseModel):
    """
    A Merkle inclusion proof for a single commitment.

    Attributes:
        leaf: The commitment being proven
        path: Sibling steps ordered from the leaf level up to the root
        root: The root the proof claims to fold to
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    leaf: str = Field(..., min_length=1)
    path: list[ProofStep] = Field(default_factory=list)
    root: str = Field(..., min_length=1)

    @property
    def depth(self) -> int:
        return len(self.path)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

    def to_json(self) -> str:
        """Canonical JSON (sorted keys, no whitespace)."""
        return dumps_canonical(self)

    @classmethod
    def from_dict(cls, data: Any) -> "InclusionProof":
        """
        Parse a proof from plain data.

        Raises:
            MalformedProofException: If required fields are missing or
                have the wrong type, or a position is not left/right.
        """
        try:
            return cls.model_validate(data)
        except PydanticValidationError as e:
            first = e.errors()[0] if e.errors() else {}
            field_path = ".".join(str(p) for p in first.get("loc", ()))
            raise MalformedProofException(
                message=f"Malformed inclusion proof: {first.get('msg', str(e))}",
                field_path=field_path or None,
                details={"error_count": e.error_count()},
            ) from e

    @classmethod
    def from_json(cls, json_str: str) -> "InclusionProof":
        try:
            data = loads_canonical(json_str)
        except ValueError as e:
            raise MalformedProofException(
                message=f"Proof is not valid JSON: {e}",
            ) from e
        return cls.from_dict(data)


class MutationResult(BaseModel):
    """What a tree mutation emits: the new root and the current leaf count."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    action: MutationAction
    leaf: str | None = None
    changed: bool
    root: str | None = None
    leaf_count: int = Field(..., ge=0)
