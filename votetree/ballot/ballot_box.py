"""
Ballot Box
In-memory voting lifecycle around a CommitmentTree.

Lifecycle:
1. cast: derive nullifier + commitment; the vote is pending
2. finalize: the pending commitment becomes authoritative and enters
   the tree; a previously finalized commitment of the same nullifier is
   removed in the same rebuild and its tally moved
3. proof_for: inclusion proof for a nullifier's current commitment

Every cast record is kept in history, including superseded ones.
Nothing here persists; callers reload with BallotBox.restore().
"""
from __future__ import annotations

import logging
import time
from typing import Iterable, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from votetree.config.runtime import RuntimeConfig, get_default_config
from votetree.crypto.hashing import (
    create_commitment,
    default_salt,
    generate_nullifier,
    generate_salt,
)
from votetree.merkle.commitment_tree import CommitmentTree
from votetree.schemas.errors import InvalidChoiceException, VoteNotFoundException
from votetree.schemas.proof import InclusionProof, MutationResult


logger = logging.getLogger(__name__)


class VoteRecord(BaseModel):
    """
    One cast vote.

    finalized: the commitment has been added to the tree
    current: this is the nullifier's authoritative (tallied) vote
    finalized_seq: position in finalization order, which is the order
        commitments entered the tree
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    nullifier: str = Field(..., min_length=1)
    commitment: str = Field(..., min_length=1)
    choice: str = Field(..., min_length=1)
    salt: str
    timestamp: int = Field(..., ge=0, description="Unix time in milliseconds")
    finalized: bool = False
    current: bool = False
    finalized_seq: Optional[int] = Field(default=None, ge=1)


class BallotBox:
    """
    Tracks votes per nullifier and keeps the tree and tallies in step.

    Mutations must be serialized by the caller, as with CommitmentTree.
    """

    def __init__(
        self,
        options: Optional[Sequence[str]] = None,
        tree: Optional[CommitmentTree] = None,
        config: Optional[RuntimeConfig] = None,
    ) -> None:
        config = config or get_default_config()
        self.options: list[str] = list(options) if options is not None else list(config.ballot.options)
        self.tree = tree if tree is not None else CommitmentTree.from_config(config)
        self.require_explicit_salt = config.commitment.require_explicit_salt
        self.salt_bytes = config.commitment.salt_bytes

        self._pending: dict[str, VoteRecord] = {}
        self._current: dict[str, VoteRecord] = {}
        self._history: list[VoteRecord] = []
        self._tallies: dict[str, int] = {option: 0 for option in self.options}
        self._finalized_count = 0

    @classmethod
    def restore(
        cls,
        records: Iterable[VoteRecord],
        options: Optional[Sequence[str]] = None,
        config: Optional[RuntimeConfig] = None,
    ) -> "BallotBox":
        """
        Rebuild a ballot box from persisted records, in cast order.

        The tree is seeded with the current finalized commitments in the
        order they were finalized, which reproduces the live leaf order.
        The latest unfinalized record per nullifier is pending again,
        unless a later record of that nullifier was finalized.
        """
        config = config or get_default_config()
        records = [
            r.model_copy() if isinstance(r, VoteRecord) else VoteRecord.model_validate(r)
            for r in records
        ]
        current = [r for r in records if r.finalized and r.current]
        # Records without a sequence keep their history position.
        ordered = sorted(
            enumerate(current),
            key=lambda item: (item[1].finalized_seq or 0, item[0]),
        )

        box = cls(
            options=options,
            tree=CommitmentTree.from_leaves(
                (r.commitment for _, r in ordered),
                strict_duplicates=config.tree.strict_duplicates,
            ),
            config=config,
        )
        for record in records:
            box._check_choice(record.choice)
            box._history.append(record)
            if not record.finalized:
                box._pending[record.nullifier] = record
                continue
            # A finalized record consumed whatever was pending before it.
            box._pending.pop(record.nullifier, None)
            box._finalized_count = max(box._finalized_count, record.finalized_seq or 0)
            if record.current:
                box._current[record.nullifier] = record
                box._tallies[record.choice] += 1
        return box

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def cast(
        self,
        secret_identity: str,
        choice: str,
        salt: Optional[str] = None,
    ) -> VoteRecord:
        """
        Record a pending vote.

        Replaces any earlier pending vote of the same identity. The
        finalized vote, if any, stays authoritative until finalize().

        Raises:
            InvalidChoiceException: If choice is not a ballot option
        """
        self._check_choice(choice)
        if salt is None:
            salt = generate_salt(self.salt_bytes) if self.require_explicit_salt else default_salt()

        record = VoteRecord(
            nullifier=generate_nullifier(secret_identity),
            commitment=create_commitment(secret_identity, choice, salt),
            choice=choice,
            salt=salt,
            timestamp=int(time.time() * 1000),
        )
        is_update = record.nullifier in self._current or record.nullifier in self._pending
        self._pending[record.nullifier] = record
        self._history.append(record)

        logger.info(
            "Vote %s for nullifier %s…",
            "updated" if is_update else "cast",
            record.nullifier[:12],
        )
        return record

    def finalize(self, nullifier: str) -> MutationResult:
        """
        Make a nullifier's pending vote the authoritative one.

        Raises:
            VoteNotFoundException: If the nullifier has no pending vote
            DuplicateLeafException: If the commitment is already in a tree
                running with strict_duplicates
        """
        record = self._pending.get(nullifier)
        if record is None:
            raise VoteNotFoundException(
                message="No pending vote to finalize",
                nullifier=nullifier,
            )

        previous = self._current.get(nullifier)
        if previous is not None:
            result = self.tree.replace(previous.commitment, record.commitment)
        else:
            result = self.tree.insert(record.commitment)

        # The tree accepted the change; move the bookkeeping over.
        del self._pending[nullifier]
        if previous is not None:
            previous.current = False
            self._tallies[previous.choice] -= 1
        self._finalized_count += 1
        record.finalized = True
        record.current = True
        record.finalized_seq = self._finalized_count
        self._current[nullifier] = record
        self._tallies[record.choice] += 1

        logger.info(
            "Vote finalized for nullifier %s…: root=%s leaf_count=%d",
            nullifier[:12], result.root, result.leaf_count,
        )
        return result

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def proof_for(self, nullifier: str) -> InclusionProof | None:
        """Inclusion proof for the nullifier's current vote, or None."""
        record = self._current.get(nullifier)
        if record is None:
            return None
        return self.tree.generate_proof(record.commitment)

    def current_vote(self, nullifier: str) -> VoteRecord | None:
        record = self._current.get(nullifier)
        return record.model_copy() if record is not None else None

    def pending_vote(self, nullifier: str) -> VoteRecord | None:
        record = self._pending.get(nullifier)
        return record.model_copy() if record is not None else None

    def has_voted(self, nullifier: str) -> bool:
        return nullifier in self._current

    def tallies(self) -> dict[str, int]:
        return dict(self._tallies)

    def history(self) -> list[VoteRecord]:
        return [record.model_copy() for record in self._history]

    @property
    def root(self) -> str | None:
        return self.tree.root

    def _check_choice(self, choice: str) -> None:
        if choice not in self._tallies:
            raise InvalidChoiceException(
                message=f"Unknown vote option: {choice!r}",
                choice=choice,
                details={"options": list(self.options)},
            )


__all__ = [
    "VoteRecord",
    "BallotBox",
]
