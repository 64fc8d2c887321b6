"""
Common test fixtures shared by all test modules.

Provides factory functions for:
- Commitment leaves (deterministic, explicit salts)
- Populated CommitmentTrees
- BallotBoxes with an isolated config
"""

from typing import Optional, Sequence

from votetree.ballot.ballot_box import BallotBox
from votetree.config.runtime import RuntimeConfig
from votetree.crypto.hashing import create_commitment, sha256_hex
from votetree.merkle.commitment_tree import CommitmentTree


# =============================================================================
# Leaf Factories
# =============================================================================

def make_leaf(i: int) -> str:
    """A deterministic hex leaf."""
    return sha256_hex(f"leaf{i}")


def make_leaves(n: int) -> list[str]:
    """n deterministic, distinct hex leaves."""
    return [make_leaf(i) for i in range(n)]


def make_commitment(
    secret: str = "alice",
    choice: str = "option-a",
    salt: str = "salt-1",
) -> str:
    """A commitment with an explicit salt, so it is reproducible."""
    return create_commitment(secret, choice, salt)


# =============================================================================
# Tree Factories
# =============================================================================

def make_tree(
    n: int = 0,
    leaves: Optional[Sequence[str]] = None,
    strict_duplicates: bool = False,
) -> CommitmentTree:
    """A tree populated by inserting leaves one at a time."""
    tree = CommitmentTree(strict_duplicates=strict_duplicates)
    for leaf in (leaves if leaves is not None else make_leaves(n)):
        tree.insert(leaf)
    return tree


# =============================================================================
# Ballot Factories
# =============================================================================

def make_config(**sections) -> RuntimeConfig:
    """A RuntimeConfig built from explicit sections, ignoring the environment."""
    return RuntimeConfig.from_dict(sections)


def make_ballot_box(
    options: Sequence[str] = ("option-a", "option-b"),
    config: Optional[RuntimeConfig] = None,
) -> BallotBox:
    return BallotBox(options=options, config=config or make_config())
