"""
CLI file helpers: reading leaf lists and proofs, writing JSON output.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from votetree.merkle.commitment_tree import CommitmentTree
from votetree.schemas.errors import DuplicateLeafException, MalformedProofException
from votetree.schemas.proof import InclusionProof


logger = logging.getLogger(__name__)


class CLIInputError(Exception):
    """Raised when an input file cannot be read or parsed."""


def load_leaves(path: str | Path) -> list[str]:
    """
    Read an ordered leaf list.

    Accepts a JSON array of strings, or plain text with one leaf per line
    (blank lines ignored).
    """
    path = Path(path)
    if not path.exists():
        raise CLIInputError(f"Leaves file not found: {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise CLIInputError(f"Leaves file {path} is not valid UTF-8: {e}") from e
    stripped = text.strip()
    if stripped.startswith("["):
        try:
            data = json.loads(stripped)
        except json.JSONDecodeError as e:
            raise CLIInputError(f"Invalid JSON in {path}: {e}") from e
        if not all(isinstance(item, str) and item for item in data):
            raise CLIInputError(f"Leaves in {path} must be non-empty strings")
        return data

    return [line.strip() for line in text.splitlines() if line.strip()]


def load_tree(path: str | Path) -> CommitmentTree:
    """
    Build a tree from a leaves file under the active runtime config.

    Duplicate leaves collapse to their first occurrence, unless the
    config sets tree.strict_duplicates.

    Raises:
        CLIInputError: If the file cannot be read
        DuplicateLeafException: On a duplicate leaf under strict_duplicates
    """
    leaves = load_leaves(path)
    tree = CommitmentTree.from_config(leaves=leaves)
    dropped = len(leaves) - tree.leaf_count
    if dropped:
        if tree.strict_duplicates:
            seen: set[str] = set()
            for leaf in leaves:
                if leaf in seen:
                    raise DuplicateLeafException(
                        message=f"Duplicate leaf in {path}",
                        leaf=leaf,
                    )
                seen.add(leaf)
        logger.warning("Dropped %d duplicate leaves from %s", dropped, path)
    return tree


def load_proof(path: str | Path) -> InclusionProof:
    """
    Read a proof JSON file.

    Raises:
        CLIInputError: If the file is missing
        MalformedProofException: If the proof is not well-formed or not UTF-8
    """
    path = Path(path)
    if not path.exists():
        raise CLIInputError(f"Proof file not found: {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise MalformedProofException(
            message=f"Proof file {path} is not valid UTF-8: {e}",
        ) from e
    return InclusionProof.from_json(text)


def write_json(data: Any, out: str | Path | None = None) -> None:
    """Print JSON to stdout, or write it to out."""
    payload = json.dumps(data, indent=2)
    if out is None:
        print(payload)
        return
    out = Path(out)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(payload + "\n", encoding="utf-8")
