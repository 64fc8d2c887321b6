"""
CLI Verify Command

Verify an inclusion proof offline. Only the proof file is needed.

Usage:
    votetree verify PROOF_FILE [--json]
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass, field

from votetree.merkle.merkle_tree import fold_proof
from votetree.schemas.errors import MalformedProofException
from votetree_cli.io import CLIInputError, load_proof, write_json


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


@dataclass
class VerifySummary:
    """Summary of proof verification for CLI output."""
    proof_path: str = ""
    leaf: str = ""
    claimed_root: str = ""
    computed_root: str = ""
    steps: int = 0
    verified: bool = False
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        d = asdict(self)
        if not d["errors"]:
            del d["errors"]
        return d


def print_summary_human(summary: VerifySummary) -> None:
    print(f"proof: {summary.proof_path}")
    print(f"leaf: {summary.leaf}")
    print(f"claimed_root: {summary.claimed_root}")
    print(f"computed_root: {summary.computed_root}")
    print(f"steps: {summary.steps}")
    print(f"verified: {str(summary.verified).lower()}")
    for err in summary.errors:
        print(f"  ✗ {err}")


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Returns:
        0 if the proof folds to its root, 2 if it does not,
        1 if the file is missing or the proof is malformed
    """
    try:
        proof = load_proof(args.proof_file)
    except CLIInputError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except MalformedProofException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        if args.json:
            write_json(e.to_error_model().model_dump())
        return EXIT_RUNTIME_ERROR

    computed = fold_proof(proof.leaf, proof.path)
    summary = VerifySummary(
        proof_path=str(args.proof_file),
        leaf=proof.leaf,
        claimed_root=proof.root,
        computed_root=computed,
        steps=proof.depth,
        verified=computed == proof.root,
    )
    if not summary.verified:
        summary.errors.append("Computed root does not match claimed root")

    if args.json:
        write_json(summary.to_dict())
    else:
        print_summary_human(summary)

    if summary.verified:
        logger.info("Verification passed")
        return EXIT_SUCCESS
    logger.warning("Verification failed")
    return EXIT_VERIFICATION_FAILED
