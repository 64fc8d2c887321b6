"""
CLI Prove Command

Generate an inclusion proof for one leaf of a leaves file.

Usage:
    votetree prove LEAVES_FILE LEAF [--out PATH]
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace

from votetree_cli.io import CLIInputError, load_tree, write_json


logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def prove_cmd(args: Namespace) -> int:
    """
    Execute the prove command.

    Returns:
        Exit code; 1 if the leaf is not in the tree
    """
    try:
        tree = load_tree(args.leaves_file)
    except CLIInputError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    proof = tree.generate_proof(args.leaf)
    if proof is None:
        print(f"Error: leaf not in tree: {args.leaf}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    write_json(proof.to_dict(), args.out)
    if args.out:
        logger.info("Wrote proof (%d steps) to %s", proof.depth, args.out)
    return EXIT_SUCCESS
