"""
CLI Tree Commands

Build a commitment tree from a leaves file and report on it.

Usage:
    votetree root LEAVES_FILE [--json]
    votetree tree LEAVES_FILE
"""

from __future__ import annotations

import sys
from argparse import Namespace

from votetree.merkle.commitment_tree import CommitmentTree
from votetree_cli.io import CLIInputError, load_tree, write_json


EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def _load_tree(leaves_file: str) -> CommitmentTree | None:
    try:
        return load_tree(leaves_file)
    except CLIInputError as e:
        print(f"Error: {e}", file=sys.stderr)
        return None


def root_cmd(args: Namespace) -> int:
    """Print the root and leaf count."""
    tree = _load_tree(args.leaves_file)
    if tree is None:
        return EXIT_RUNTIME_ERROR

    if args.json:
        write_json({
            "root": tree.root,
            "leaf_count": tree.leaf_count,
            "depth": tree.depth,
        })
    else:
        print(f"root: {tree.root if tree.root is not None else '(empty)'}")
        print(f"leaf_count: {tree.leaf_count}")
        print(f"depth: {tree.depth}")
    return EXIT_SUCCESS


def tree_cmd(args: Namespace) -> int:
    """Print the nested tree structure as JSON."""
    tree = _load_tree(args.leaves_file)
    if tree is None:
        return EXIT_RUNTIME_ERROR

    write_json(tree.structure())
    return EXIT_SUCCESS
