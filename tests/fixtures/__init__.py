"""
Test fixtures package for votetree tests.

Usage:
    from fixtures import make_leaves, make_tree

    def test_something():
        tree = make_tree(5)
"""

from .common import (
    make_leaf,
    make_leaves,
    make_commitment,
    make_tree,
    make_config,
    make_ballot_box,
)

__all__ = [
    "make_leaf",
    "make_leaves",
    "make_commitment",
    "make_tree",
    "make_config",
    "make_ballot_box",
]
