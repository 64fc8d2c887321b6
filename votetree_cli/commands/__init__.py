"""
CLI command modules.
"""

from votetree_cli.commands import commit, prove, tree, verify

__all__ = ["commit", "prove", "tree", "verify"]
