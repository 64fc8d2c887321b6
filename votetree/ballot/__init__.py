"""
Ballot lifecycle (cast, finalize, update) on top of the commitment tree.
"""
from .ballot_box import BallotBox, VoteRecord

__all__ = [
    "BallotBox",
    "VoteRecord",
]
