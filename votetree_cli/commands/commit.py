"""
CLI Commit Command

Derive the nullifier and commitment for a vote.

Usage:
    votetree commit --secret S --choice C [--salt X] [--json]
"""

from __future__ import annotations

import logging
from argparse import Namespace

from votetree.config.runtime import get_default_config
from votetree.crypto.hashing import (
    create_commitment,
    default_salt,
    generate_nullifier,
    generate_salt,
)
from votetree_cli.io import write_json


logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0


def commit_cmd(args: Namespace) -> int:
    """
    Execute the commit command.

    The salt used is always printed: without it the commitment can
    never be opened again.
    """
    config = get_default_config()
    salt = args.salt
    if salt is None:
        if config.commitment.require_explicit_salt:
            salt = generate_salt(config.commitment.salt_bytes)
        else:
            logger.warning("No salt given; falling back to a time-based salt")
            salt = default_salt()

    result = {
        "nullifier": generate_nullifier(args.secret),
        "commitment": create_commitment(args.secret, args.choice, salt),
        "choice": args.choice,
        "salt": salt,
    }

    if args.json:
        write_json(result)
    else:
        for key in ("nullifier", "commitment", "choice", "salt"):
            print(f"{key}: {result[key]}")
    return EXIT_SUCCESS
