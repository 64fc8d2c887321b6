"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m votetree_cli commit --secret S --choice C [--salt X] [--json]
    python -m votetree_cli root LEAVES_FILE [--json]
    python -m votetree_cli tree LEAVES_FILE
    python -m votetree_cli prove LEAVES_FILE LEAF [--out PATH]
    python -m votetree_cli verify PROOF_FILE [--json]

Environment Variables:
    VOTETREE_STRICT_DUPLICATES      Reject duplicate commitments (default: false)
    VOTETREE_REQUIRE_EXPLICIT_SALT  Never use the time-based salt (default: false)
    VOTETREE_BALLOT_OPTIONS         Comma-separated vote options
    VOTETREE_LOG_LEVEL              Log level (default: INFO)
    VOTETREE_LOG_FILE               Also log to this file
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from votetree import __version__
from votetree.config.runtime import RuntimeConfig, set_default_config
from votetree.schemas.errors import VoteTreeException
from votetree_cli.commands import commit, prove, tree, verify


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="votetree",
        description="Vote commitment tree CLI - commit, build roots, prove and verify inclusion.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to a YAML configuration file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- commit command ---
    commit_parser = subparsers.add_parser(
        "commit",
        help="Derive the nullifier and commitment for a vote",
    )
    commit_parser.add_argument("--secret", required=True, help="Secret identity")
    commit_parser.add_argument("--choice", required=True, help="Vote option")
    commit_parser.add_argument(
        "--salt",
        default=None,
        help="Blinding salt (default: time-based, or random if the config requires it)",
    )
    commit_parser.add_argument("--json", action="store_true", default=False)
    commit_parser.set_defaults(func=commit.commit_cmd)

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Compute the root of a leaves file",
        description="Leaves file: JSON array of strings, or one leaf per line.",
    )
    root_parser.add_argument("leaves_file", type=str)
    root_parser.add_argument("--json", action="store_true", default=False)
    root_parser.set_defaults(func=tree.root_cmd)

    # --- tree command ---
    tree_parser = subparsers.add_parser(
        "tree",
        help="Print the nested tree structure as JSON",
    )
    tree_parser.add_argument("leaves_file", type=str)
    tree_parser.set_defaults(func=tree.tree_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Generate an inclusion proof for a leaf",
    )
    prove_parser.add_argument("leaves_file", type=str)
    prove_parser.add_argument("leaf", type=str)
    prove_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write the proof here instead of stdout",
    )
    prove_parser.set_defaults(func=prove.prove_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify an inclusion proof offline",
    )
    verify_parser.add_argument("proof_file", type=str)
    verify_parser.add_argument("--json", action="store_true", default=False)
    verify_parser.set_defaults(func=verify.verify_cmd)

    return parser


def load_runtime_config(config_path: Path | None) -> RuntimeConfig:
    """Config file first (if any), then environment overrides."""
    if config_path is not None:
        return RuntimeConfig.from_yaml(config_path).with_env_overrides()
    return RuntimeConfig.from_env()


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (default: sys.argv[1:])

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_SUCCESS

    try:
        config = load_runtime_config(args.config)
    except (FileNotFoundError, VoteTreeException) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    set_default_config(config)

    setup_logging(args.log_level or config.logging.level, config.logging.file)

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except VoteTreeException as e:
        logging.getLogger(__name__).error("%s: %s", e.code, e.message)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
