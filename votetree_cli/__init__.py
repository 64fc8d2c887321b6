"""
votetree CLI

Command-line interface for commitments, roots and inclusion proofs.

Usage:
    python -m votetree_cli commit --secret S --choice option-a --salt X
    python -m votetree_cli root leaves.json
    python -m votetree_cli prove leaves.json <leaf> --out proof.json
    python -m votetree_cli verify proof.json
"""
