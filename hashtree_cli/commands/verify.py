"""
CLI Verify Command

Build a tree from the given values and check that a value occupies a position.

Usage:
    hashtree verify --position N --value V VALUE... [--file PATH] [--hex] [--json]

Exit codes: 0 when the value matches, 2 when it does not, 1 on input errors.
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace
from dataclasses import dataclass, asdict
from typing import Any

from hashtree.crypto.hashing import to_hex
from hashtree.merkle import MerkleTree
from hashtree.schemas.errors import HashTreeException
from hashtree_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    collect_values,
    decode_value,
    print_error,
    print_json,
    resolve_algorithm_name,
)


logger = logging.getLogger(__name__)


@dataclass
class VerifySummary:
    """Summary of a position check for CLI output."""
    position: int = 0
    ok: bool = False
    root: str = ""
    leaf_hash: str = ""
    leaf_count: int = 0
    algorithm: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def print_summary_human(summary: VerifySummary) -> None:
    """Print summary in human-readable format."""
    print(f"position: {summary.position}")
    print(f"ok: {str(summary.ok).lower()}")
    print(f"root: {summary.root}")
    print(f"leaf_hash: {summary.leaf_hash}")


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    output_json = args.json

    try:
        values = collect_values(args)
        value = decode_value(args.value, args)
    except (OSError, ValueError) as e:
        print(f"Error reading values: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        tree = MerkleTree.build(values, resolve_algorithm_name(args))
        ok = tree.verify(args.position, value)
        leaf_hash = tree.leaf_hash(args.position)
    except HashTreeException as e:
        print_error(e, output_json)
        return EXIT_RUNTIME_ERROR

    logger.info(f"Position {args.position}: {'match' if ok else 'mismatch'}")

    summary = VerifySummary(
        position=args.position,
        ok=ok,
        root=to_hex(tree.root_hash()),
        leaf_hash=to_hex(leaf_hash),
        leaf_count=tree.leaf_count,
        algorithm=tree.algorithm,
    )
    if output_json:
        print_json(summary.to_dict())
    else:
        print_summary_human(summary)

    return EXIT_SUCCESS if ok else EXIT_VERIFICATION_FAILED
