"""
CLI Root Command

Build a tree from the given values and print its root digest.

Usage:
    hashtree root VALUE... [--file PATH] [--hex] [--algorithm NAME] [--json]
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace

from hashtree.merkle import MerkleTree, TreeSummary
from hashtree.schemas.errors import HashTreeException
from hashtree_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    collect_values,
    print_error,
    print_json,
    resolve_algorithm_name,
)


logger = logging.getLogger(__name__)


def print_summary_human(summary: TreeSummary) -> None:
    """Print summary in human-readable format."""
    print(f"root: {summary.root}")
    print(f"algorithm: {summary.algorithm}")
    print(f"leaf_count: {summary.leaf_count}")
    print(f"depth: {summary.depth}")


def root_cmd(args: Namespace) -> int:
    """
    Execute the root command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    output_json = args.json

    try:
        values = collect_values(args)
    except (OSError, ValueError) as e:
        print(f"Error reading values: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    logger.info(f"Building tree over {len(values)} values")

    try:
        tree = MerkleTree.build(values, resolve_algorithm_name(args))
    except HashTreeException as e:
        print_error(e, output_json)
        return EXIT_RUNTIME_ERROR

    summary = tree.summary()
    if output_json:
        print_json(summary.model_dump())
    else:
        print_summary_human(summary)

    return EXIT_SUCCESS
