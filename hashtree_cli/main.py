"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m hashtree_cli root VALUE... [--file PATH] [--hex | --canonical-json] [--algorithm NAME] [--json]
    python -m hashtree_cli verify --position N --value V VALUE... [--file PATH] [--hex | --canonical-json] [--json]
    python -m hashtree_cli config --show

Environment Variables:
    HASHTREE_HASH_ALGORITHM     Default hash algorithm (default: sha256)
    HASHTREE_LOG_LEVEL          Log level (default: INFO)
    HASHTREE_LOG_FILE           Additional log file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from hashtree.config import RuntimeConfig, set_default_config
from hashtree.schemas.errors import HashTreeException
from hashtree_cli.commands import root, verify
from hashtree_cli.commands.common import EXIT_RUNTIME_ERROR, EXIT_SUCCESS


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
    )


def load_config(path: Path | None) -> RuntimeConfig:
    """Load config from a YAML file (if given) with env overrides on top."""
    if path is None:
        return RuntimeConfig.from_env()
    return RuntimeConfig.from_yaml(path).with_env_overrides()


def _add_value_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "values",
        nargs="*",
        type=str,
        help="Leaf values, in order",
    )
    parser.add_argument(
        "--file", "-f",
        type=str,
        default=None,
        help="Read leaf values from a file, one per line (before positional values)",
    )
    value_format = parser.add_mutually_exclusive_group()
    value_format.add_argument(
        "--hex",
        action="store_true",
        default=False,
        help="Treat every value as 0x-prefixed hex bytes",
    )
    value_format.add_argument(
        "--canonical-json",
        action="store_true",
        default=False,
        help="Treat every value as JSON and hash its canonical form",
    )
    parser.add_argument(
        "--algorithm", "-a",
        type=str,
        default=None,
        help="hashlib algorithm name (default: from config, sha256)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on unexpected errors",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="hashtree",
        description="Build Merkle trees over ordered values and check positions.",
    )
    parser.add_argument(
        "--version", action="version", version="%(prog)s 0.1.0"
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

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Print the root digest of a tree",
        description="Build a tree over the given values and print its root digest.",
    )
    _add_value_arguments(root_parser)
    root_parser.set_defaults(func=root.root_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Check that a value occupies a position",
        description="Build a tree over the given values and verify one position.",
    )
    _add_value_arguments(verify_parser)
    verify_parser.add_argument(
        "--position", "-p",
        type=int,
        required=True,
        help="0-based leaf position to check",
    )
    verify_parser.add_argument(
        "--value", "-v",
        type=str,
        required=True,
        help="Value expected at the position",
    )
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Show effective configuration",
        description="Display the configuration after file and environment overrides.",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.show:
        print(json.dumps(args.runtime_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: hashtree config --show")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except (OSError, HashTreeException) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    set_default_config(config)
    args.runtime_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
