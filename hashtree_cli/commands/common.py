"""
Shared helpers for CLI commands: value loading, exit codes, error output.
"""

from __future__ import annotations

import json
import sys
from argparse import Namespace
from pathlib import Path
from typing import Any

from hashtree.crypto.hashing import canonical_bytes, from_hex
from hashtree.schemas.errors import HashTreeException


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def decode_value(raw: str, args: Namespace) -> str | bytes:
    """
    Interpret a command-line value according to the value-format options.

    --hex: 0x-prefixed hex bytes
    --canonical-json: a JSON document, re-encoded as canonical JSON bytes
    otherwise: the text itself
    """
    if getattr(args, "hex", False):
        return from_hex(raw)
    if getattr(args, "canonical_json", False):
        return canonical_bytes(json.loads(raw))
    return raw


def collect_values(args: Namespace) -> list[str | bytes]:
    """
    Gather leaf values from positional arguments and --file.

    File values come first, one per line, with the line ending stripped.
    """
    raw_values: list[str] = []

    if getattr(args, "file", None):
        path = Path(args.file)
        if not path.exists():
            raise FileNotFoundError(f"Values file not found: {path}")
        raw_values.extend(path.read_text(encoding="utf-8").splitlines())

    raw_values.extend(args.values or [])

    return [decode_value(raw, args) for raw in raw_values]


def resolve_algorithm_name(args: Namespace) -> str | None:
    """--algorithm wins over the loaded configuration."""
    if getattr(args, "algorithm", None):
        return args.algorithm
    config = getattr(args, "runtime_config", None)
    return config.hash_algorithm if config is not None else None


def print_error(exc: HashTreeException, output_json: bool) -> None:
    """Report a hashtree error on stderr (as the error model when --json)."""
    if output_json:
        print(json.dumps(exc.to_error_model().model_dump(), indent=2), file=sys.stderr)
    else:
        print(f"Error: {exc.message}", file=sys.stderr)


def print_json(data: dict[str, Any]) -> None:
    print(json.dumps(data, indent=2))
