"""
Schemas & Canonicalization
File: __init__.py

Purpose: Export the error taxonomy and canonical serialization helpers.
"""

from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    canonicalize_value,
    dumps_canonical,
    ensure_utc,
    format_datetime_canonical,
)

from .errors import (
    CanonicalizationException,
    ConfigException,
    DegenerateInputException,
    ErrorCodes,
    HashTreeError,
    HashTreeException,
    PositionOutOfRangeException,
    UnsupportedAlgorithmException,
)

__all__ = [
    # Canonical serialization
    "CANONICAL_JSON_SEPARATORS",
    "canonicalize_value",
    "dumps_canonical",
    "ensure_utc",
    "format_datetime_canonical",
    # Errors
    "CanonicalizationException",
    "ConfigException",
    "DegenerateInputException",
    "ErrorCodes",
    "HashTreeError",
    "HashTreeException",
    "PositionOutOfRangeException",
    "UnsupportedAlgorithmException",
]
