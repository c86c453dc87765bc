"""
Core cryptographic utilities.

Hash algorithm collaborator and leaf byte serialization.
"""
from .hashing import (
    DEFAULT_ALGORITHM,
    HashAlgorithm,
    HashlibAlgorithm,
    resolve_algorithm,
    sha256,
    as_bytes,
    canonical_bytes,
    to_hex,
    from_hex,
)

__all__ = [
    "DEFAULT_ALGORITHM",
    "HashAlgorithm",
    "HashlibAlgorithm",
    "resolve_algorithm",
    "sha256",
    "as_bytes",
    "canonical_bytes",
    "to_hex",
    "from_hex",
]
