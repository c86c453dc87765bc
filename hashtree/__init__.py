"""
hashtree - positional Merkle trees with domain-separated hashing.

    >>> from hashtree import build
    >>> tree = build(["a", "b", "c"])
    >>> tree.verify(2, "c")
    True
"""

from hashtree.crypto import HashAlgorithm, HashlibAlgorithm
from hashtree.merkle import MerkleTree, build, next_pow2, root_hash, verify
from hashtree.schemas.errors import (
    DegenerateInputException,
    HashTreeException,
    PositionOutOfRangeException,
)

__version__ = "0.1.0"

__all__ = [
    "HashAlgorithm",
    "HashlibAlgorithm",
    "MerkleTree",
    "build",
    "verify",
    "root_hash",
    "next_pow2",
    "DegenerateInputException",
    "HashTreeException",
    "PositionOutOfRangeException",
]
