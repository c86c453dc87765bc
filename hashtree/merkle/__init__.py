"""
Merkle Tree
Positional Merkle tree construction and leaf verification.

This module provides:
- MerkleTree: build once, then verify (position, value) pairs
- build / verify / root_hash: functional aliases
- hash_leaf, hash_internal, build_upper_level, assemble_internal_nodes:
  the construction steps, exposed for testing and reuse
- next_pow2: internal slot count of a tree
- session_lock / hasher_session: serialized use of a shared hash algorithm

Commitment Rules:
1. Leaf hashing: H(0x00 || bytes)
2. Internal hashing: H(0x01 || left || right), right = left when missing
3. Padding: odd node self-paired, odd produced level extended by its last digest
4. Fewer than two values: DegenerateInputException

Usage:
    from hashtree.merkle import build, verify, root_hash

    tree = build(["Hello World", "Bye, bye"], "sha256")
    assert verify(tree, 0, "Hello World")
    assert not verify(tree, 0, "Bye, bye")
    root = root_hash(tree)
"""
from .merkle_tree import (
    LEAF_TAG,
    INTERNAL_TAG,
    EMPTY_SLOT,
    session_lock,
    hasher_session,
    next_pow2,
    hash_leaf,
    hash_internal,
    build_upper_level,
    assemble_internal_nodes,
    TreeSummary,
    MerkleTree,
    build,
    verify,
    root_hash,
)


__all__ = [
    # Constants
    "LEAF_TAG",
    "INTERNAL_TAG",
    "EMPTY_SLOT",
    # Hasher sessions
    "session_lock",
    "hasher_session",
    # Construction steps
    "next_pow2",
    "hash_leaf",
    "hash_internal",
    "build_upper_level",
    "assemble_internal_nodes",
    # Facade
    "TreeSummary",
    "MerkleTree",
    "build",
    "verify",
    "root_hash",
]
