"""
Merkle Tree Implementation
Positional Merkle tree construction and same-tree leaf verification.

This module provides:
- Domain-separated leaf and internal-node hashing
- Level-by-level construction with the self-pair / duplicate-last padding rule
- Packed flat-array storage of every level
- MerkleTree facade: build once, verify positions any number of times

Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = H(0x00 || as_bytes(value))
2. Internal hashing: parent = H(0x01 || left || right)
3. Odd level: the last node is paired with itself
4. Resize: a produced level with an odd count > 1 gets a copy of its last node
5. Fewer than two values: DegenerateInputException

Node array layout:
    [ root | ...packed internal levels, right aligned... | leaf_0 ... leaf_{n-1} ]
    <------------- next_pow2(n) slots ----------------->  <---- n slots ---->

Determinism Notes:
- Leaf order is the input order; this module never sorts
- The same values and algorithm always give the same node array
"""
from __future__ import annotations

import logging
import threading
import weakref
from contextlib import AbstractContextManager, contextmanager
from typing import Any, Iterable, Iterator, Optional

from pydantic import BaseModel, ConfigDict, Field

from hashtree.crypto.hashing import HashAlgorithm, as_bytes, resolve_algorithm, to_hex
from hashtree.schemas.errors import DegenerateInputException, PositionOutOfRangeException


logger = logging.getLogger(__name__)


# Domain separation tags
LEAF_TAG: bytes = b"\x00"
INTERNAL_TAG: bytes = b"\x01"

# Placeholder for internal slots the assembler never writes
EMPTY_SLOT: bytes = b""

# One lock per hash algorithm instance, shared by every tree built with it
_session_locks: "weakref.WeakKeyDictionary[HashAlgorithm, threading.Lock]" = (
    weakref.WeakKeyDictionary()
)
_session_locks_guard = threading.Lock()


def session_lock(hasher: HashAlgorithm) -> threading.Lock:
    """Return the lock that serializes every use of `hasher`."""
    with _session_locks_guard:
        lock = _session_locks.get(hasher)
        if lock is None:
            lock = threading.Lock()
            _session_locks[hasher] = lock
        return lock


@contextmanager
def hasher_session(hasher: HashAlgorithm) -> Iterator[HashAlgorithm]:
    """
    Exclusive use of `hasher` for one computation.

    The hasher is reset if the computation fails part-way.
    """
    with session_lock(hasher):
        try:
            yield hasher
        except BaseException:
            hasher.reset()
            raise


def next_pow2(n: int) -> int:
    """
    Smallest power of two greater than or equal to n.

    Example:
        >>> [next_pow2(n) for n in (1, 2, 3, 5, 8, 9)]
        [1, 2, 4, 8, 8, 16]
    """
    if n < 1:
        raise ValueError(f"next_pow2 expects a positive integer, got {n}")
    return 1 << (n - 1).bit_length()


def hash_leaf(value: Any, hasher: HashAlgorithm) -> bytes:
    """
    Hash a leaf value: H(0x00 || as_bytes(value)).

    The hasher is left in its reset state.
    """
    data = as_bytes(value)
    hasher.update(LEAF_TAG)
    hasher.update(data)
    return hasher.finalize_reset()


def hash_internal(left: bytes, right: Optional[bytes], hasher: HashAlgorithm) -> bytes:
    """
    Hash an internal node: H(0x01 || left || right).

    A missing right child is replaced by the left one.
    The hasher is left in its reset state.
    """
    hasher.update(INTERNAL_TAG)
    hasher.update(left)
    hasher.update(left if right is None else right)
    return hasher.finalize_reset()


def build_upper_level(level: list[bytes], hasher: HashAlgorithm) -> list[bytes]:
    """
    Build the level above `level`.

    Adjacent pairs are hashed together, an unmatched last node is hashed
    with itself. If the result has an odd count greater than one, its last
    digest is appended again (copied, not re-hashed).

    Example:
        [a, b, c]       -> [H(a,b), H(c,c)]
        [a, b, c, d, e] -> [H(a,b), H(c,d), H(e,e), H(e,e)]
    """
    result: list[bytes] = []
    for i in range(0, len(level), 2):
        right = level[i + 1] if i + 1 < len(level) else None
        result.append(hash_internal(level[i], right, hasher))

    if len(result) > 1 and len(result) % 2 != 0:
        result.append(result[-1])

    return result


def assemble_internal_nodes(
    nodes: list[bytes],
    internal_slot_count: int,
    hasher: HashAlgorithm,
) -> list[int]:
    """
    Fill the internal region of `nodes` in place, bottom-up.

    Each new level is written into the window that ends where the previous
    level's window started; the final single-digest level is also written
    to slot 0. Requires internal_slot_count == next_pow2(leaf count).

    Returns:
        Lengths of the produced levels, bottom to top.
    """
    parents = build_upper_level(nodes[internal_slot_count:], hasher)
    upper_end = internal_slot_count
    upper_start = upper_end - len(parents)
    nodes[upper_start:upper_end] = parents
    level_sizes = [len(parents)]

    while len(parents) > 1:
        parents = build_upper_level(parents, hasher)
        upper_end = upper_start
        upper_start -= len(parents)
        nodes[upper_start:upper_end] = parents
        level_sizes.append(len(parents))

    nodes[0] = parents[0]
    return level_sizes


class TreeSummary(BaseModel):
    """Read-only description of a built tree."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    algorithm: str = Field(..., description="Hash algorithm name")
    digest_size: int = Field(..., ge=1, description="Digest length in bytes")
    leaf_count: int = Field(..., ge=2)
    internal_slot_count: int = Field(..., ge=2)
    depth: int = Field(..., ge=2, description="Number of levels, leaves and root included")
    root: str = Field(..., description="Root digest, 0x-prefixed hex")


class MerkleTree:
    """
    Merkle tree over an ordered sequence of values.

    Built once with MerkleTree.build(), then used read-only. Every hash
    computed goes through session(), which serializes access to the hash
    algorithm instance across all trees that share it.

    Example:
        >>> tree = MerkleTree.build(["Hello World", "Bye, bye"])
        >>> tree.verify(1, "Bye, bye")
        True
        >>> len(tree.root_hash())
        32
    """

    def __init__(
        self,
        hasher: HashAlgorithm,
        nodes: list[bytes],
        internal_slot_count: int,
        leaf_count: int,
        depth: int,
    ) -> None:
        self._hasher = hasher
        self._nodes = nodes
        self._internal_slot_count = internal_slot_count
        self._leaf_count = leaf_count
        self._depth = depth

    @classmethod
    def build(
        cls,
        values: Iterable[Any],
        hasher: HashAlgorithm | str | None = None,
    ) -> "MerkleTree":
        """
        Build a tree from an ordered sequence of values.

        Args:
            values: Two or more bytes-like or str values
            hasher: HashAlgorithm instance, hashlib algorithm name, or None
                for the configured default. An instance may be shared
                between trees; its uses are serialized by session_lock()

        Returns:
            The assembled tree

        Raises:
            DegenerateInputException: If fewer than two values are given
            UnsupportedAlgorithmException: If hasher names an unknown algorithm
            TypeError: If a value is neither bytes-like nor str
        """
        if isinstance(values, (str, bytes, bytearray)):
            raise TypeError("values must be a sequence of values, not a single str/bytes")

        values = list(values)
        leaf_count = len(values)
        if leaf_count <= 1:
            raise DegenerateInputException(
                message=f"Expected more than 1 value, received {leaf_count}",
                leaf_count=leaf_count,
            )

        algorithm = resolve_algorithm(hasher)
        internal_slot_count = next_pow2(leaf_count)

        with hasher_session(algorithm):
            leaves = [hash_leaf(value, algorithm) for value in values]
            nodes: list[bytes] = [EMPTY_SLOT] * internal_slot_count + leaves
            level_sizes = assemble_internal_nodes(nodes, internal_slot_count, algorithm)

        logger.debug(
            f"Built {algorithm.name} tree: {leaf_count} leaves, "
            f"{internal_slot_count} internal slots, levels {level_sizes}"
        )
        logger.debug(f"Root: {to_hex(nodes[0])}")

        return cls(
            hasher=algorithm,
            nodes=nodes,
            internal_slot_count=internal_slot_count,
            leaf_count=leaf_count,
            depth=len(level_sizes) + 1,
        )

    # --- Accessors ---

    @property
    def leaf_count(self) -> int:
        return self._leaf_count

    @property
    def internal_slot_count(self) -> int:
        return self._internal_slot_count

    @property
    def depth(self) -> int:
        """Number of levels from the leaf level to the root, inclusive."""
        return self._depth

    @property
    def algorithm(self) -> str:
        return self._hasher.name

    @property
    def digest_size(self) -> int:
        return self._hasher.digest_size

    @property
    def nodes(self) -> tuple[bytes, ...]:
        """Snapshot of the packed node array."""
        return tuple(self._nodes)

    def root_hash(self) -> bytes:
        """Return the root digest (node slot 0)."""
        return self._nodes[0]

    def leaf_hash(self, position: int) -> bytes:
        """Return the stored leaf digest at `position`."""
        self._check_position(position)
        return self._nodes[self._internal_slot_count + position]

    # --- Verification ---

    def session(self) -> AbstractContextManager[HashAlgorithm]:
        """Exclusive use of the tree's hash algorithm; see hasher_session()."""
        return hasher_session(self._hasher)

    def verify(self, position: int, value: Any) -> bool:
        """
        Check that `value` is the value stored at leaf `position`.

        Raises:
            PositionOutOfRangeException: If position does not address a leaf
            TypeError: If value is neither bytes-like nor str
        """
        expected = self.leaf_hash(position)
        with self.session() as hasher:
            actual = hash_leaf(value, hasher)

        if actual != expected:
            logger.debug(f"Leaf mismatch at position {position}")
            return False
        return True

    def summary(self) -> TreeSummary:
        return TreeSummary(
            algorithm=self.algorithm,
            digest_size=self.digest_size,
            leaf_count=self._leaf_count,
            internal_slot_count=self._internal_slot_count,
            depth=self._depth,
            root=to_hex(self.root_hash()),
        )

    def _check_position(self, position: int) -> None:
        if isinstance(position, bool) or not isinstance(position, int):
            raise TypeError(f"position must be an int, got {type(position).__name__}")
        if not 0 <= position < self._leaf_count:
            raise PositionOutOfRangeException(
                message=f"Position {position} does not relate to any leaf "
                        f"(leaf count {self._leaf_count})",
                position=position,
                leaf_count=self._leaf_count,
            )

    def __len__(self) -> int:
        return self._leaf_count

    def __repr__(self) -> str:
        return (
            f"MerkleTree(algorithm={self.algorithm!r}, leaf_count={self._leaf_count}, "
            f"root={to_hex(self.root_hash())!r})"
        )


# --- Functional API ---

def build(values: Iterable[Any], hasher: HashAlgorithm | str | None = None) -> MerkleTree:
    """Build a MerkleTree; see MerkleTree.build."""
    return MerkleTree.build(values, hasher)


def verify(tree: MerkleTree, position: int, value: Any) -> bool:
    """Check `value` against leaf `position` of `tree`."""
    return tree.verify(position, value)


def root_hash(tree: MerkleTree) -> bytes:
    """Root digest of `tree`."""
    return tree.root_hash()


__all__ = [
    "LEAF_TAG",
    "INTERNAL_TAG",
    "EMPTY_SLOT",
    "session_lock",
    "hasher_session",
    "next_pow2",
    "hash_leaf",
    "hash_internal",
    "build_upper_level",
    "assemble_internal_nodes",
    "TreeSummary",
    "MerkleTree",
    "build",
    "verify",
    "root_hash",
]
