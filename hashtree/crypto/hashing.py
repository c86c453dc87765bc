"""
Hashing Utilities
Hash algorithm collaborator and byte serialization for tree leaves.

This module provides:
- HashAlgorithm: incremental update / finalize_reset interface the tree hashes with
- HashlibAlgorithm: HashAlgorithm backed by any fixed-size hashlib algorithm
- as_bytes: the byte serialization of a leaf value (bytes-likes and str only)
- canonical_bytes: canonical JSON bytes for structured values
- Hex encoding/decoding with 0x prefix

Security/Determinism Notes:
- Bytes are hashed exactly as given, strings as UTF-8
- Structured values are encoded explicitly with canonical_bytes(), never repr()
- All operations are deterministic
"""
from __future__ import annotations

import hashlib
from abc import ABC, abstractmethod
from typing import Any

from hashtree.schemas.canonical import dumps_canonical
from hashtree.schemas.errors import UnsupportedAlgorithmException


DEFAULT_ALGORITHM = "sha256"


class HashAlgorithm(ABC):
    """
    Incremental hash primitive.

    Implementations accumulate input with update() and return the digest
    from finalize_reset(), after which they are back in their initial state
    and can be reused immediately.
    """

    name: str = ""

    @property
    @abstractmethod
    def digest_size(self) -> int:
        """Length in bytes of every digest this algorithm produces."""

    @abstractmethod
    def update(self, data: bytes) -> None:
        """Feed bytes into the running hash state."""

    @abstractmethod
    def finalize_reset(self) -> bytes:
        """Return the digest of everything fed so far and reset the state."""

    def reset(self) -> None:
        """Discard any pending input."""
        self.finalize_reset()


class HashlibAlgorithm(HashAlgorithm):
    """
    HashAlgorithm backed by hashlib.

    Example:
        >>> h = HashlibAlgorithm("sha256")
        >>> h.update(b"hello")
        >>> h.finalize_reset().hex()[:8]
        '2cf24dba'
    """

    def __init__(self, name: str = DEFAULT_ALGORITHM) -> None:
        try:
            state = hashlib.new(name)
        except (ValueError, TypeError) as e:
            raise UnsupportedAlgorithmException(
                message=f"Unknown hash algorithm: {name}",
                algorithm=str(name),
                details={"error": str(e)},
            ) from e

        # shake_* and friends have no fixed digest length
        if state.digest_size == 0:
            raise UnsupportedAlgorithmException(
                message=f"Hash algorithm {name} has no fixed digest size",
                algorithm=name,
            )

        self.name = state.name
        self._state = state

    @property
    def digest_size(self) -> int:
        return self._state.digest_size

    def update(self, data: bytes) -> None:
        self._state.update(data)

    def finalize_reset(self) -> bytes:
        digest = self._state.digest()
        self._state = hashlib.new(self.name)
        return digest

    def __repr__(self) -> str:
        return f"HashlibAlgorithm({self.name!r})"


def resolve_algorithm(hasher: HashAlgorithm | str | None) -> HashAlgorithm:
    """
    Turn a hasher argument into a HashAlgorithm instance.

    Args:
        hasher: An instance (used as-is), a hashlib algorithm name,
            or None for the configured default algorithm.

    Raises:
        UnsupportedAlgorithmException: If the name is unknown.
        TypeError: If hasher is of any other type.
    """
    if isinstance(hasher, HashAlgorithm):
        return hasher
    if hasher is None:
        from hashtree.config import get_default_config

        return HashlibAlgorithm(get_default_config().hash_algorithm)
    if isinstance(hasher, str):
        return HashlibAlgorithm(hasher)
    raise TypeError(
        f"hasher must be a HashAlgorithm, an algorithm name or None, "
        f"got {type(hasher).__name__}"
    )


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def as_bytes(value: Any) -> bytes:
    """
    Byte serialization of a leaf value.

    Only raw bytes and text are accepted:
    - bytes / bytearray / memoryview: the raw bytes
    - str: UTF-8 encoding

    Any other type raises TypeError. Structured values are encoded with
    canonical_bytes() by the caller, on both the build and the verify side.

    Raises:
        TypeError: If value is neither bytes-like nor str.

    Example:
        >>> as_bytes("Hello World")
        b'Hello World'
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        return value.encode("utf-8")
    raise TypeError(
        f"Leaf values must be bytes-like or str, got {type(value).__name__}; "
        f"serialize structured values with canonical_bytes()"
    )


def canonical_bytes(value: Any) -> bytes:
    """
    Canonical JSON of a structured value, UTF-8 encoded.

    Raises:
        CanonicalizationException: If value has no canonical form.

    Example:
        >>> canonical_bytes({"b": 2, "a": None})
        b'{"a":null,"b":2}'
    """
    return dumps_canonical(value).encode("utf-8")


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


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
