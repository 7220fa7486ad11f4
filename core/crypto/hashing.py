"""
Hashing Utilities
Basic hashing utilities for allocation commitments.

This module provides:
- Keccak-256 hashing for raw bytes
- Sorted-pair combination used for every Merkle parent
- Hex encoding/decoding with 0x prefix

Security/Determinism Notes:
- Always hash raw bytes exactly as specified
- Pair combination is commutative: hash_pair(a, b) == hash_pair(b, a)
- All operations are deterministic
"""
from __future__ import annotations

from eth_utils import keccak


# Width of every leaf, node and root
HASH_SIZE: int = 32


def keccak256(data: bytes) -> bytes:
    """
    Compute Keccak-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte Keccak-256 digest

    Example:
        >>> keccak256(b"").hex()
        'c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470'
    """
    return keccak(data)


def double_hash(data: bytes) -> bytes:
    """
    Hash the hash of raw bytes: keccak256(keccak256(data)).

    Used for leaves so that no leaf can be confused with an internal
    node (internal nodes are a single hash over 64 bytes).
    """
    return keccak256(keccak256(data))


def hash_pair(a: bytes, b: bytes) -> bytes:
    """
    Combine two hashes in canonical byte order.

    The smaller of the two (byte-wise) is placed first:
    parent = keccak256(min(a, b) + max(a, b))

    Args:
        a: First hash (32 bytes)
        b: Second hash (32 bytes)

    Returns:
        32-byte parent hash, independent of argument order
    """
    if b < a:
        a, b = b, a
    return keccak256(a + b)


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

    Args:
        hex_string: Hex string with 0x prefix

    Returns:
        Decoded bytes

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


def coerce_hash(value: bytes | str) -> bytes:
    """
    Accept a hash as raw bytes or 0x-prefixed hex and return raw bytes.

    Raises:
        TypeError: If the value is neither bytes nor str
        ValueError: If the value is not exactly HASH_SIZE bytes
    """
    if isinstance(value, str):
        raw = from_hex(value)
    elif isinstance(value, (bytes, bytearray, memoryview)):
        raw = bytes(value)
    else:
        raise TypeError(f"Expected bytes or hex string, got {type(value).__name__}")
    if len(raw) != HASH_SIZE:
        raise ValueError(f"Expected a {HASH_SIZE}-byte hash, got {len(raw)} bytes")
    return raw


__all__ = [
    "HASH_SIZE",
    "keccak256",
    "double_hash",
    "hash_pair",
    "to_hex",
    "from_hex",
    "coerce_hash",
]
