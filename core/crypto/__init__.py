"""
Core cryptographic utilities.

Keccak-256 hashing and the sorted-pair combination rule shared by the
tree builder and the proof verifier.
"""
from .hashing import (
    HASH_SIZE,
    keccak256,
    double_hash,
    hash_pair,
    to_hex,
    from_hex,
    coerce_hash,
)

__all__ = [
    "HASH_SIZE",
    "keccak256",
    "double_hash",
    "hash_pair",
    "to_hex",
    "from_hex",
    "coerce_hash",
]
