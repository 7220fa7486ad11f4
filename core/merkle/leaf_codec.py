"""
Leaf Codec
Deterministic encoding of (recipient, amount) pairs into Merkle leaves.

Canonical Leaf Rules (Hard Contracts):
1. Recipient: 20-byte account address, ABI-encoded as a left-padded 32-byte word
2. Amount: unsigned integer, ABI-encoded as a big-endian uint256 word
3. encode(recipient, amount) = abi.encode(address, uint256)  (64 bytes, no delimiters)
4. leaf = keccak256(keccak256(encode(recipient, amount)))

The double hash keeps leaves (hash of a 32-byte digest) disjoint from
internal nodes (hash of two concatenated 32-byte digests).
"""
from __future__ import annotations

from eth_abi import encode
from eth_utils import to_checksum_address

from core.crypto.hashing import double_hash


# Largest amount representable in a uint256 word
MAX_AMOUNT: int = 2**256 - 1

LEAF_ABI_TYPES: tuple[str, str] = ("address", "uint256")


def normalize_recipient(recipient: str | bytes) -> str:
    """
    Normalize a recipient identifier to its EIP-55 checksum form.

    Raises:
        ValueError: If the value is not a 20-byte address
    """
    return to_checksum_address(recipient)


def encode_allocation(recipient: str | bytes, amount: int) -> bytes:
    """
    Encode a (recipient, amount) pair with fixed field widths.

    Raises:
        ValueError: If the recipient is malformed or the amount is
                    outside [0, MAX_AMOUNT]
    """
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise ValueError(f"Amount must be an integer, got {type(amount).__name__}")
    if amount < 0 or amount > MAX_AMOUNT:
        raise ValueError(f"Amount {amount} does not fit in uint256")
    return encode(list(LEAF_ABI_TYPES), [normalize_recipient(recipient), amount])


def leaf_hash(recipient: str | bytes, amount: int) -> bytes:
    """
    Compute the 32-byte leaf for an allocation.

    Example:
        >>> leaf = leaf_hash("0x1111111111111111111111111111111111111111", 100)
        >>> len(leaf)
        32
    """
    return double_hash(encode_allocation(recipient, amount))


__all__ = [
    "MAX_AMOUNT",
    "LEAF_ABI_TYPES",
    "normalize_recipient",
    "encode_allocation",
    "leaf_hash",
]
