"""
Merkle Proof Verification
Recompute an allocation's path to a committed root.

This module provides:
- verify_claim: the read-only claim verification used on and off ledger

Verification Algorithm:
1. leaf = keccak256(keccak256(abi.encode(recipient, amount)))
2. Fold the proof left-to-right with the sorted-pair rule
3. Compare the candidate root to the committed root for exact equality

Malformed input (bad recipient, amount outside uint256, hashes that are
not 32 bytes) never raises; it simply does not verify.
"""
from __future__ import annotations

from typing import Sequence

from core.crypto.hashing import coerce_hash
from core.merkle.leaf_codec import leaf_hash
from core.merkle.merkle_tree import process_proof


def _coerce_all(proof: Sequence[bytes | str]) -> list[bytes] | None:
    try:
        return [coerce_hash(sibling) for sibling in proof]
    except (TypeError, ValueError):
        return None


def verify_claim(
    recipient: str | bytes,
    amount: int,
    proof: Sequence[bytes | str],
    root: bytes | str,
) -> bool:
    """
    Check that (recipient, amount) is committed under root.

    Args:
        recipient: Recipient address
        amount: Allocated amount in base units
        proof: Sibling hashes, bottom-up (bytes or 0x-hex)
        root: Committed Merkle root (bytes or 0x-hex)

    Returns:
        True if the recomputed root equals root, False otherwise
    """
    siblings = _coerce_all(proof)
    if siblings is None:
        return False

    try:
        expected_root = coerce_hash(root)
        leaf = leaf_hash(recipient, amount)
    except (TypeError, ValueError):
        return False

    return process_proof(leaf, siblings) == expected_root


__all__ = [
    "verify_claim",
]
