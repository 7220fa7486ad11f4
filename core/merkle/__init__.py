"""
Merkle Tree and Commitments
Deterministic sorted-pair Merkle tree construction + proof generation/verification.

This module provides:
- leaf_hash: Double-hashed leaf for a (recipient, amount) pair
- MerkleTree / build_merkle_root / build_merkle_proof: Tree construction
- verify_claim: Proof verification against a root

Canonical Commitment Rules:
1. Leaf hashing: keccak256(keccak256(abi.encode(address, uint256)))
2. Parent hashing: keccak256(min(a, b) + max(a, b))
3. Leaves sorted byte-wise before building
4. Padding: Pair the last node with itself if odd number at any level
5. Single leaf: root = leaf

The allocation-level builder lives in core.merkle.allocation_tree and is
imported from there directly.

Usage:
    from core.merkle import leaf_hash, MerkleTree, verify_claim

    leaves = [leaf_hash(a.recipient, a.amount) for a in allocations]
    tree = MerkleTree.from_leaves(leaves)
    proof = tree.proof(leaves[0])
    assert verify_claim(allocations[0].recipient, allocations[0].amount, proof, tree.root)
"""
from .leaf_codec import (
    MAX_AMOUNT,
    encode_allocation,
    leaf_hash,
    normalize_recipient,
)

from .merkle_tree import (
    EMPTY_TREE_ROOT,
    MerkleProof,
    MerkleTree,
    merkle_parent,
    sort_leaves,
    build_merkle_levels,
    build_merkle_root,
    build_merkle_proof,
    process_proof,
    verify_merkle_proof,
    compute_tree_depth,
)

from .merkle_proofs import verify_claim


__all__ = [
    # Leaf codec
    "MAX_AMOUNT",
    "encode_allocation",
    "leaf_hash",
    "normalize_recipient",
    # Core types
    "MerkleProof",
    "MerkleTree",
    "EMPTY_TREE_ROOT",
    # Core functions
    "merkle_parent",
    "sort_leaves",
    "build_merkle_levels",
    "build_merkle_root",
    "build_merkle_proof",
    "process_proof",
    "verify_merkle_proof",
    "compute_tree_depth",
    # Verification
    "verify_claim",
]
