"""
Merkle Tree Implementation
Deterministic sorted-pair Merkle tree construction, proof generation,
and verification.

This module provides:
- Deterministic Merkle root computation
- Merkle proof generation for any leaf
- Merkle proof verification
- Standard padding rule for odd number of nodes

Canonical Commitment Rules (Hard Contracts):
1. Leaf ordering: leaves are sorted byte-wise before the first level is built
2. Parent hashing: parent = keccak256(min(a, b) + max(a, b))  (sorted pair)
3. Padding rule: the last node of an odd level is paired with itself
4. Empty leaves: build_merkle_root([]) returns keccak256(b"")
5. Single leaf: root = leaf, proof = []

Determinism Notes:
- The same set of leaves always yields the same root and the same proofs,
  whatever order the caller supplies them in
- Proofs carry no left/right flags; sorted-pair combination makes
  orientation irrelevant, only sibling order (bottom-up) matters
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence

from core.crypto.hashing import hash_pair, keccak256


# Empty tree sentinel: keccak256 of empty bytes
EMPTY_TREE_ROOT: bytes = keccak256(b"")


@dataclass(frozen=True)
class MerkleProof:
    """
    A Merkle proof for a single leaf in a sorted-pair Merkle tree.

    Attributes:
        leaf: The leaf hash being proven (32 bytes)
        siblings: Sibling hashes from bottom to top of tree
        root: The Merkle root this proof is against
    """
    leaf: bytes
    siblings: list[bytes]
    root: bytes


def merkle_parent(a: bytes, b: bytes) -> bytes:
    """
    Compute the parent hash of two child nodes.

    Order-independent: merkle_parent(a, b) == merkle_parent(b, a)
    """
    return hash_pair(a, b)


def sort_leaves(leaves: Iterable[bytes]) -> list[bytes]:
    """Return leaves in canonical (byte-wise ascending) order."""
    return sorted(bytes(leaf) for leaf in leaves)


def build_merkle_levels(leaves: Sequence[bytes]) -> list[list[bytes]]:
    """
    Build every level of the tree, leaves first, root last.

    Levels are stored unpadded; an odd trailing node is combined with
    itself when the next level is computed.

    Raises:
        ValueError: If leaves is empty
    """
    if len(leaves) == 0:
        raise ValueError("Cannot build levels for empty leaf list")

    levels: list[list[bytes]] = [sort_leaves(leaves)]

    while len(levels[-1]) > 1:
        current_level = levels[-1]
        next_level: list[bytes] = []
        for i in range(0, len(current_level), 2):
            left = current_level[i]
            # Duplicate last node if odd
            right = current_level[i + 1] if i + 1 < len(current_level) else left
            next_level.append(merkle_parent(left, right))
        levels.append(next_level)

    return levels


def build_merkle_root(leaves: Sequence[bytes]) -> bytes:
    """
    Build a Merkle root from a collection of leaf hashes.

    Padding Rule: pair the last node with itself at each odd level.
    Example (sorted): [a, b, c] -> [parent(a,b), parent(c,c)] -> root

    Args:
        leaves: Leaf hashes (32 bytes each); input order does not matter

    Returns:
        32-byte Merkle root
    """
    if len(leaves) == 0:
        return EMPTY_TREE_ROOT

    return build_merkle_levels(leaves)[-1][0]


def _proof_from_levels(levels: list[list[bytes]], position: int) -> list[bytes]:
    siblings: list[bytes] = []
    for level in levels[:-1]:
        sibling_index = position ^ 1
        if sibling_index < len(level):
            siblings.append(level[sibling_index])
        else:
            # Unpaired last node is its own sibling
            siblings.append(level[position])
        position //= 2
    return siblings


def build_merkle_proof(leaves: Sequence[bytes], leaf: bytes) -> MerkleProof:
    """
    Generate a Merkle proof for the given leaf.

    Args:
        leaves: All leaf hashes of the tree
        leaf: The leaf to prove

    Returns:
        MerkleProof with leaf, siblings (bottom-up), and root

    Raises:
        ValueError: If leaves is empty or does not contain leaf
    """
    if len(leaves) == 0:
        raise ValueError("Cannot generate proof for empty leaf list")

    levels = build_merkle_levels(leaves)
    try:
        position = levels[0].index(leaf)
    except ValueError:
        raise ValueError(f"Leaf 0x{leaf.hex()} is not part of the tree") from None

    return MerkleProof(
        leaf=leaf,
        siblings=_proof_from_levels(levels, position),
        root=levels[-1][0],
    )


def process_proof(leaf: bytes, siblings: Sequence[bytes]) -> bytes:
    """
    Fold a proof left-to-right, returning the candidate root.
    """
    computed = leaf
    for sibling in siblings:
        computed = merkle_parent(computed, sibling)
    return computed


def verify_merkle_proof(proof: MerkleProof) -> bool:
    """
    Verify a Merkle proof.

    Recomputes the root from the leaf and siblings, checking
    against the claimed root in the proof.
    """
    return process_proof(proof.leaf, proof.siblings) == proof.root


def compute_tree_depth(num_leaves: int) -> int:
    """
    Compute the depth of a Merkle tree with given number of leaves.

    Depth is the number of levels from leaves to root (inclusive).
    A single leaf has depth 1, two leaves have depth 2, etc.
    """
    if num_leaves == 0:
        return 0

    depth = 1
    n = num_leaves
    while n > 1:
        n = (n + 1) // 2
        depth += 1

    return depth


@dataclass
class MerkleTree:
    """
    A built sorted-pair Merkle tree over a fixed set of leaves.

    Usage:
        tree = MerkleTree.from_leaves(leaves)
        proof = tree.proof(leaves[2])
        assert process_proof(leaves[2], proof) == tree.root
    """
    levels: list[list[bytes]]
    _positions: dict[bytes, int] = field(default_factory=dict, repr=False)

    @classmethod
    def from_leaves(cls, leaves: Iterable[bytes]) -> "MerkleTree":
        levels = build_merkle_levels(list(leaves))
        positions: dict[bytes, int] = {}
        for position, leaf in enumerate(levels[0]):
            positions.setdefault(leaf, position)
        return cls(levels=levels, _positions=positions)

    @property
    def root(self) -> bytes:
        return self.levels[-1][0]

    @property
    def leaves(self) -> list[bytes]:
        return list(self.levels[0])

    @property
    def depth(self) -> int:
        return len(self.levels)

    def __len__(self) -> int:
        return len(self.levels[0])

    def __contains__(self, leaf: object) -> bool:
        return leaf in self._positions

    def proof(self, leaf: bytes) -> list[bytes]:
        """
        Sibling hashes (bottom-up) proving leaf under this tree's root.

        Raises:
            ValueError: If the leaf is not in the tree
        """
        position = self._positions.get(leaf)
        if position is None:
            raise ValueError(f"Leaf 0x{leaf.hex()} is not part of the tree")
        return _proof_from_levels(self.levels, position)


__all__ = [
    "EMPTY_TREE_ROOT",
    "MerkleProof",
    "MerkleTree",
    "merkle_parent",
    "sort_leaves",
    "build_merkle_levels",
    "build_merkle_root",
    "build_merkle_proof",
    "process_proof",
    "verify_merkle_proof",
    "compute_tree_depth",
]
