"""
Allocation Tree
Builds the committed tree for a whole allocation table.

This is the off-ledger builder: allocations go in, the root and a proof
for every recipient come out. Construction is deterministic and
independent of input order (leaves are sorted before the first level).

Usage:
    tree = AllocationTree.from_allocations(allocations)
    root = tree.root
    proof = tree.proof_for("0x1111111111111111111111111111111111111111")
    bundle = tree.to_bundle()
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from core.crypto.hashing import to_hex
from core.merkle.leaf_codec import normalize_recipient
from core.merkle.merkle_tree import MerkleTree
from core.schemas.allocation import Allocation
from core.schemas.bundle import ClaimProof, ProofBundle
from core.schemas.errors import AllocationException


@dataclass
class AllocationTree:
    """
    A Merkle tree over an allocation table, indexed by recipient.

    Attributes:
        tree: The underlying sorted-pair MerkleTree
        allocations: Allocations keyed by checksum recipient address
    """
    tree: MerkleTree
    allocations: dict[str, Allocation] = field(default_factory=dict)

    @classmethod
    def from_allocations(cls, allocations: Iterable[Allocation]) -> "AllocationTree":
        """
        Build the tree.

        Raises:
            AllocationException: If the table is empty or names a
                                 recipient more than once
        """
        by_recipient: dict[str, Allocation] = {}
        for allocation in allocations:
            if allocation.recipient in by_recipient:
                raise AllocationException(
                    f"Recipient {allocation.recipient} appears more than once",
                    details={"recipient": allocation.recipient},
                )
            by_recipient[allocation.recipient] = allocation

        if not by_recipient:
            raise AllocationException("Cannot build a distribution from zero allocations")

        tree = MerkleTree.from_leaves(a.leaf for a in by_recipient.values())
        return cls(tree=tree, allocations=by_recipient)

    @property
    def root(self) -> bytes:
        return self.tree.root

    @property
    def total_amount(self) -> int:
        return sum(a.amount for a in self.allocations.values())

    @property
    def total_claimants(self) -> int:
        return len(self.allocations)

    def get(self, recipient: str) -> Allocation | None:
        try:
            return self.allocations.get(normalize_recipient(recipient))
        except ValueError:
            return None

    def proof_for(self, recipient: str) -> list[bytes]:
        """
        Sibling hashes proving the recipient's allocation.

        Raises:
            KeyError: If the recipient has no allocation
        """
        allocation = self.get(recipient)
        if allocation is None:
            raise KeyError(recipient)
        return self.tree.proof(allocation.leaf)

    def to_bundle(self) -> ProofBundle:
        """Assemble the proof bundle for every recipient."""
        claims = {
            recipient: ClaimProof(
                amount=str(allocation.amount),
                proof=[to_hex(h) for h in self.tree.proof(allocation.leaf)],
            )
            for recipient, allocation in self.allocations.items()
        }
        return ProofBundle(
            root=to_hex(self.root),
            total_amount=str(self.total_amount),
            total_claimants=self.total_claimants,
            claims=claims,
        )


__all__ = ["AllocationTree"]
