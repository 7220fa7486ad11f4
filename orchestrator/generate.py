"""
Distribution Generation

Builds the committed tree and the proof bundle from an allocation table.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from core.crypto.hashing import to_hex
from core.merkle.allocation_tree import AllocationTree
from core.schemas.allocation import Allocation
from core.schemas.bundle import ProofBundle


logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """Output of one generation run."""
    tree: AllocationTree
    bundle: ProofBundle

    @property
    def root(self) -> str:
        return self.bundle.root

    @property
    def total_amount(self) -> int:
        return self.tree.total_amount

    @property
    def total_claimants(self) -> int:
        return self.tree.total_claimants


def generate_distribution(allocations: Iterable[Allocation]) -> GenerationResult:
    """
    Build the tree over allocations and a proof for every recipient.

    Raises:
        AllocationException: If allocations is empty or repeats a recipient
    """
    tree = AllocationTree.from_allocations(allocations)
    bundle = tree.to_bundle()
    logger.info(
        f"Generated distribution: root={to_hex(tree.root)} "
        f"claimants={tree.total_claimants} total={tree.total_amount} depth={tree.tree.depth}"
    )
    return GenerationResult(tree=tree, bundle=bundle)
