"""
Common test fixtures shared by all modules.

Provides factory functions for the core distributor data structures:
- Addresses
- Allocation tables and their trees
- Ledgers and distributors (opened or not)
"""

from typing import Optional

from core.distributor import Ledger, ManualClock, MerkleDistributor
from core.events import EventRecorder
from core.merkle.allocation_tree import AllocationTree
from core.merkle.leaf_codec import normalize_recipient
from core.schemas.allocation import Allocation


# Fixed start time for deterministic clocks (2024-01-01T00:00:00Z)
START_TIME = 1_704_067_200

AUTHORITY = normalize_recipient("0x" + "da" * 20)
OWNER = normalize_recipient("0x" + "0a" * 20)
DISTRIBUTOR_ADDRESS = normalize_recipient("0x" + "d1" * 20)


def make_address(n: int) -> str:
    """Deterministic checksum address derived from n."""
    return normalize_recipient("0x" + f"{n:040x}")


def make_allocations(
    amounts: Optional[list[int]] = None,
    start: int = 1,
) -> list[Allocation]:
    """
    Allocations for make_address(start), make_address(start + 1), ...

    Defaults to three recipients with 100, 200 and 300.
    """
    if amounts is None:
        amounts = [100, 200, 300]
    return [
        Allocation(recipient=make_address(start + i), amount=amount)
        for i, amount in enumerate(amounts)
    ]


def make_tree(allocations: Optional[list[Allocation]] = None) -> AllocationTree:
    """AllocationTree over make_allocations() unless given."""
    return AllocationTree.from_allocations(allocations or make_allocations())


def make_distributor(
    *,
    ledger: Optional[Ledger] = None,
    clock: Optional[ManualClock] = None,
    window_length: int = 90 * 24 * 60 * 60,
    authority_funds: int = 10**21,
    recorder: Optional[EventRecorder] = None,
) -> MerkleDistributor:
    """
    Deploy an unopened distributor with a funded authority.
    """
    ledger = ledger or Ledger()
    ledger.credit(AUTHORITY, authority_funds)
    return MerkleDistributor.deploy(
        ledger,
        address=DISTRIBUTOR_ADDRESS,
        authority=AUTHORITY,
        owner=OWNER,
        window_length=window_length,
        clock=clock or ManualClock(START_TIME),
        recorder=recorder,
    )


def make_opened_distributor(
    tree: Optional[AllocationTree] = None,
    *,
    deposit: Optional[int] = None,
    **kwargs,
) -> tuple[MerkleDistributor, AllocationTree]:
    """
    Deploy and open a distributor over tree (default make_tree()).

    The deposit defaults to the tree's total amount.
    """
    tree = tree or make_tree()
    distributor = make_distributor(**kwargs)
    distributor.open_distribution(
        AUTHORITY,
        tree.root,
        tree.total_amount if deposit is None else deposit,
    )
    return distributor, tree
