"""
Distributor Module

The on-ledger side: claim state machine, role checks, re-entrancy flag,
outbound transfers, and the in-process ledger they run on.
"""

from .access import AccessGuard, Role
from .clock import Clock, ManualClock, SystemClock
from .distributor import MerkleDistributor
from .guards import ReentrancyGuard, non_reentrant
from .ledger import Ledger, ReceiveHook
from .state import DEFAULT_CLAIM_WINDOW, DistributionPhase, DistributionState
from .transfer import TransferGate, TransferResult

__all__ = [
    "AccessGuard",
    "Role",
    "Clock",
    "ManualClock",
    "SystemClock",
    "MerkleDistributor",
    "ReentrancyGuard",
    "non_reentrant",
    "Ledger",
    "ReceiveHook",
    "DEFAULT_CLAIM_WINDOW",
    "DistributionPhase",
    "DistributionState",
    "TransferGate",
    "TransferResult",
]
