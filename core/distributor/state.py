"""
Distribution State

The authoritative record of one distribution round. One instance per
round; it is created empty and opened exactly once.

Invariants:
- root and start_time are set together, at most once, and never reset
- claimed[r] only moves from False to True
- total_claimed never exceeds total_deposited
- the claim window is [start_time, start_time + window_length)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from core.crypto.hashing import to_hex
from core.schemas.errors import AlreadyOpenedException


# 90 days
DEFAULT_CLAIM_WINDOW: int = 90 * 24 * 60 * 60


class DistributionPhase(str, Enum):
    UNINITIALIZED = "uninitialized"
    OPEN = "open"
    EXPIRED = "expired"


@dataclass
class DistributionState:
    window_length: int = DEFAULT_CLAIM_WINDOW
    root: Optional[bytes] = None
    start_time: Optional[int] = None
    total_deposited: int = 0
    total_claimed: int = 0
    paused: bool = False
    claimed: dict[str, bool] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.window_length <= 0:
            raise ValueError(f"Claim window must be positive, got {self.window_length}")

    @property
    def is_opened(self) -> bool:
        return self.root is not None

    @property
    def deadline(self) -> Optional[int]:
        """First second at which claims are refused and recovery allowed."""
        if self.start_time is None:
            return None
        return self.start_time + self.window_length

    def phase(self, now: int) -> DistributionPhase:
        if self.root is None or self.deadline is None:
            return DistributionPhase.UNINITIALIZED
        if now < self.deadline:
            return DistributionPhase.OPEN
        return DistributionPhase.EXPIRED

    def has_claimed(self, recipient: str) -> bool:
        return self.claimed.get(recipient, False)

    def open(self, root: bytes, start_time: int, deposit: int) -> None:
        if self.root is not None:
            raise AlreadyOpenedException(to_hex(self.root))
        self.root = root
        self.start_time = start_time
        self.total_deposited = deposit
