"""
Merkle Distributor
The claim state machine for a one-time, large fan-out payout.

Lifecycle:
    Uninitialized --open_distribution--> Open --(time passes)--> Expired

Operations:
- open_distribution (authority): commit the root and take the deposit into custody
- claim (any recipient): prove membership and receive the allocation once
- withdraw_remaining (authority, after expiry): recover whatever custody holds
- pause / unpause (owner): block or restore claiming only

Every mutating operation is all-or-nothing and runs under a single
per-instance re-entrancy flag. `claim` marks the recipient as claimed
before the outbound transfer and undoes that mark if the transfer fails.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Sequence

from core.crypto.hashing import HASH_SIZE, coerce_hash, to_hex
from core.distributor.access import AccessGuard
from core.distributor.clock import Clock, SystemClock
from core.distributor.guards import ReentrancyGuard, non_reentrant
from core.distributor.ledger import Ledger
from core.distributor.state import DEFAULT_CLAIM_WINDOW, DistributionPhase, DistributionState
from core.distributor.transfer import TransferGate
from core.events import (
    Claimed,
    DistributionOpened,
    EventRecorder,
    OwnershipTransferred,
    Paused,
    RemainderWithdrawn,
    Unpaused,
)
from core.merkle.leaf_codec import normalize_recipient
from core.merkle.merkle_proofs import verify_claim
from core.schemas.errors import (
    AlreadyClaimedException,
    AlreadyOpenedException,
    ClaimWindowExpiredException,
    ClaimWindowNotExpiredException,
    InvalidDepositException,
    InvalidProofException,
    InvalidRootException,
    NotOpenException,
    NotPausedException,
    PausedException,
    TransferFailedException,
)

if TYPE_CHECKING:
    from core.config.runtime import DistributionConfig


logger = logging.getLogger(__name__)


def _coerce_root(root: bytes | str) -> bytes:
    try:
        raw = coerce_hash(root)
    except (TypeError, ValueError) as e:
        raise InvalidRootException(str(e)) from e
    if raw == bytes(HASH_SIZE):
        raise InvalidRootException("root must not be all zeros")
    return raw


class MerkleDistributor:
    """
    One distribution round bound to a ledger account.

    Usage:
        distributor = MerkleDistributor.deploy(
            ledger, address=contract, authority=dao, owner=ops,
        )
        distributor.open_distribution(dao, tree.root, tree.total_amount)
        distributor.claim(recipient, amount, tree.proof_for(recipient))
    """

    def __init__(
        self,
        state: DistributionState,
        *,
        address: str,
        ledger: Ledger,
        access: AccessGuard,
        clock: Optional[Clock] = None,
        recorder: Optional[EventRecorder] = None,
    ) -> None:
        self.state = state
        self.address = normalize_recipient(address)
        self.ledger = ledger
        self.access = access
        self.clock = clock or SystemClock()
        self.recorder = recorder or EventRecorder()
        self._gate = TransferGate(ledger, custodian=self.address)
        self._guard = ReentrancyGuard()

    @classmethod
    def deploy(
        cls,
        ledger: Ledger,
        *,
        address: str,
        authority: str,
        owner: str,
        window_length: int = DEFAULT_CLAIM_WINDOW,
        clock: Optional[Clock] = None,
        recorder: Optional[EventRecorder] = None,
    ) -> "MerkleDistributor":
        """Create a distributor with a fresh, empty state."""
        return cls(
            DistributionState(window_length=window_length),
            address=address,
            ledger=ledger,
            access=AccessGuard(authority=authority, owner=owner),
            clock=clock,
            recorder=recorder,
        )

    @classmethod
    def from_config(
        cls,
        ledger: Ledger,
        config: DistributionConfig,
        *,
        clock: Optional[Clock] = None,
        recorder: Optional[EventRecorder] = None,
    ) -> "MerkleDistributor":
        """
        Deploy with the window length and role addresses from config.

        Raises:
            ValueError: If address, authority or owner is not configured
        """
        missing = [
            name for name in ("address", "authority", "owner")
            if not getattr(config, name)
        ]
        if missing:
            raise ValueError(f"Distribution config is missing: {', '.join(missing)}")

        return cls.deploy(
            ledger,
            address=config.address,
            authority=config.authority,
            owner=config.owner,
            window_length=config.claim_window_seconds,
            clock=clock,
            recorder=recorder,
        )

    # -------------------------------------------------------------------------
    # Mutating operations
    # -------------------------------------------------------------------------

    @non_reentrant
    def open_distribution(self, caller: str, root: bytes | str, value: int) -> DistributionOpened:
        """
        Commit root and move value from the authority into custody.

        Raises:
            UnauthorizedException: caller is not the authority
            AlreadyOpenedException: a root was already committed
            InvalidDepositException: value is not positive
            InvalidRootException: root is not a non-zero 32-byte hash
            InsufficientFundsException: the authority cannot fund value
        """
        authority = self.access.require_authority(caller)
        if self.state.root is not None:
            raise AlreadyOpenedException(to_hex(self.state.root))
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise InvalidDepositException(value)
        committed_root = _coerce_root(root)

        self.ledger.move(authority, self.address, value)

        now = self.clock.now()
        self.state.open(committed_root, now, value)

        event = self.recorder.emit(
            DistributionOpened(root=to_hex(committed_root), total_value=value, start_time=now)
        )
        logger.info(f"Distribution opened: root={to_hex(committed_root)} value={value} start={now}")
        return event

    @non_reentrant
    def claim(self, caller: str, amount: int, proof: Sequence[bytes | str]) -> Claimed:
        """
        Pay caller its committed allocation.

        Raises:
            PausedException: claiming is paused
            NotOpenException: no root committed yet
            ClaimWindowExpiredException: now >= start_time + window_length
            AlreadyClaimedException: caller already claimed
            InvalidProofException: (caller, amount, proof) does not match root
            TransferFailedException: custody cannot cover the amount or the
                                     transfer was rejected; no state changed
        """
        if self.state.paused:
            raise PausedException()
        if self.state.root is None or self.state.deadline is None:
            raise NotOpenException()
        now = self.clock.now()
        if now >= self.state.deadline:
            raise ClaimWindowExpiredException(self.state.deadline, now)

        try:
            recipient = normalize_recipient(caller)
        except (TypeError, ValueError):
            raise InvalidProofException(str(caller), amount) from None
        if self.state.has_claimed(recipient):
            raise AlreadyClaimedException(recipient)
        if not verify_claim(recipient, amount, proof, self.state.root):
            raise InvalidProofException(recipient, amount)
        if self.state.total_claimed + amount > self.state.total_deposited:
            raise TransferFailedException(recipient, amount, reason="exceeds deposited value")

        # Effects before interactions
        self.state.claimed[recipient] = True
        self.state.total_claimed += amount

        result = self._gate.send(recipient, amount)
        if not result.ok:
            # Roll back; the claim never happened
            del self.state.claimed[recipient]
            self.state.total_claimed -= amount
            raise TransferFailedException(recipient, amount, reason=result.reason)

        event = self.recorder.emit(Claimed(recipient=recipient, amount=amount))
        logger.info(f"Claimed: {recipient} amount={amount}")
        return event

    @non_reentrant
    def withdraw_remaining(self, caller: str) -> RemainderWithdrawn:
        """
        Send the entire custodied balance to the authority once the
        claim window has ended. Repeated calls send whatever is left.

        Raises:
            UnauthorizedException: caller is not the authority
            NotOpenException: no root committed yet
            ClaimWindowNotExpiredException: now < start_time + window_length
            TransferFailedException: the authority rejected the transfer
        """
        authority = self.access.require_authority(caller)
        if self.state.root is None or self.state.deadline is None:
            raise NotOpenException()
        now = self.clock.now()
        if now < self.state.deadline:
            raise ClaimWindowNotExpiredException(self.state.deadline, now)

        amount = self.ledger.balance_of(self.address)
        result = self._gate.send(authority, amount)
        if not result.ok:
            raise TransferFailedException(authority, amount, reason=result.reason)

        event = self.recorder.emit(RemainderWithdrawn(authority=authority, amount=amount))
        logger.info(f"Remainder withdrawn: {amount} to {authority}")
        return event

    @non_reentrant
    def pause(self, caller: str) -> Paused:
        """
        Block claim(). Reads and withdraw_remaining are unaffected.

        Raises:
            UnauthorizedException: caller is not the owner
            PausedException: already paused
        """
        owner = self.access.require_owner(caller)
        if self.state.paused:
            raise PausedException()
        self.state.paused = True
        event = self.recorder.emit(Paused(account=owner))
        logger.info(f"Claiming paused by {owner}")
        return event

    @non_reentrant
    def unpause(self, caller: str) -> Unpaused:
        """
        Raises:
            UnauthorizedException: caller is not the owner
            NotPausedException: not paused
        """
        owner = self.access.require_owner(caller)
        if not self.state.paused:
            raise NotPausedException()
        self.state.paused = False
        event = self.recorder.emit(Unpaused(account=owner))
        logger.info(f"Claiming unpaused by {owner}")
        return event

    @non_reentrant
    def transfer_ownership(self, caller: str, new_owner: str) -> OwnershipTransferred:
        """Hand the owner role to new_owner (owner only)."""
        previous = self.access.transfer_ownership(caller, new_owner)
        event = self.recorder.emit(
            OwnershipTransferred(previous_owner=previous, new_owner=self.access.owner)
        )
        logger.info(f"Ownership transferred from {previous} to {self.access.owner}")
        return event

    # -------------------------------------------------------------------------
    # Read-only views
    # -------------------------------------------------------------------------

    @property
    def authority(self) -> str:
        return self.access.authority

    @property
    def owner(self) -> str:
        return self.access.owner

    @property
    def root(self) -> Optional[bytes]:
        return self.state.root

    @property
    def start_time(self) -> Optional[int]:
        return self.state.start_time

    @property
    def claim_deadline(self) -> Optional[int]:
        return self.state.deadline

    @property
    def total_deposited(self) -> int:
        return self.state.total_deposited

    @property
    def total_claimed(self) -> int:
        return self.state.total_claimed

    @property
    def paused(self) -> bool:
        return self.state.paused

    @property
    def phase(self) -> DistributionPhase:
        return self.state.phase(self.clock.now())

    def balance(self) -> int:
        """Value currently held in custody."""
        return self.ledger.balance_of(self.address)

    def is_claim_window_active(self) -> bool:
        return self.phase is DistributionPhase.OPEN

    def time_remaining(self) -> int:
        """Seconds until the window closes; 0 if unopened or closed."""
        deadline = self.state.deadline
        if deadline is None:
            return 0
        return max(0, deadline - self.clock.now())

    def verify_claim(self, recipient: str, amount: int, proof: Sequence[bytes | str]) -> bool:
        """Check an allocation against the committed root (False if unopened)."""
        if self.state.root is None:
            return False
        return verify_claim(recipient, amount, proof, self.state.root)

    def claimed(self, recipient: str) -> bool:
        try:
            return self.state.has_claimed(normalize_recipient(recipient))
        except (TypeError, ValueError):
            return False
