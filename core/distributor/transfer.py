"""
Transfer Gate

Outbound value movement from the distributor's custody. The gate reports
success or failure instead of raising, so the caller can undo its own
state changes before signalling TransferFailed.

The gate holds no reference to the distributor, so it cannot call back
into any state-mutating operation itself.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from core.distributor.ledger import Ledger
from core.merkle.leaf_codec import normalize_recipient


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransferResult:
    """Outcome of one outbound transfer."""
    ok: bool
    recipient: str
    amount: int
    reason: Optional[str] = None

    def __bool__(self) -> bool:
        return self.ok


class TransferGate:
    """
    Sends value from a custodian account.

    Usage:
        gate = TransferGate(ledger, custodian=distributor_address)
        result = gate.send(recipient, 100)
        if not result.ok:
            ...roll back...
    """

    def __init__(self, ledger: Ledger, custodian: str) -> None:
        self.ledger = ledger
        self.custodian = normalize_recipient(custodian)

    def send(self, recipient: str, amount: int) -> TransferResult:
        """
        Transfer amount to recipient.

        Any failure (insufficient custody, a rejecting or re-entering
        receive hook) leaves ledger balances unchanged and is reported in
        the result.
        """
        try:
            self.ledger.send(self.custodian, recipient, amount)
        except Exception as e:
            return TransferResult(
                ok=False,
                recipient=recipient,
                amount=amount,
                reason=f"{type(e).__name__}: {e}",
            )
        logger.debug(f"Sent {amount} from {self.custodian} to {recipient}")
        return TransferResult(ok=True, recipient=recipient, amount=amount)
