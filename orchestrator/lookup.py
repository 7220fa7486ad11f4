"""
Claim Lookup

Read-side helpers over a proof bundle: per-recipient claim info, the
calldata a recipient submits, and summary statistics.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Sequence

from eth_abi import encode
from eth_utils import from_wei, keccak

from core.crypto.hashing import coerce_hash, to_hex
from core.merkle.leaf_codec import leaf_hash, normalize_recipient
from core.merkle.merkle_proofs import verify_claim
from core.schemas.bundle import ProofBundle
from core.schemas.errors import BundleException


CLAIM_SIGNATURE = "claim(uint256,bytes32[])"
CLAIM_SELECTOR = keccak(text=CLAIM_SIGNATURE)[:4]


def format_amount(value: int, unit: str = "ether") -> str:
    """Render base units in unit, without trailing zeros."""
    converted = from_wei(value, unit)
    if isinstance(converted, Decimal):
        text = format(converted.normalize(), "f")
        return text
    return str(converted)


def encode_claim_calldata(amount: int, proof: Sequence[bytes | str]) -> str:
    """
    Encode a claim call: 4-byte selector + abi.encode(uint256, bytes32[]).

    Returns:
        0x-prefixed hex calldata
    """
    siblings = [coerce_hash(h) for h in proof]
    return to_hex(CLAIM_SELECTOR + encode(["uint256", "bytes32[]"], [amount, siblings]))


@dataclass
class ClaimInfo:
    """Everything a recipient needs to submit a claim."""
    recipient: str
    amount: int
    proof: list[str]
    leaf: str
    calldata: str
    valid: bool

    def to_dict(self, unit: str = "ether") -> dict[str, Any]:
        return {
            "recipient": self.recipient,
            "amount": str(self.amount),
            "amount_formatted": format_amount(self.amount, unit),
            "proof": list(self.proof),
            "leaf": self.leaf,
            "calldata": self.calldata,
            "valid": self.valid,
        }


@dataclass
class DistributionStats:
    """Summary of a bundle."""
    root: str
    total_amount: int
    total_claimants: int
    average_amount: int
    max_proof_length: int
    top_claimants: list[tuple[str, int]] = field(default_factory=list)

    def to_dict(self, unit: str = "ether") -> dict[str, Any]:
        return {
            "root": self.root,
            "total_amount": str(self.total_amount),
            "total_amount_formatted": format_amount(self.total_amount, unit),
            "total_claimants": self.total_claimants,
            "average_amount": str(self.average_amount),
            "max_proof_length": self.max_proof_length,
            "top_claimants": [
                {
                    "recipient": recipient,
                    "amount": str(amount),
                    "amount_formatted": format_amount(amount, unit),
                }
                for recipient, amount in self.top_claimants
            ],
        }


def lookup_claim(bundle: ProofBundle, recipient: str) -> ClaimInfo:
    """
    Find recipient's entry in bundle.

    Raises:
        BundleException: If the address is malformed or not in the bundle
    """
    try:
        key = normalize_recipient(recipient)
    except (TypeError, ValueError):
        raise BundleException(
            f"Invalid address: {recipient}", details={"recipient": recipient}
        ) from None

    claim = bundle.get_claim(key)
    if claim is None:
        raise BundleException(
            f"Address {key} is not eligible for this distribution",
            details={"recipient": key},
        )

    amount = claim.amount_value
    return ClaimInfo(
        recipient=key,
        amount=amount,
        proof=list(claim.proof),
        leaf=to_hex(leaf_hash(key, amount)),
        calldata=encode_claim_calldata(amount, claim.proof),
        valid=verify_claim(key, amount, claim.proof, bundle.root),
    )


def distribution_stats(bundle: ProofBundle, top: int = 5) -> DistributionStats:
    """Totals plus the top-N claimants by amount (ties broken by address)."""
    amounts = [(recipient, claim.amount_value) for recipient, claim in bundle.claims.items()]
    ranked = sorted(amounts, key=lambda item: (-item[1], item[0]))
    total = sum(amount for _, amount in amounts)
    count = len(amounts)
    return DistributionStats(
        root=bundle.root,
        total_amount=total,
        total_claimants=count,
        average_amount=total // count if count else 0,
        max_proof_length=max((len(c.proof) for c in bundle.claims.values()), default=0),
        top_claimants=ranked[:max(0, top)],
    )
