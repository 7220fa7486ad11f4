"""
Schemas
File: bundle.py

Purpose: The proof bundle handed from tree generation to lookup front ends.

Wire format (JSON):
    {
      "root": "0x…",
      "totalAmount": "600",
      "totalClaimants": 3,
      "claims": {
        "0xAbC…": {"amount": "100", "proof": ["0x…", "0x…"]}
      }
    }

Integers are decimal strings so values above 2**53 survive JSON tooling.
Bundles written under the older "merkleRoot" key are still accepted.
"""

from __future__ import annotations

import re

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from core.merkle.leaf_codec import MAX_AMOUNT, normalize_recipient
from core.merkle.merkle_proofs import verify_claim


_HASH_RE = re.compile(r"^0x[0-9a-fA-F]{64}$")
_UINT_RE = re.compile(r"^[0-9]+$")
_UINT_DIGITS = len(str(MAX_AMOUNT))


def _check_hash(value: str) -> str:
    if not _HASH_RE.match(value):
        raise ValueError(f"Expected 0x-prefixed 32-byte hex hash, got {value!r}")
    return value.lower()


def _check_uint(value: str) -> str:
    if not _UINT_RE.match(value):
        raise ValueError(f"Expected a non-negative integer string, got {value!r}")
    significant = value.lstrip("0")
    if len(significant) > _UINT_DIGITS or int(significant or "0") > MAX_AMOUNT:
        raise ValueError(f"Value does not fit in uint256: {value[:20]}...")
    return value


class ClaimProof(BaseModel):
    """Amount and proof for one recipient."""

    model_config = ConfigDict(extra="forbid")

    amount: str = Field(..., description="Allocated amount in base units (decimal string)")
    proof: list[str] = Field(default_factory=list, description="Sibling hashes, bottom-up")

    @field_validator("amount", mode="before")
    @classmethod
    def validate_amount(cls, v: object) -> str:
        if isinstance(v, int) and not isinstance(v, bool):
            v = str(v)
        if not isinstance(v, str):
            raise ValueError("amount must be an integer string")
        return _check_uint(v)

    @field_validator("proof")
    @classmethod
    def validate_proof(cls, v: list[str]) -> list[str]:
        return [_check_hash(h) for h in v]

    @property
    def amount_value(self) -> int:
        return int(self.amount)


class ProofBundle(BaseModel):
    """
    Root plus per-recipient claim data for a whole distribution.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    root: str = Field(
        ...,
        validation_alias=AliasChoices("root", "merkleRoot"),
        description="Committed Merkle root",
    )
    total_amount: str = Field(
        ...,
        alias="totalAmount",
        description="Sum of all allocated amounts (decimal string)",
    )
    total_claimants: int = Field(
        ...,
        alias="totalClaimants",
        ge=0,
        description="Number of recipients in the tree",
    )
    claims: dict[str, ClaimProof] = Field(
        default_factory=dict,
        description="Claim data keyed by checksum recipient address",
    )

    @field_validator("root")
    @classmethod
    def validate_root(cls, v: str) -> str:
        return _check_hash(v)

    @field_validator("total_amount", mode="before")
    @classmethod
    def validate_total_amount(cls, v: object) -> str:
        if isinstance(v, int) and not isinstance(v, bool):
            v = str(v)
        if not isinstance(v, str):
            raise ValueError("totalAmount must be an integer string")
        return _check_uint(v)

    @field_validator("claims")
    @classmethod
    def normalize_recipients(cls, v: dict[str, ClaimProof]) -> dict[str, ClaimProof]:
        normalized: dict[str, ClaimProof] = {}
        for recipient, claim in v.items():
            key = normalize_recipient(recipient)
            if key in normalized:
                raise ValueError(f"Duplicate recipient in claims: {key}")
            normalized[key] = claim
        return normalized

    @property
    def total_amount_value(self) -> int:
        return int(self.total_amount)

    def get_claim(self, recipient: str) -> ClaimProof | None:
        """Look up a recipient in any address spelling."""
        try:
            key = normalize_recipient(recipient)
        except ValueError:
            return None
        return self.claims.get(key)

    def consistency_errors(self) -> list[str]:
        """
        Check the bundle against itself.

        Returns a list of human-readable problems; empty means every
        proof verifies under the root and the totals add up.
        """
        errors: list[str] = []
        if self.total_claimants != len(self.claims):
            errors.append(
                f"totalClaimants is {self.total_claimants} but {len(self.claims)} claims present"
            )
        total = sum(c.amount_value for c in self.claims.values())
        if total != self.total_amount_value:
            errors.append(f"totalAmount is {self.total_amount} but claims sum to {total}")
        for recipient in self.validate_against_root():
            errors.append(f"Proof for {recipient} does not verify under root")
        return errors

    def validate_against_root(self) -> list[str]:
        """Recipients whose proof does not verify under the bundle root."""
        return [
            recipient
            for recipient, claim in self.claims.items()
            if not verify_claim(recipient, claim.amount_value, claim.proof, self.root)
        ]

    def to_json(self) -> str:
        """Serialize to the indented wire format."""
        return self.model_dump_json(by_alias=True, indent=2)
