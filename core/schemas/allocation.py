"""
Schemas
File: allocation.py

Purpose: The (recipient, amount) pair committed to by a distribution.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.merkle.leaf_codec import MAX_AMOUNT, leaf_hash, normalize_recipient


class Allocation(BaseModel):
    """
    One entry of the allocation table.

    Immutable once built; the recipient is always stored in checksum form
    so two spellings of the same address compare equal.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    recipient: str = Field(
        ...,
        description="Recipient address (EIP-55 checksum form)",
    )
    amount: int = Field(
        ...,
        ge=0,
        le=MAX_AMOUNT,
        description="Allocated value in base units",
    )

    @field_validator("recipient", mode="before")
    @classmethod
    def normalize(cls, v: object) -> str:
        if not isinstance(v, (str, bytes)):
            raise ValueError("recipient must be an address string")
        return normalize_recipient(v)

    @property
    def leaf(self) -> bytes:
        """The double-hashed leaf committed for this allocation."""
        return leaf_hash(self.recipient, self.amount)
