"""
API Request Models

Pydantic models for API request validation.
"""

from pydantic import BaseModel, Field, field_validator


class VerifyRequest(BaseModel):
    """Request body for POST /verify endpoint."""

    recipient: str = Field(
        ...,
        min_length=1,
        description="Recipient address (any case)",
    )
    amount: str = Field(
        ...,
        description="Allocated amount in base units (decimal string)",
    )
    proof: list[str] = Field(
        default_factory=list,
        description="Sibling hashes, bottom-up, 0x-prefixed",
    )

    @field_validator("amount", mode="before")
    @classmethod
    def accept_int_amount(cls, v: object) -> object:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v
