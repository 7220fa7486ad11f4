"""
API Response Models

Pydantic models for API response serialization.
"""

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    ok: bool = True
    service: str = "merkle-distributor-api"
    version: str = "v1"
    bundle_loaded: bool = False


class ClaimResponse(BaseModel):
    """Response for GET /claims/{recipient}."""

    ok: bool = True
    recipient: str = Field(..., description="Checksum recipient address")
    amount: str = Field(..., description="Amount in base units")
    amount_formatted: str = Field(..., description="Amount in the configured unit")
    proof: list[str] = Field(default_factory=list)
    leaf: str = Field(..., description="Leaf hash committed for this allocation")
    calldata: str = Field(..., description="Encoded claim(uint256,bytes32[]) call")
    valid: bool = Field(..., description="Whether the proof verifies under the root")


class TopClaimant(BaseModel):
    recipient: str
    amount: str
    amount_formatted: str


class StatsResponse(BaseModel):
    """Response for GET /stats."""

    ok: bool = True
    root: str
    total_amount: str
    total_amount_formatted: str
    total_claimants: int
    average_amount: str
    max_proof_length: int
    top_claimants: list[TopClaimant] = Field(default_factory=list)


class VerifyResponse(BaseModel):
    """Response for POST /verify endpoint."""

    ok: bool = True
    valid: bool = Field(..., description="Whether the triple verifies under the root")
    root: str = Field(..., description="Root the proof was checked against")
    recipient: str
    amount: str


class ErrorDetail(BaseModel):
    """Error detail information."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response format."""

    ok: bool = False
    error: ErrorDetail
