"""API request and response models."""

from api.models.requests import VerifyRequest
from api.models.responses import (
    ClaimResponse,
    ErrorDetail,
    ErrorResponse,
    HealthResponse,
    StatsResponse,
    TopClaimant,
    VerifyResponse,
)

__all__ = [
    "VerifyRequest",
    "ClaimResponse",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
    "StatsResponse",
    "TopClaimant",
    "VerifyResponse",
]
