"""
Schemas
File: __init__.py

Purpose: Export the public API for the schemas module.
This is the main entry point for other modules to import schema definitions.
"""

# Error models and exceptions
from .errors import (
    AccessException,
    AllocationException,
    AlreadyClaimedException,
    AlreadyOpenedException,
    BundleException,
    ClaimWindowExpiredException,
    ClaimWindowNotExpiredException,
    DistributorError,
    DistributorException,
    ErrorCategory,
    ErrorCodes,
    InsufficientFundsException,
    InvalidDepositException,
    InvalidProofException,
    InvalidRootException,
    NotOpenException,
    NotPausedException,
    PausedException,
    ReentrantCallException,
    SourceUnavailableException,
    StateException,
    ToolingException,
    TransferException,
    TransferFailedException,
    UnauthorizedException,
    ValidationException,
)

# Allocation table entries
from .allocation import Allocation

# Proof bundle wire format
from .bundle import ClaimProof, ProofBundle


__all__ = [
    # Errors
    "AccessException",
    "AllocationException",
    "AlreadyClaimedException",
    "AlreadyOpenedException",
    "BundleException",
    "ClaimWindowExpiredException",
    "ClaimWindowNotExpiredException",
    "DistributorError",
    "DistributorException",
    "ErrorCategory",
    "ErrorCodes",
    "InsufficientFundsException",
    "InvalidDepositException",
    "InvalidProofException",
    "InvalidRootException",
    "NotOpenException",
    "NotPausedException",
    "PausedException",
    "ReentrantCallException",
    "SourceUnavailableException",
    "StateException",
    "ToolingException",
    "TransferException",
    "TransferFailedException",
    "UnauthorizedException",
    "ValidationException",
    # Allocation
    "Allocation",
    # Bundle
    "ClaimProof",
    "ProofBundle",
]
