"""
Schemas & Errors
File: errors.py

Purpose: Standard error taxonomy across the distributor.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.

Every failure is a distinct named signal so external tooling can branch
on cause. Exceptions fall into five categories:
- access: wrong role for the operation
- state: operation invalid for the current lifecycle phase
- validation: bad deposit, bad root, bad proof, duplicate claim
- transfer: outbound value movement failed
- tooling: allocation table, proof bundle or source problems
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the distributor."""

    # Access Errors
    UNAUTHORIZED = "UNAUTHORIZED"

    # Lifecycle State Errors
    ALREADY_OPENED = "ALREADY_OPENED"
    NOT_OPEN = "NOT_OPEN"
    CLAIM_WINDOW_EXPIRED = "CLAIM_WINDOW_EXPIRED"
    CLAIM_WINDOW_NOT_EXPIRED = "CLAIM_WINDOW_NOT_EXPIRED"
    ENFORCED_PAUSE = "ENFORCED_PAUSE"
    EXPECTED_PAUSE = "EXPECTED_PAUSE"
    REENTRANT_CALL = "REENTRANT_CALL"

    # Validation Errors
    INVALID_DEPOSIT = "INVALID_DEPOSIT"
    INVALID_ROOT = "INVALID_ROOT"
    INVALID_PROOF = "INVALID_PROOF"
    ALREADY_CLAIMED = "ALREADY_CLAIMED"

    # Transfer Errors
    TRANSFER_FAILED = "TRANSFER_FAILED"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"

    # Off-ledger Tooling Errors
    ALLOCATION_INVALID = "ALLOCATION_INVALID"
    BUNDLE_INVALID = "BUNDLE_INVALID"
    SOURCE_UNAVAILABLE = "SOURCE_UNAVAILABLE"


class ErrorCategory:
    """Error families; each exception belongs to exactly one."""

    ACCESS = "access"
    STATE = "state"
    VALIDATION = "validation"
    TRANSFER = "transfer"
    TOOLING = "tooling"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class DistributorError(BaseModel):
    """
    Base error model for structured error communication.

    Used by the CLI JSON output and the HTTP API to report failures
    without losing the machine-readable code.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.INVALID_PROOF],
    )
    category: str = Field(
        default=ErrorCategory.VALIDATION,
        description="Error family",
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )

    def to_exception(self) -> "DistributorException":
        """Convert this error model to a raised exception."""
        exc = DistributorException(
            message=self.message,
            code=self.code,
            details=self.details,
        )
        exc.category = self.category
        return exc


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class DistributorException(Exception):
    """
    Base exception for all distributor errors.

    This exception carries structured error information and can be
    converted to a DistributorError model.
    """

    category: str = ErrorCategory.VALIDATION

    def __init__(
        self,
        message: str,
        code: str = "DISTRIBUTOR_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_error_model(self) -> DistributorError:
        """Convert this exception to a DistributorError model."""
        return DistributorError(
            code=self.code,
            category=self.category,
            message=self.message,
            details=self.details,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class AccessException(DistributorException):
    """Caller does not hold the role the operation requires."""

    category = ErrorCategory.ACCESS


class StateException(DistributorException):
    """Operation is not valid in the current lifecycle phase."""

    category = ErrorCategory.STATE


class ValidationException(DistributorException):
    """Operation input was rejected."""

    category = ErrorCategory.VALIDATION


class TransferException(DistributorException):
    """Outbound value movement failed."""

    category = ErrorCategory.TRANSFER


class ToolingException(DistributorException):
    """Off-ledger input or artifact problem."""

    category = ErrorCategory.TOOLING


# -----------------------------------------------------------------------------
# Access
# -----------------------------------------------------------------------------

class UnauthorizedException(AccessException):
    """Raised when the caller is not the holder of the required role."""

    def __init__(self, required_role: str, caller: str) -> None:
        super().__init__(
            message=f"Caller {caller} is not the {required_role}",
            code=ErrorCodes.UNAUTHORIZED,
            details={"required_role": required_role, "caller": caller},
        )
        self.required_role = required_role
        self.caller = caller


# -----------------------------------------------------------------------------
# State
# -----------------------------------------------------------------------------

class AlreadyOpenedException(StateException):
    def __init__(self, root: str) -> None:
        super().__init__(
            message=f"Distribution already opened with root {root}",
            code=ErrorCodes.ALREADY_OPENED,
            details={"root": root},
        )


class NotOpenException(StateException):
    def __init__(self) -> None:
        super().__init__(
            message="Distribution has not been opened",
            code=ErrorCodes.NOT_OPEN,
        )


class ClaimWindowExpiredException(StateException):
    def __init__(self, deadline: int, now: int) -> None:
        super().__init__(
            message=f"Claim window closed at {deadline} (now {now})",
            code=ErrorCodes.CLAIM_WINDOW_EXPIRED,
            details={"deadline": deadline, "now": now},
        )


class ClaimWindowNotExpiredException(StateException):
    def __init__(self, deadline: int, now: int) -> None:
        super().__init__(
            message=f"Claim window is open until {deadline} (now {now})",
            code=ErrorCodes.CLAIM_WINDOW_NOT_EXPIRED,
            details={"deadline": deadline, "now": now},
        )


class PausedException(StateException):
    """Raised when claiming (or pausing again) while paused."""

    def __init__(self) -> None:
        super().__init__(
            message="Claiming is paused",
            code=ErrorCodes.ENFORCED_PAUSE,
        )


class NotPausedException(StateException):
    def __init__(self) -> None:
        super().__init__(
            message="Claiming is not paused",
            code=ErrorCodes.EXPECTED_PAUSE,
        )


class ReentrantCallException(StateException):
    """Raised when a guarded operation is entered while another is running."""

    def __init__(self, operation: str, active: str) -> None:
        super().__init__(
            message=f"Re-entrant call to {operation} while {active} is in progress",
            code=ErrorCodes.REENTRANT_CALL,
            details={"operation": operation, "active": active},
        )


# -----------------------------------------------------------------------------
# Validation
# -----------------------------------------------------------------------------

class InvalidDepositException(ValidationException):
    def __init__(self, value: int) -> None:
        super().__init__(
            message=f"Deposit must be positive, got {value}",
            code=ErrorCodes.INVALID_DEPOSIT,
            details={"value": value},
        )


class InvalidRootException(ValidationException):
    def __init__(self, reason: str) -> None:
        super().__init__(
            message=f"Invalid Merkle root: {reason}",
            code=ErrorCodes.INVALID_ROOT,
        )


class InvalidProofException(ValidationException):
    def __init__(self, recipient: str, amount: int) -> None:
        super().__init__(
            message=f"Proof does not match committed root for {recipient} / {amount}",
            code=ErrorCodes.INVALID_PROOF,
            details={"recipient": recipient, "amount": str(amount)},
        )


class AlreadyClaimedException(ValidationException):
    def __init__(self, recipient: str) -> None:
        super().__init__(
            message=f"Allocation for {recipient} already claimed",
            code=ErrorCodes.ALREADY_CLAIMED,
            details={"recipient": recipient},
        )


# -----------------------------------------------------------------------------
# Transfer
# -----------------------------------------------------------------------------

class TransferFailedException(TransferException):
    def __init__(self, recipient: str, amount: int, reason: str | None = None) -> None:
        details: dict[str, Any] = {"recipient": recipient, "amount": str(amount)}
        if reason:
            details["reason"] = reason
        super().__init__(
            message=f"Transfer of {amount} to {recipient} failed",
            code=ErrorCodes.TRANSFER_FAILED,
            details=details,
        )


class InsufficientFundsException(TransferException):
    def __init__(self, account: str, balance: int, required: int) -> None:
        super().__init__(
            message=f"Account {account} holds {balance}, needs {required}",
            code=ErrorCodes.INSUFFICIENT_FUNDS,
            details={"account": account, "balance": str(balance), "required": str(required)},
        )


# -----------------------------------------------------------------------------
# Tooling
# -----------------------------------------------------------------------------

class AllocationException(ToolingException):
    """Raised when the allocation table cannot be turned into a tree."""

    def __init__(
        self,
        message: str,
        row: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if row is not None:
            full_details["row"] = row
        super().__init__(
            message=message,
            code=ErrorCodes.ALLOCATION_INVALID,
            details=full_details,
        )


class BundleException(ToolingException):
    """Raised when a proof bundle is missing, malformed or lacks an entry."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.BUNDLE_INVALID,
            details=details,
        )


class SourceUnavailableException(ToolingException):
    def __init__(self, source: str, reason: str) -> None:
        super().__init__(
            message=f"Allocation source {source} unavailable: {reason}",
            code=ErrorCodes.SOURCE_UNAVAILABLE,
            details={"source": source},
        )
