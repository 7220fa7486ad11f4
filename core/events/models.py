"""
Event Models

Schemas for the events a distribution emits. Events are the audit trail
external tooling reads to follow the lifecycle: one event per successful
state-changing operation, never for a failed one.
"""

from __future__ import annotations

from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field


EventKind = Literal[
    "DistributionOpened",
    "Claimed",
    "RemainderWithdrawn",
    "Paused",
    "Unpaused",
    "OwnershipTransferred",
]


class DistributorEvent(BaseModel):
    """Base event; subclasses pin `kind`."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: EventKind
    sequence: int = Field(
        default=0,
        ge=0,
        description="Position in the emitting distributor's event log",
    )


class DistributionOpened(DistributorEvent):
    kind: Literal["DistributionOpened"] = "DistributionOpened"

    root: str = Field(..., description="Committed Merkle root (0x-prefixed)")
    total_value: int = Field(..., gt=0, description="Value deposited into custody")
    start_time: int = Field(..., ge=0, description="UNIX time the claim window opened")


class Claimed(DistributorEvent):
    kind: Literal["Claimed"] = "Claimed"

    recipient: str
    amount: int = Field(..., ge=0)


class RemainderWithdrawn(DistributorEvent):
    kind: Literal["RemainderWithdrawn"] = "RemainderWithdrawn"

    authority: str
    amount: int = Field(..., ge=0)


class Paused(DistributorEvent):
    kind: Literal["Paused"] = "Paused"

    account: str


class Unpaused(DistributorEvent):
    kind: Literal["Unpaused"] = "Unpaused"

    account: str


class OwnershipTransferred(DistributorEvent):
    kind: Literal["OwnershipTransferred"] = "OwnershipTransferred"

    previous_owner: str
    new_owner: str


AnyEvent = Union[
    DistributionOpened,
    Claimed,
    RemainderWithdrawn,
    Paused,
    Unpaused,
    OwnershipTransferred,
]
