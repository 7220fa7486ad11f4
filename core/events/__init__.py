"""
Core Events Module

Event models and the recorder a distributor emits into.
"""

from .models import (
    AnyEvent,
    Claimed,
    DistributionOpened,
    DistributorEvent,
    EventKind,
    OwnershipTransferred,
    Paused,
    RemainderWithdrawn,
    Unpaused,
)
from .recorder import EventRecorder

__all__ = [
    "AnyEvent",
    "Claimed",
    "DistributionOpened",
    "DistributorEvent",
    "EventKind",
    "OwnershipTransferred",
    "Paused",
    "RemainderWithdrawn",
    "Unpaused",
    "EventRecorder",
]
