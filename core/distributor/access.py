"""
Access Guard

Two independent roles gate disjoint operations:
- authority: fixed at creation; opens the distribution and recovers the remainder
- owner: transferable; pauses and unpauses claiming

Each guarded operation checks exactly one role.
"""

from __future__ import annotations

from enum import Enum

from core.merkle.leaf_codec import normalize_recipient
from core.schemas.errors import UnauthorizedException


class Role(str, Enum):
    AUTHORITY = "authority"
    OWNER = "owner"


def _normalize_caller(caller: str) -> str | None:
    try:
        return normalize_recipient(caller)
    except (TypeError, ValueError):
        return None


class AccessGuard:
    """
    Holds the authority and owner identities.

    Usage:
        access = AccessGuard(authority=dao, owner=ops)
        caller = access.require(Role.AUTHORITY, caller)
    """

    def __init__(self, authority: str, owner: str) -> None:
        self._authority = normalize_recipient(authority)
        self._owner = normalize_recipient(owner)

    @property
    def authority(self) -> str:
        return self._authority

    @property
    def owner(self) -> str:
        return self._owner

    def holder(self, role: Role) -> str:
        return self._authority if role is Role.AUTHORITY else self._owner

    def has_role(self, role: Role, account: str) -> bool:
        return _normalize_caller(account) == self.holder(role)

    def require(self, role: Role, caller: str) -> str:
        """
        Return the normalized caller if it holds role.

        Raises:
            UnauthorizedException: Naming the role that was required
        """
        normalized = _normalize_caller(caller)
        if normalized is None or normalized != self.holder(role):
            raise UnauthorizedException(role.value, str(caller))
        return normalized

    def require_authority(self, caller: str) -> str:
        return self.require(Role.AUTHORITY, caller)

    def require_owner(self, caller: str) -> str:
        return self.require(Role.OWNER, caller)

    def transfer_ownership(self, caller: str, new_owner: str) -> str:
        """
        Hand the owner role to new_owner. Returns the previous owner.

        Raises:
            UnauthorizedException: If caller is not the owner
            ValueError: If new_owner is not an address
        """
        previous = self.require_owner(caller)
        self._owner = normalize_recipient(new_owner)
        return previous
