"""
Ledger

In-process stand-in for the shared ledger the distributor runs on:
integer balances per address plus optional receive hooks.

A receive hook plays the part of externally controlled code at the
receiving address. It runs after value arrives and may raise to reject
the transfer, or call back into the distributor (re-entrancy).

All operations are serialized by the caller; nothing here is thread-safe.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from core.merkle.leaf_codec import normalize_recipient
from core.schemas.errors import InsufficientFundsException


logger = logging.getLogger(__name__)

# hook(sender, value)
ReceiveHook = Callable[[str, int], None]


class Ledger:
    """
    Account balances in base units.

    Usage:
        ledger = Ledger()
        ledger.credit(authority, 1_000)
        ledger.send(authority, recipient, 250)
    """

    def __init__(self) -> None:
        self._balances: dict[str, int] = {}
        self._receivers: dict[str, ReceiveHook] = {}
        # (account, previous balance or None) for every write made while a send is running
        self._journal: Optional[list[tuple[str, Optional[int]]]] = None

    def balance_of(self, account: str) -> int:
        return self._balances.get(normalize_recipient(account), 0)

    def _set_balance(self, key: str, value: int) -> None:
        if self._journal is not None:
            self._journal.append((key, self._balances.get(key)))
        self._balances[key] = value

    def _rollback(self, mark: int) -> None:
        journal = self._journal
        while len(journal) > mark:
            key, previous = journal.pop()
            if previous is None:
                self._balances.pop(key, None)
            else:
                self._balances[key] = previous

    def credit(self, account: str, value: int) -> None:
        """Create value out of thin air (funding for simulations and tests)."""
        if value < 0:
            raise ValueError(f"Credit must be non-negative, got {value}")
        key = normalize_recipient(account)
        self._set_balance(key, self._balances.get(key, 0) + value)

    def move(self, sender: str, recipient: str, value: int) -> None:
        """
        Move value between accounts without running any hook.

        Raises:
            ValueError: If value is negative
            InsufficientFundsException: If sender cannot cover value
        """
        if value < 0:
            raise ValueError(f"Transfer value must be non-negative, got {value}")
        src = normalize_recipient(sender)
        dst = normalize_recipient(recipient)
        balance = self._balances.get(src, 0)
        if balance < value:
            raise InsufficientFundsException(src, balance, value)
        self._set_balance(src, balance - value)
        self._set_balance(dst, self._balances.get(dst, 0) + value)

    def send(self, sender: str, recipient: str, value: int) -> None:
        """
        Move value, then run the recipient's receive hook.

        If the hook raises, every balance change made since the call began
        (including any made by the hook itself) is reverted and the
        exception propagates. Only the touched entries are journaled.
        """
        outermost = self._journal is None
        if outermost:
            self._journal = []
        mark = len(self._journal)
        try:
            self.move(sender, recipient, value)
            hook = self._receivers.get(normalize_recipient(recipient))
            if hook is not None:
                hook(normalize_recipient(sender), value)
        except Exception:
            self._rollback(mark)
            raise
        finally:
            if outermost:
                self._journal = None

    def register_receiver(self, account: str, hook: ReceiveHook) -> None:
        self._receivers[normalize_recipient(account)] = hook

    def unregister_receiver(self, account: str) -> None:
        self._receivers.pop(normalize_recipient(account), None)

    def total_supply(self) -> int:
        return sum(self._balances.values())
