"""
Ledger and Transfer Gate Unit Tests
Tests for core/distributor/ledger.py and core/distributor/transfer.py
"""
import pytest

from core.distributor.ledger import Ledger
from core.distributor.transfer import TransferGate
from core.schemas.errors import InsufficientFundsException

from fixtures.common import make_address


A = make_address(1)
B = make_address(2)
C = make_address(3)


class TestLedger:

    def test_credit_and_balance(self):
        ledger = Ledger()
        ledger.credit(A, 100)
        assert ledger.balance_of(A) == 100
        assert ledger.balance_of(A.lower()) == 100
        assert ledger.balance_of(B) == 0

    def test_negative_credit_rejected(self):
        with pytest.raises(ValueError):
            Ledger().credit(A, -1)

    def test_move(self):
        ledger = Ledger()
        ledger.credit(A, 100)
        ledger.move(A, B, 40)
        assert ledger.balance_of(A) == 60
        assert ledger.balance_of(B) == 40
        assert ledger.total_supply() == 100

    def test_move_insufficient(self):
        ledger = Ledger()
        ledger.credit(A, 10)
        with pytest.raises(InsufficientFundsException):
            ledger.move(A, B, 11)
        assert ledger.balance_of(A) == 10

    def test_negative_move_rejected(self):
        ledger = Ledger()
        with pytest.raises(ValueError):
            ledger.move(A, B, -1)

    def test_send_runs_hook(self):
        ledger = Ledger()
        ledger.credit(A, 100)
        seen = []
        ledger.register_receiver(B, lambda sender, value: seen.append((sender, value)))
        ledger.send(A, B, 30)
        assert seen == [(A, 30)]
        assert ledger.balance_of(B) == 30

    def test_send_hook_sees_new_balance(self):
        ledger = Ledger()
        ledger.credit(A, 100)
        balances = []
        ledger.register_receiver(B, lambda sender, value: balances.append(ledger.balance_of(B)))
        ledger.send(A, B, 30)
        assert balances == [30]

    def test_rejecting_hook_reverts(self):
        ledger = Ledger()
        ledger.credit(A, 100)

        def reject(sender, value):
            raise RuntimeError("no thanks")

        ledger.register_receiver(B, reject)
        with pytest.raises(RuntimeError):
            ledger.send(A, B, 30)
        assert ledger.balance_of(A) == 100
        assert ledger.balance_of(B) == 0

    def test_rejecting_hook_reverts_nested_moves(self):
        ledger = Ledger()
        ledger.credit(A, 100)

        def forward_then_fail(sender, value):
            ledger.move(B, C, value)
            raise RuntimeError("late failure")

        ledger.register_receiver(B, forward_then_fail)
        with pytest.raises(RuntimeError):
            ledger.send(A, B, 30)
        assert ledger.balance_of(C) == 0
        assert ledger.balance_of(A) == 100

    def test_inner_failure_caught_by_outer_hook(self):
        ledger = Ledger()
        ledger.credit(A, 100)

        def reject(sender, value):
            raise RuntimeError("no thanks")

        def forward(sender, value):
            with pytest.raises(RuntimeError):
                ledger.send(B, C, value)
            ledger.move(B, make_address(4), 5)

        ledger.register_receiver(B, forward)
        ledger.register_receiver(C, reject)
        ledger.send(A, B, 30)

        assert ledger.balance_of(A) == 70
        assert ledger.balance_of(B) == 25
        assert ledger.balance_of(C) == 0
        assert ledger.balance_of(make_address(4)) == 5

    def test_send_journals_only_touched_accounts(self):
        ledger = Ledger()
        for n in range(10, 60):
            ledger.credit(make_address(n), n)
        ledger.credit(A, 100)

        journal_sizes = []
        ledger.register_receiver(B, lambda sender, value: journal_sizes.append(len(ledger._journal)))
        ledger.send(A, B, 30)

        assert journal_sizes == [2]
        assert ledger._journal is None

    def test_rollback_removes_new_entries(self):
        ledger = Ledger()
        ledger.credit(A, 100)

        def reject(sender, value):
            ledger.credit(C, 1)
            raise RuntimeError("no thanks")

        ledger.register_receiver(B, reject)
        with pytest.raises(RuntimeError):
            ledger.send(A, B, 30)
        assert ledger.total_supply() == 100
        assert ledger._journal is None

    def test_unregister(self):
        ledger = Ledger()
        ledger.credit(A, 100)

        def reject(sender, value):
            raise RuntimeError("no thanks")

        ledger.register_receiver(B, reject)
        ledger.unregister_receiver(B)
        ledger.send(A, B, 10)
        assert ledger.balance_of(B) == 10


class TestTransferGate:

    def test_success(self):
        ledger = Ledger()
        ledger.credit(A, 100)
        result = TransferGate(ledger, custodian=A).send(B, 25)
        assert result.ok
        assert bool(result)
        assert ledger.balance_of(B) == 25

    def test_insufficient_custody_reported(self):
        ledger = Ledger()
        ledger.credit(A, 10)
        result = TransferGate(ledger, custodian=A).send(B, 25)
        assert not result.ok
        assert "InsufficientFundsException" in result.reason
        assert ledger.balance_of(A) == 10

    def test_rejecting_recipient_reported(self):
        ledger = Ledger()
        ledger.credit(A, 100)

        def reject(sender, value):
            raise RuntimeError("rejected")

        ledger.register_receiver(B, reject)
        result = TransferGate(ledger, custodian=A).send(B, 25)
        assert not result.ok
        assert result.reason == "RuntimeError: rejected"
        assert ledger.balance_of(A) == 100
        assert ledger.balance_of(B) == 0
