import sys
import os
from decimal import Decimal

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from models import (
    ChargedBacked,
    Deposit,
    Initiated,
    Resolved,
    TransactionKind,
    TransactionRecord,
    Withdraw,
    to_charged_back,
    to_disputable,
    to_resolved,
)


class TestTransactionRecord:
    def test_create_deposit(self):
        record = TransactionRecord(
            transaction_type="deposit",
            client_id=1,
            transaction_id=1,
            amount=Decimal("100.0"),
        )
        assert record.transaction_type == "deposit"
        assert record.client_id == 1
        assert record.transaction_id == 1
        assert record.amount == Decimal("100.0")

    def test_create_dispute_no_amount(self):
        record = TransactionRecord(
            transaction_type="dispute",
            client_id=1,
            transaction_id=1,
        )
        assert record.amount is None


class TestTransactionKind:
    def test_enum_values(self):
        assert [kind.value for kind in TransactionKind] == ["deposit", "withdraw", "dispute", "resolve", "chargeback"]


class TestAmountTransactions:
    def test_deposit_effect(self):
        deposit = Deposit(1, Decimal("2.5"))
        assert deposit.tid == 1
        assert deposit.amount_delta() == Decimal("2.5")
        assert deposit.hold_delta() == Decimal("0")

    def test_withdraw_effect(self):
        withdraw = Withdraw(2, Decimal("2.5"))
        assert withdraw.tid == 2
        assert withdraw.amount_delta() == Decimal("-2.5")
        assert withdraw.hold_delta() == Decimal("0")

    def test_deposit_converts_to_initiated_dispute(self):
        assert Deposit(1, Decimal("7")).to_dispute() == Initiated(Decimal("7"))
        assert to_disputable(Deposit(1, Decimal("7"))) == Initiated(Decimal("7"))

    def test_withdraw_is_not_disputable(self):
        assert to_disputable(Withdraw(1, Decimal("7"))) is None
        assert not hasattr(Withdraw(1, Decimal("7")), "to_dispute")


class TestDisputableTransactions:
    def test_initiated_moves_available_to_held(self):
        dispute = Initiated(Decimal("3"))
        assert dispute.amount_delta() == Decimal("-3")
        assert dispute.hold_delta() == Decimal("3")

    def test_resolved_moves_held_back_to_available(self):
        resolved = Resolved(Decimal("3"))
        assert resolved.amount_delta() == Decimal("3")
        assert resolved.hold_delta() == Decimal("-3")

    def test_charged_back_only_removes_held(self):
        charged_back = ChargedBacked(Decimal("3"))
        assert charged_back.amount_delta() == Decimal("0")
        assert charged_back.hold_delta() == Decimal("-3")

    def test_initiated_transitions_keep_amount(self):
        dispute = Initiated(Decimal("1.2345"))
        assert to_resolved(dispute) == Resolved(Decimal("1.2345"))
        assert to_charged_back(dispute) == ChargedBacked(Decimal("1.2345"))

    def test_terminal_states_have_no_transition(self):
        for terminal in (Resolved(Decimal("1")), ChargedBacked(Decimal("1"))):
            assert to_resolved(terminal) is None
            assert to_charged_back(terminal) is None
