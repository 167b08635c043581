from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional, Union

ZERO = Decimal("0")


class TransactionKind(Enum):
    DEPOSIT = "deposit"
    WITHDRAW = "withdraw"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"


@dataclass
class TransactionRecord:
    """One decoded input row. The type string is kept raw so unknown kinds can be reported."""

    transaction_type: str
    client_id: int
    transaction_id: int
    amount: Optional[Decimal] = None

    def __repr__(self) -> str:
        return f"TransactionRecord({self.transaction_type}, client={self.client_id}, tx={self.transaction_id}, amount={self.amount})"


# Funds-moving transactions


@dataclass(frozen=True)
class Deposit:
    tid: int
    amount: Decimal

    def id(self) -> int:
        return self.tid

    def amount_delta(self) -> Decimal:
        return self.amount

    def hold_delta(self) -> Decimal:
        return ZERO

    def to_dispute(self) -> "Initiated":
        return Initiated(self.amount)


@dataclass(frozen=True)
class Withdraw:
    tid: int
    amount: Decimal

    def id(self) -> int:
        return self.tid

    def amount_delta(self) -> Decimal:
        return -self.amount

    def hold_delta(self) -> Decimal:
        return ZERO


AmountTransaction = Union[Deposit, Withdraw]


# Dispute lifecycle states


@dataclass(frozen=True)
class Initiated:
    """Open dispute: the deposit's amount moves from available to held."""

    amount: Decimal

    def amount_delta(self) -> Decimal:
        return -self.amount

    def hold_delta(self) -> Decimal:
        return self.amount


@dataclass(frozen=True)
class Resolved:
    amount: Decimal

    def amount_delta(self) -> Decimal:
        return self.amount

    def hold_delta(self) -> Decimal:
        return -self.amount


@dataclass(frozen=True)
class ChargedBacked:
    amount: Decimal

    def amount_delta(self) -> Decimal:
        return ZERO

    def hold_delta(self) -> Decimal:
        return -self.amount


DisputableTransaction = Union[Initiated, Resolved, ChargedBacked]


def to_disputable(transaction: AmountTransaction) -> Optional[Initiated]:
    """Only deposits can be disputed. Withdrawals have already left the account."""
    match transaction:
        case Deposit():
            return transaction.to_dispute()
        case _:
            return None


def to_resolved(dispute: DisputableTransaction) -> Optional[Resolved]:
    match dispute:
        case Initiated(amount=amount):
            return Resolved(amount)
        case _:
            return None


def to_charged_back(dispute: DisputableTransaction) -> Optional[ChargedBacked]:
    match dispute:
        case Initiated(amount=amount):
            return ChargedBacked(amount)
        case _:
            return None
