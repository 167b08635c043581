import logging
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_EVEN
from typing import Dict, List, Union

from errors import ErrorKind, TransactionError
from models import (
    ZERO,
    AmountTransaction,
    DisputableTransaction,
    to_charged_back,
    to_disputable,
    to_resolved,
)

logger = logging.getLogger(__name__)

PRECISION = 4
_QUANTUM = Decimal(1).scaleb(-PRECISION)


def round_amount(value: Decimal) -> Decimal:
    """Round half-even to exactly PRECISION decimal places."""
    return value.quantize(_QUANTUM, rounding=ROUND_HALF_EVEN)


def format_decimal(value: Decimal) -> str:
    """Format decimal with exactly 4 decimal places."""
    rounded = round_amount(value)
    if rounded.is_zero():
        rounded = abs(rounded)
    return f"{rounded:f}"


@dataclass
class Account:
    """
    One client's balances and the history needed to service disputes.

    Every operation either applies fully or raises TransactionError with
    the account left exactly as it was.
    """

    client_id: int
    available: Decimal = ZERO
    held: Decimal = ZERO
    locked: bool = False
    transaction_log: Dict[int, AmountTransaction] = field(default_factory=dict)
    open_disputes: Dict[int, DisputableTransaction] = field(default_factory=dict)

    @property
    def total(self) -> Decimal:
        return self.available + self.held

    def process(self, transaction: AmountTransaction) -> None:
        """Apply a deposit or withdrawal and log it for later disputes."""
        operation = "process_transaction"
        tid = transaction.id()
        self._ensure_unlocked(tid, operation)

        if tid in self.transaction_log:
            raise TransactionError(ErrorKind.DUPLICATE_TRANSACTION, tid, operation)

        self._apply(transaction, tid, operation)
        self.transaction_log[tid] = transaction

    def open_dispute(self, tid: int) -> None:
        operation = "open_dispute"
        self._ensure_unlocked(tid, operation)

        transaction = self.transaction_log.get(tid)
        if transaction is None:
            raise TransactionError(ErrorKind.UNKNOWN_TRANSACTION, tid, operation)

        if tid in self.open_disputes:
            raise TransactionError(ErrorKind.DISPUTE_ALREADY_OPEN, tid, operation)

        dispute = to_disputable(transaction)
        if dispute is None:
            raise TransactionError(ErrorKind.NOT_DISPUTABLE, tid, operation)

        # Available funds must cover the hold; a failed apply leaves no open dispute behind.
        self._apply(dispute, tid, operation)
        self.open_disputes[tid] = dispute

    def resolve(self, tid: int) -> None:
        operation = "resolve"
        self._ensure_unlocked(tid, operation)

        dispute = self.open_disputes.get(tid)
        if dispute is None:
            raise TransactionError(ErrorKind.NO_OPEN_DISPUTE, tid, operation)

        resolved = to_resolved(dispute)
        if resolved is None:
            raise TransactionError(ErrorKind.INVALID_DISPUTE_STATE, tid, operation)

        self._apply(resolved, tid, operation)
        del self.open_disputes[tid]

    def chargeback(self, tid: int) -> None:
        operation = "chargeback"
        self._ensure_unlocked(tid, operation)

        dispute = self.open_disputes.get(tid)
        if dispute is None:
            raise TransactionError(ErrorKind.NO_OPEN_DISPUTE, tid, operation)

        charged_back = to_charged_back(dispute)
        if charged_back is None:
            raise TransactionError(ErrorKind.INVALID_DISPUTE_STATE, tid, operation)

        # Available is untouched by a chargeback, so this cannot fail.
        self._apply(charged_back, tid, operation)
        del self.open_disputes[tid]
        self.locked = True
        logger.info(f"Client {self.client_id}: locked after chargeback of tx {tid}")

    def serialize(self) -> List[str]:
        """Snapshot row: client, available, held, total, locked."""
        available = round_amount(self.available)
        held = round_amount(self.held)
        return [
            str(self.client_id),
            format_decimal(available),
            format_decimal(held),
            format_decimal(available + held),
            str(self.locked).lower(),
        ]

    def _ensure_unlocked(self, tid: int, operation: str) -> None:
        if self.locked:
            raise TransactionError(ErrorKind.ACCOUNT_LOCKED, tid, operation)

    def _apply(self, transaction: Union[AmountTransaction, DisputableTransaction], tid: int, operation: str) -> None:
        available = self.available + transaction.amount_delta()
        if available < ZERO:
            raise TransactionError(ErrorKind.INSUFFICIENT_FUNDS, tid, operation)

        self.available = available
        self.held += transaction.hold_delta()
