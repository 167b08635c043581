from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    ACCOUNT_LOCKED = "Account is locked"
    DUPLICATE_TRANSACTION = "Transaction is already processed"
    INSUFFICIENT_FUNDS = "Not enough money to apply transaction"
    UNKNOWN_TRANSACTION = "Missing transaction for the client"
    DISPUTE_ALREADY_OPEN = "Dispute is already open"
    NOT_DISPUTABLE = "Incorrect type of transaction for dispute"
    NO_OPEN_DISPUTE = "Missing dispute for transaction"
    INVALID_DISPUTE_STATE = "Dispute is not in a state that allows this operation"
    UNKNOWN_TRANSACTION_TYPE = "Unknown transaction type"


class TransactionError(Exception):
    """
    Business-rule failure for a single input row.
    The account is left unchanged whenever this is raised.
    """

    def __init__(self, kind: ErrorKind, tid: int, operation: str):
        self.kind = kind
        self.tid = tid
        self.operation = operation
        super().__init__(str(self))

    def __str__(self) -> str:
        return f"Error processing transaction tid={self.tid}. {self.operation} operation failed. {self.kind.value}"

    def __repr__(self) -> str:
        return f"TransactionError({self.kind.name}, tid={self.tid}, operation={self.operation!r})"


class InputError(Exception):
    """Malformed input stream. Aborts the run."""

    def __init__(self, message: str, line: Optional[int] = None):
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
