import csv
import logging
import sys
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Dict, Iterator, Optional, TextIO

from account import Account
from errors import ErrorKind, InputError, TransactionError
from models import Deposit, TransactionKind, TransactionRecord, Withdraw

logger = logging.getLogger(__name__)

MAX_CLIENT_ID = 2**16 - 1
MAX_TRANSACTION_ID = 2**32 - 1
FIELDNAMES = ["client", "available", "held", "total", "locked"]


@dataclass
class ProcessingStats:
    processed: int = 0
    failed: int = 0

    def record_success(self) -> None:
        self.processed += 1

    def record_failure(self) -> None:
        self.failed += 1


class PaymentsEngine:
    """
    Applies transaction records in input order against per-client accounts.
    Business-rule failures are logged and skipped; malformed input aborts the run.
    """

    def __init__(self):
        self._accounts: Dict[int, Account] = {}
        self._stats = ProcessingStats()

    @property
    def accounts(self) -> Dict[int, Account]:
        return self._accounts

    @property
    def stats(self) -> ProcessingStats:
        return self._stats

    def process_file(self, filepath: str) -> Dict[int, Account]:
        """Process CSV file and return final account states."""
        logger.info(f"Processing {filepath}")

        with open(filepath, "r", newline="", encoding="utf-8") as f:
            for record in self.read_records(f):
                self.process_record(record)

        logger.info(f"Processed: {self._stats.processed}, Failed: {self._stats.failed}")
        return self._accounts

    def process_record(self, record: TransactionRecord) -> bool:
        """Apply one record. Returns False if it was rejected."""
        account = self.get_or_create_account(record.client_id)
        try:
            self._dispatch(account, record)
        except TransactionError as e:
            logger.warning(f"{e} ({record!r})")
            self._stats.record_failure()
            return False

        self._stats.record_success()
        return True

    def get_or_create_account(self, client_id: int) -> Account:
        """Get existing account or create new one."""
        if client_id not in self._accounts:
            self._accounts[client_id] = Account(client_id=client_id)
        return self._accounts[client_id]

    def write_snapshot(self, out: Optional[TextIO] = None) -> None:
        """Write every account as CSV, ordered by client id."""
        writer = csv.writer(out or sys.stdout, lineterminator="\n")
        writer.writerow(FIELDNAMES)
        for client_id in sorted(self._accounts):
            writer.writerow(self._accounts[client_id].serialize())

    def read_records(self, f: TextIO) -> Iterator[TransactionRecord]:
        """Decode CSV rows into records. Raises InputError on the first malformed row."""
        reader = csv.DictReader(f, skipinitialspace=True)
        try:
            if reader.fieldnames is None:
                return
            reader.fieldnames = [name.strip().lower() for name in reader.fieldnames]

            for row in reader:
                yield self._parse_csv_row(row, reader.line_num)
        except UnicodeDecodeError as e:
            raise InputError(f"input is not valid UTF-8: {e}")
        except csv.Error as e:
            raise InputError(f"unreadable CSV row: {e}", reader.line_num)

    def _dispatch(self, account: Account, record: TransactionRecord) -> None:
        try:
            kind = TransactionKind(record.transaction_type)
        except ValueError:
            raise TransactionError(ErrorKind.UNKNOWN_TRANSACTION_TYPE, record.transaction_id, record.transaction_type)

        match kind:
            case TransactionKind.DEPOSIT:
                account.process(Deposit(record.transaction_id, record.amount))
            case TransactionKind.WITHDRAW:
                account.process(Withdraw(record.transaction_id, record.amount))
            case TransactionKind.DISPUTE:
                account.open_dispute(record.transaction_id)
            case TransactionKind.RESOLVE:
                account.resolve(record.transaction_id)
            case TransactionKind.CHARGEBACK:
                account.chargeback(record.transaction_id)

    def _parse_csv_row(self, row: Dict[str, Optional[str]], line: int) -> TransactionRecord:
        """Parse CSV row into TransactionRecord."""
        if None in row:
            raise InputError(f"too many fields in row {row[None]!r}", line)

        normalized = {k: (v or "").strip() for k, v in row.items()}
        for column in ("type", "client", "tx"):
            if not normalized.get(column):
                raise InputError(f"missing '{column}' field", line)

        transaction_type = normalized["type"].lower()
        client_id = self._parse_id(normalized["client"], "client", MAX_CLIENT_ID, line)
        transaction_id = self._parse_id(normalized["tx"], "tx", MAX_TRANSACTION_ID, line)

        amount = None
        amount_str = normalized.get("amount", "")
        if amount_str:
            try:
                amount = Decimal(amount_str)
            except InvalidOperation:
                raise InputError(f"invalid amount {amount_str!r}", line)
            if not amount.is_finite():
                raise InputError(f"invalid amount {amount_str!r}", line)

        if amount is None and transaction_type in (TransactionKind.DEPOSIT.value, TransactionKind.WITHDRAW.value):
            raise InputError(f"{transaction_type} requires an amount", line)

        return TransactionRecord(
            transaction_type=transaction_type,
            client_id=client_id,
            transaction_id=transaction_id,
            amount=amount,
        )

    @staticmethod
    def _parse_id(value: str, column: str, maximum: int, line: int) -> int:
        try:
            parsed = int(value)
        except ValueError:
            raise InputError(f"invalid {column} {value!r}", line)
        if not 0 <= parsed <= maximum:
            raise InputError(f"{column} {parsed} out of range 0..{maximum}", line)
        return parsed
