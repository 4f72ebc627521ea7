"""
Transaction Stream Processing Module

Reads the transaction feed in order, applies every record to the ledger and
renders the final balances. A record that fails to decode or breaks an
account rule is logged and dropped; it never stops the run. Only failing to
read the input or write the report is fatal.
"""

import csv
from collections import Counter
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, TextIO, Union

from .config import PaymentsConfig, get_config
from .errors import ParseError, PaymentsError
from .ledger import AccountSnapshot, Ledger
from .logging_config import get_logger, log_action
from .schemas import decode_record, record_label
from .transactions import Transaction

OUTPUT_FIELDS = ["client", "available", "held", "total", "locked"]


class ProcessingStats:
    """Counters for one run"""
    
    def __init__(self):
        self.rows = 0
        self.applied = 0
        self.rejected = 0
        self.rejected_by_error: Counter = Counter()
    
    def record_success(self) -> None:
        self.applied += 1
    
    def record_failure(self, error: Exception) -> None:
        self.rejected += 1
        self.rejected_by_error[type(error).__name__] += 1
    
    def as_dict(self) -> Dict[str, object]:
        return {
            "rows": self.rows,
            "applied": self.applied,
            "rejected": self.rejected,
            "rejected_by_error": dict(self.rejected_by_error),
        }


class TransactionProcessor:
    """
    Applies feed records to a Ledger owned for the lifetime of the run
    """
    
    def __init__(self, ledger: Optional[Ledger] = None,
                 config: Optional[PaymentsConfig] = None):
        self.config = config or get_config()
        if ledger is None:
            ledger = Ledger(replace_duplicate_deposits=self.config.replace_duplicate_deposits)
        self.ledger = ledger
        self.stats = ProcessingStats()
        self.logger = get_logger("payments.processor")
    
    def apply(self, record: Mapping[str, Optional[str]]) -> bool:
        """
        Decode and apply one raw feed row

        Args:
            record: Column name to field text, e.g. from csv.DictReader

        Returns:
            True if the record changed the ledger, False if it was dropped
        """
        self.stats.rows += 1
        try:
            transaction = decode_record(record)
        except PaymentsError as e:
            self._reject(record_label(record), e, client_id=_raw_int(record.get("client")))
            return False
        return self._apply(transaction)
    
    def apply_transaction(self, transaction: Transaction) -> bool:
        """Apply an already decoded transaction"""
        self.stats.rows += 1
        return self._apply(transaction)
    
    def process_rows(self, rows: Iterable[Mapping[str, Optional[str]]]) -> None:
        for row in rows:
            self.apply(row)
    
    def process_stream(self, stream: TextIO) -> None:
        """
        Apply every row of a CSV stream with a header line

        Header names and fields are trimmed. Rows of the wrong shape are
        dropped like any other malformed record.
        """
        reader = csv.reader(stream, delimiter=self.config.csv_delimiter, skipinitialspace=True)
        header = next(reader, None)
        if header is None:
            return
        fieldnames = [name.strip().lower() for name in header]
        
        while True:
            try:
                fields = next(reader)
            except StopIteration:
                break
            except csv.Error as e:
                self.stats.rows += 1
                self._reject(f"line {reader.line_num}", ParseError(str(e)))
                continue
            
            if not any(field.strip() for field in fields):
                continue
            
            try:
                row = _zip_row(fieldnames, fields)
            except ParseError as e:
                self.stats.rows += 1
                self._reject(f"line {reader.line_num}", e)
                continue
            self.apply(row)
    
    def process_file(self, path: Union[str, Path]) -> List[AccountSnapshot]:
        """
        Process a CSV feed file and return the final snapshot

        Raises:
            OSError: If the file cannot be opened or read
            UnicodeDecodeError: If the file is not valid UTF-8
        """
        with open(path, newline="", encoding="utf-8-sig") as stream:
            self.process_stream(stream)
        return self.finalize()
    
    def finalize(self) -> List[AccountSnapshot]:
        """Snapshot of every account once the input is exhausted"""
        log_action(
            self.logger, "info", "Transaction feed processed",
            action="finalize", extra=self.stats.as_dict()
        )
        return self.ledger.snapshot()
    
    def _apply(self, transaction: Transaction) -> bool:
        try:
            transaction.apply(self.ledger)
        except PaymentsError as e:
            self._reject(transaction.label, e, transaction=transaction)
            return False
        self.stats.record_success()
        return True
    
    def _reject(self, label: str, error: PaymentsError,
                transaction: Optional[Transaction] = None,
                client_id: Optional[int] = None) -> None:
        self.stats.record_failure(error)
        if transaction is not None:
            log_action(
                self.logger, "warning", f"Cannot process {label}; {error}",
                action="reject", tx_type=transaction.transaction_type.value,
                client_id=transaction.client_id, tx_id=transaction.tx_id,
                error=type(error).__name__
            )
        else:
            log_action(
                self.logger, "warning", f"Cannot process {label}; {error}",
                action="reject", client_id=client_id, error=type(error).__name__
            )


def write_snapshot(snapshot: Iterable[AccountSnapshot], stream: TextIO) -> None:
    """Write the balance report as CSV"""
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(OUTPUT_FIELDS)
    for account in snapshot:
        writer.writerow(account.to_row())


def _zip_row(fieldnames: List[str], fields: List[str]) -> Dict[str, Optional[str]]:
    # Trailing empty columns are tolerated, anything else beyond the header is not
    extra = fields[len(fieldnames):]
    if any(field.strip() for field in extra):
        raise ParseError(f"Expected {len(fieldnames)} fields, found {len(fields)}")
    row: Dict[str, Optional[str]] = dict.fromkeys(fieldnames)
    row.update(zip(fieldnames, fields))
    return row


def _raw_int(value: Optional[str]) -> Optional[int]:
    if value is None or not value.strip().isdigit():
        return None
    return int(value.strip())
