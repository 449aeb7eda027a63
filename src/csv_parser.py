"""
Lazy CSV reader that turns rows into Transaction records.

Rows are parsed one at a time so the input never has to fit in memory.
Whitespace around headers and values is ignored, and the trailing amount
column may be left out entirely for dispute, resolve and chargeback rows.
"""

import csv
import logging
from decimal import Decimal, InvalidOperation
from typing import Dict, Iterator, Optional, TextIO

from errors import CsvParseError, FileError
from models import Transaction, TransactionType

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("type", "client", "tx")
AMOUNT_COLUMN = "amount"

MAX_CLIENT_ID = 2**16 - 1
MAX_TRANSACTION_ID = 2**32 - 1

AMOUNT_TRANSACTION_TYPES = frozenset({TransactionType.DEPOSIT, TransactionType.WITHDRAWAL})


def read_transactions(filepath: str, skip_malformed: bool = False) -> Iterator[Transaction]:
    """Open a CSV file and lazily yield its transactions."""
    try:
        f = open(filepath, "r", newline="", encoding="utf-8-sig")
    except OSError as e:
        raise FileError(f"cannot open {filepath}: {e}") from e

    with f:
        try:
            yield from parse_transactions(f, skip_malformed=skip_malformed)
        except (OSError, UnicodeDecodeError) as e:
            raise FileError(f"cannot read {filepath}: {e}") from e


def parse_transactions(stream: TextIO, skip_malformed: bool = False) -> Iterator[Transaction]:
    """
    Yield a Transaction for each data row of a CSV stream.

    Raises CsvParseError on the first malformed row, unless skip_malformed
    is set, in which case the row is logged and skipped. A header without
    the required columns is always fatal.
    """
    reader = csv.DictReader(stream)
    try:
        if reader.fieldnames is None:
            return
        reader.fieldnames = [name.strip().lower() for name in reader.fieldnames]
        missing = [column for column in REQUIRED_COLUMNS if column not in reader.fieldnames]
        if missing:
            raise CsvParseError(f"header is missing columns: {', '.join(missing)}", reader.line_num)

        for row in reader:
            try:
                transaction = parse_row(row)
            except CsvParseError as e:
                e.line_number = reader.line_num
                if not skip_malformed:
                    raise
                logger.warning(f"Skipping malformed row: {e}")
                continue
            yield transaction
    except csv.Error as e:
        raise CsvParseError(str(e), reader.line_num) from e


def parse_row(row: Dict[Optional[str], Optional[str]]) -> Transaction:
    """Parse one DictReader row into a Transaction."""
    # Extra trailing fields land under the None key; they carry no meaning.
    normalized = {k: (v or "").strip() for k, v in row.items() if k is not None}

    type_token = normalized.get("type", "").lower()
    try:
        transaction_type = TransactionType(type_token)
    except ValueError:
        raise CsvParseError(f"unknown transaction type {type_token!r}") from None

    client_id = _parse_id(normalized.get("client", ""), "client", MAX_CLIENT_ID)
    transaction_id = _parse_id(normalized.get("tx", ""), "tx", MAX_TRANSACTION_ID)

    amount = None
    if transaction_type in AMOUNT_TRANSACTION_TYPES:
        amount = _parse_amount(normalized.get(AMOUNT_COLUMN, ""))

    return Transaction(
        transaction_type=transaction_type,
        client_id=client_id,
        transaction_id=transaction_id,
        amount=amount,
    )


def _parse_id(value: str, column: str, upper_bound: int) -> int:
    if not value.isdecimal():
        raise CsvParseError(f"{column} must be an unsigned integer, got {value!r}")
    parsed = int(value)
    if parsed > upper_bound:
        raise CsvParseError(f"{column} {parsed} exceeds {upper_bound}")
    return parsed


def _parse_amount(value: str) -> Decimal:
    if not value:
        raise CsvParseError("amount is required for deposits and withdrawals")
    try:
        amount = Decimal(value)
    except InvalidOperation:
        raise CsvParseError(f"amount {value!r} is not a number") from None
    if not amount.is_finite():
        raise CsvParseError(f"amount {value!r} is not finite")
    if amount < 0:
        raise CsvParseError(f"amount {value!r} is negative")
    return amount
