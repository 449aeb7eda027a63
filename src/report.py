import csv
from decimal import Decimal
from typing import Iterable, Iterator, TextIO, Tuple

from models import ClientAccount

HEADER = ("client", "available", "held", "total", "locked")

AccountRow = Tuple[int, Decimal, Decimal, Decimal, bool]


def account_rows(accounts: Iterable[ClientAccount]) -> Iterator[AccountRow]:
    """Read-only view of each account as (client, available, held, total, locked)."""
    for account in accounts:
        yield (account.client_id, account.available, account.held, account.total, account.locked)


def format_decimal(value: Decimal) -> str:
    """Format decimal with exactly 4 decimal places."""
    return f"{value:.4f}"


def write_report(accounts: Iterable[ClientAccount], stream: TextIO) -> None:
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(HEADER)
    for client_id, available, held, total, locked in account_rows(accounts):
        writer.writerow([
            client_id,
            format_decimal(available),
            format_decimal(held),
            format_decimal(total),
            str(locked).lower(),
        ])
