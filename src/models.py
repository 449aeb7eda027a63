from collections import Counter
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Optional


class TransactionType(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"


class IgnoreReason(Enum):
    ACCOUNT_LOCKED = "account_locked"
    INVALID_AMOUNT = "invalid_amount"
    DUPLICATE_TRANSACTION = "duplicate_transaction"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    UNKNOWN_ACCOUNT = "unknown_account"
    UNKNOWN_TRANSACTION = "unknown_transaction"
    CLIENT_MISMATCH = "client_mismatch"
    ALREADY_DISPUTED = "already_disputed"
    NOT_DISPUTED = "not_disputed"
    CHARGED_BACK = "charged_back"


@dataclass(frozen=True)
class ProcessingResult:
    """
    Outcome of applying one transaction.

    A result without a reason means the transaction was applied. Ignored
    transactions carry the reason they left the ledger untouched.
    """

    reason: Optional[IgnoreReason] = None

    @property
    def applied(self) -> bool:
        return self.reason is None

    @classmethod
    def ignored(cls, reason: IgnoreReason) -> "ProcessingResult":
        return cls(reason=reason)

    def __repr__(self) -> str:
        if self.applied:
            return "ProcessingResult(applied)"
        return f"ProcessingResult(ignored: {self.reason.value})"


APPLIED = ProcessingResult()


@dataclass(frozen=True)
class Transaction:
    transaction_type: TransactionType
    client_id: int
    transaction_id: int
    amount: Optional[Decimal] = None

    def __repr__(self) -> str:
        return f"Transaction({self.transaction_type.value}, client={self.client_id}, tx={self.transaction_id}, amount={self.amount})"


@dataclass
class ClientAccount:
    client_id: int
    available: Decimal = Decimal("0")
    held: Decimal = Decimal("0")
    total: Decimal = field(init=False)
    locked: bool = False

    def __post_init__(self) -> None:
        self.total = self.available + self.held

    def credit(self, amount: Decimal) -> None:
        self.available += amount
        self.total += amount

    def debit(self, amount: Decimal) -> None:
        self.available -= amount
        self.total -= amount

    def hold(self, amount: Decimal) -> None:
        self.available -= amount
        self.held += amount

    def release_hold(self, amount: Decimal) -> None:
        self.held -= amount
        self.available += amount

    def charge_back(self, amount: Decimal) -> None:
        """
        Remove disputed funds and lock the account.

        The zero-clamp runs before held is reduced and never touches held,
        so a clamped account can end with total != available + held.
        """
        self.total -= amount
        if self.available < 0 or self.total < 0:
            self.available = Decimal("0")
            self.total = Decimal("0")
        self.held -= amount
        self.locked = True


class ProcessingStats:
    """Counters for tracking processing statistics."""

    def __init__(self):
        self.applied = 0
        self.ignored: Counter = Counter()

    def record(self, result: ProcessingResult) -> None:
        if result.applied:
            self.applied += 1
        else:
            self.ignored[result.reason] += 1

    @property
    def ignored_total(self) -> int:
        return sum(self.ignored.values())

    def summary(self) -> str:
        parts = [f"Applied: {self.applied}", f"Ignored: {self.ignored_total}"]
        for reason, count in sorted(self.ignored.items(), key=lambda item: item[0].value):
            parts.append(f"{reason.value}={count}")
        return ", ".join(parts)
