import logging
from typing import Dict, Iterable, Iterator

from csv_parser import read_transactions
from models import Transaction, ClientAccount, ProcessingResult, ProcessingStats
from state_manager import StateManager
from transaction_processor import TransactionProcessor

logger = logging.getLogger(__name__)


class PaymentsEngine:
    """
    Applies a stream of transactions to the ledger, strictly in input order.
    Single-threaded: every transaction is fully applied before the next is read.
    """

    def __init__(self, skip_malformed: bool = False):
        self._skip_malformed = skip_malformed
        self._state = StateManager()
        self._processor = TransactionProcessor(self._state)
        self._stats = ProcessingStats()

    @property
    def stats(self) -> ProcessingStats:
        return self._stats

    def process_file(self, filepath: str) -> Dict[int, ClientAccount]:
        """Process CSV file and return final account states."""
        logger.info(f"Processing transactions from {filepath}")
        self.process_transactions(read_transactions(filepath, skip_malformed=self._skip_malformed))
        logger.info(self._stats.summary())
        return self._state.get_all_accounts()

    def process_transactions(self, transactions: Iterable[Transaction]) -> None:
        """Consume transactions one at a time; the iterable is never materialized."""
        for transaction in transactions:
            self.process_transaction(transaction)

    def process_transaction(self, transaction: Transaction) -> ProcessingResult:
        result = self._processor.process_transaction(transaction)
        self._stats.record(result)
        return result

    def iter_accounts(self) -> Iterator[ClientAccount]:
        """Final account snapshot in client id order."""
        return self._state.iter_accounts()

    def get_all_accounts(self) -> Dict[int, ClientAccount]:
        return self._state.get_all_accounts()
