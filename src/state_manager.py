from typing import Dict, Iterator, Optional, Set

from models import Transaction, ClientAccount


class StateManager:
    """
    In-memory ledger state for a single processing pass.
    Stores client accounts and transaction history for dispute lookups.

    Not thread-safe: callers must serialize all access.
    """

    def __init__(self):
        self._accounts: Dict[int, ClientAccount] = {}
        self._transactions: Dict[int, Transaction] = {}
        self._disputed_transactions: Dict[int, Transaction] = {}
        self._charged_back_transaction_ids: Set[int] = set()

    def get_or_create_account(self, client_id: int) -> ClientAccount:
        """Get existing account or create new one."""
        if client_id not in self._accounts:
            self._accounts[client_id] = ClientAccount(client_id=client_id)
        return self._accounts[client_id]

    def get_account(self, client_id: int) -> Optional[ClientAccount]:
        """Retrieve an existing account without creating it."""
        return self._accounts.get(client_id)

    def store_transaction(self, transaction: Transaction) -> None:
        """Store transaction for future dispute lookups."""
        self._transactions[transaction.transaction_id] = transaction

    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Retrieve stored transaction by ID."""
        return self._transactions.get(transaction_id)

    def mark_transaction_disputed(self, dispute: Transaction) -> None:
        """Open a dispute on the transaction the dispute record refers to."""
        if dispute.transaction_id not in self._transactions:
            raise KeyError(f"cannot dispute unknown transaction {dispute.transaction_id}")
        self._disputed_transactions[dispute.transaction_id] = dispute

    def is_transaction_disputed(self, transaction_id: int) -> bool:
        """Check if transaction is currently disputed."""
        return transaction_id in self._disputed_transactions

    def get_dispute(self, transaction_id: int) -> Optional[Transaction]:
        """Return the record that opened the current dispute, if any."""
        return self._disputed_transactions.get(transaction_id)

    def clear_transaction_dispute(self, transaction_id: int) -> None:
        """Clear dispute status for a transaction."""
        self._disputed_transactions.pop(transaction_id, None)

    def mark_transaction_charged_back(self, transaction_id: int) -> None:
        self._charged_back_transaction_ids.add(transaction_id)

    def is_transaction_charged_back(self, transaction_id: int) -> bool:
        return transaction_id in self._charged_back_transaction_ids

    def iter_accounts(self) -> Iterator[ClientAccount]:
        """Iterate accounts in client id order."""
        for client_id in sorted(self._accounts):
            yield self._accounts[client_id]

    def get_all_accounts(self) -> Dict[int, ClientAccount]:
        """Return all accounts (for final output)."""
        return dict(self._accounts)
