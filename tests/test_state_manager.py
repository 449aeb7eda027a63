import sys
import os
from decimal import Decimal

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import pytest

from models import Transaction, TransactionType
from state_manager import StateManager


class TestStateManager:
    def setup_method(self):
        self.state = StateManager()

    def test_get_or_create_account_is_lazy_and_stable(self):
        assert self.state.get_account(7) is None
        account = self.state.get_or_create_account(7)
        assert account.client_id == 7
        assert self.state.get_or_create_account(7) is account
        assert self.state.get_account(7) is account

    def test_store_and_get_transaction(self):
        deposit = Transaction(TransactionType.DEPOSIT, 1, 10, Decimal("5"))
        self.state.store_transaction(deposit)
        assert self.state.get_transaction(10) is deposit
        assert self.state.get_transaction(11) is None

    def test_dispute_lifecycle(self):
        self.state.store_transaction(Transaction(TransactionType.DEPOSIT, 1, 10, Decimal("5")))
        dispute = Transaction(TransactionType.DISPUTE, 1, 10)

        self.state.mark_transaction_disputed(dispute)
        assert self.state.is_transaction_disputed(10)
        assert self.state.get_dispute(10) is dispute

        self.state.clear_transaction_dispute(10)
        assert not self.state.is_transaction_disputed(10)
        assert self.state.get_dispute(10) is None

    def test_cannot_dispute_unknown_transaction(self):
        with pytest.raises(KeyError):
            self.state.mark_transaction_disputed(Transaction(TransactionType.DISPUTE, 1, 99))
        assert not self.state.is_transaction_disputed(99)

    def test_charged_back(self):
        assert not self.state.is_transaction_charged_back(3)
        self.state.mark_transaction_charged_back(3)
        assert self.state.is_transaction_charged_back(3)

    def test_iter_accounts_sorted_by_client(self):
        for client_id in (5, 1, 3):
            self.state.get_or_create_account(client_id)
        assert [account.client_id for account in self.state.iter_accounts()] == [1, 3, 5]

    def test_get_all_accounts_returns_copy(self):
        self.state.get_or_create_account(1)
        accounts = self.state.get_all_accounts()
        accounts.clear()
        assert self.state.get_account(1) is not None
