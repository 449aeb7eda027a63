import logging
from typing import Optional

from models import (
    APPLIED,
    ClientAccount,
    IgnoreReason,
    ProcessingResult,
    Transaction,
    TransactionType,
)
from state_manager import StateManager

logger = logging.getLogger(__name__)


class TransactionProcessor:
    """
    Processes transactions against state.
    Returns ProcessingResult to indicate whether the transaction was applied.
    Ignored transactions leave state untouched; nothing is ever raised.
    """

    def __init__(self, state: StateManager):
        self._state = state

    def process_transaction(self, transaction: Transaction) -> ProcessingResult:
        """
        Process a single transaction.

        Returns:
            APPLIED: State was updated
            ProcessingResult.ignored(reason): State is unchanged, reason says why
        """
        match transaction.transaction_type:
            case TransactionType.DEPOSIT:
                return self._handle_deposit(transaction)
            case TransactionType.WITHDRAWAL:
                return self._handle_withdrawal(transaction)
            case TransactionType.DISPUTE:
                return self._handle_dispute(transaction)
            case TransactionType.RESOLVE:
                return self._handle_resolve(transaction)
            case TransactionType.CHARGEBACK:
                return self._handle_chargeback(transaction)
            case _:
                raise ValueError(f"Unsupported transaction type: {transaction.transaction_type!r}")

    def _handle_deposit(self, transaction: Transaction) -> ProcessingResult:
        account = self._state.get_or_create_account(transaction.client_id)

        if account.locked:
            logger.warning(f"Deposit tx {transaction.transaction_id}: client {account.client_id} is locked")
            return ProcessingResult.ignored(IgnoreReason.ACCOUNT_LOCKED)

        if not self._has_valid_amount(transaction):
            logger.warning(f"Deposit tx {transaction.transaction_id}: invalid amount {transaction.amount}")
            return ProcessingResult.ignored(IgnoreReason.INVALID_AMOUNT)

        if self._state.get_transaction(transaction.transaction_id) is not None:
            logger.info(f"Deposit tx {transaction.transaction_id}: already processed, skipping")
            return ProcessingResult.ignored(IgnoreReason.DUPLICATE_TRANSACTION)

        account.credit(transaction.amount)
        self._state.store_transaction(transaction)
        return APPLIED

    def _handle_withdrawal(self, transaction: Transaction) -> ProcessingResult:
        account = self._state.get_account(transaction.client_id)

        if account is None:
            logger.info(f"Withdrawal tx {transaction.transaction_id}: client {transaction.client_id} has no account")
            return ProcessingResult.ignored(IgnoreReason.UNKNOWN_ACCOUNT)

        if account.locked:
            logger.warning(f"Withdrawal tx {transaction.transaction_id}: client {account.client_id} is locked")
            return ProcessingResult.ignored(IgnoreReason.ACCOUNT_LOCKED)

        if not self._has_valid_amount(transaction):
            logger.warning(f"Withdrawal tx {transaction.transaction_id}: invalid amount {transaction.amount}")
            return ProcessingResult.ignored(IgnoreReason.INVALID_AMOUNT)

        if self._state.get_transaction(transaction.transaction_id) is not None:
            logger.info(f"Withdrawal tx {transaction.transaction_id}: already processed, skipping")
            return ProcessingResult.ignored(IgnoreReason.DUPLICATE_TRANSACTION)

        if account.available < transaction.amount:
            logger.info(f"Withdrawal tx {transaction.transaction_id}: insufficient funds ({account.available} < {transaction.amount})")
            return ProcessingResult.ignored(IgnoreReason.INSUFFICIENT_FUNDS)

        account.debit(transaction.amount)
        self._state.store_transaction(transaction)
        return APPLIED

    def _handle_dispute(self, transaction: Transaction) -> ProcessingResult:
        original, rejection = self._find_original(transaction)
        if rejection is not None:
            return rejection

        if self._state.is_transaction_charged_back(transaction.transaction_id):
            logger.warning(f"Dispute for tx {transaction.transaction_id}: transaction was already charged back")
            return ProcessingResult.ignored(IgnoreReason.CHARGED_BACK)

        if self._state.is_transaction_disputed(transaction.transaction_id):
            logger.warning(f"Dispute for tx {transaction.transaction_id}: transaction already disputed")
            return ProcessingResult.ignored(IgnoreReason.ALREADY_DISPUTED)

        # Locked accounts still take part in disputes; available may go negative.
        account = self._state.get_or_create_account(original.client_id)
        account.hold(original.amount)
        self._state.mark_transaction_disputed(transaction)
        return APPLIED

    def _handle_resolve(self, transaction: Transaction) -> ProcessingResult:
        original, rejection = self._find_original(transaction)
        if rejection is not None:
            return rejection

        if not self._state.is_transaction_disputed(transaction.transaction_id):
            logger.info(f"Resolve for tx {transaction.transaction_id}: transaction is not disputed")
            return ProcessingResult.ignored(IgnoreReason.NOT_DISPUTED)

        account = self._state.get_or_create_account(original.client_id)
        account.release_hold(original.amount)
        self._state.clear_transaction_dispute(transaction.transaction_id)
        return APPLIED

    def _handle_chargeback(self, transaction: Transaction) -> ProcessingResult:
        original, rejection = self._find_original(transaction)
        if rejection is not None:
            return rejection

        if not self._state.is_transaction_disputed(transaction.transaction_id):
            logger.info(f"Chargeback for tx {transaction.transaction_id}: transaction is not disputed")
            return ProcessingResult.ignored(IgnoreReason.NOT_DISPUTED)

        account = self._state.get_or_create_account(original.client_id)
        account.charge_back(original.amount)
        self._state.clear_transaction_dispute(transaction.transaction_id)
        self._state.mark_transaction_charged_back(transaction.transaction_id)
        logger.info(f"Chargeback for tx {transaction.transaction_id}: client {account.client_id} locked")
        return APPLIED

    def _find_original(self, transaction: Transaction) -> tuple[Optional[Transaction], Optional[ProcessingResult]]:
        """Look up the deposit or withdrawal a dispute-family record refers to."""
        label = transaction.transaction_type.value.capitalize()
        original = self._state.get_transaction(transaction.transaction_id)

        if original is None:
            logger.info(f"{label} for tx {transaction.transaction_id}: transaction not found")
            return None, ProcessingResult.ignored(IgnoreReason.UNKNOWN_TRANSACTION)

        if original.client_id != transaction.client_id:
            logger.warning(f"{label} for tx {transaction.transaction_id}: client mismatch (expected {original.client_id}, got {transaction.client_id})")
            return None, ProcessingResult.ignored(IgnoreReason.CLIENT_MISMATCH)

        return original, None

    @staticmethod
    def _has_valid_amount(transaction: Transaction) -> bool:
        return transaction.amount is not None and transaction.amount > 0
