"""Transactions repository adapters.

The ledger keeps one entry per transaction id. Queries keyed by a single
discriminant (status, sender, receiver) raise ``TransactionNotFoundError`` when
nothing matches, while the pure amount filters return an empty list.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Iterator
from typing import Protocol

from shared.models import Transaction, TransactionStatus


logger = logging.getLogger(__name__)


DEMO_TRANSACTIONS: tuple[Transaction, ...] = (
    Transaction(id=0, status=TransactionStatus.SUCCESSFUL, sender="Pesho", receiver="Sasho", amount=11.20),
    Transaction(id=1, status=TransactionStatus.SUCCESSFUL, sender="Pesho", receiver="Toshko", amount=10),
    Transaction(id=2, status=TransactionStatus.UNAUTHORIZED, sender="Sasho", receiver="Pesho", amount=11.0),
    Transaction(id=3, status=TransactionStatus.FAILED, sender="Toshko", receiver="Sasho", amount=12.20),
    Transaction(id=4, status=TransactionStatus.SUCCESSFUL, sender="Sasho", receiver="Pesho", amount=10.50),
    Transaction(id=5, status=TransactionStatus.SUCCESSFUL, sender="Pesho", receiver="Sasho", amount=14),
    Transaction(id=6, status=TransactionStatus.SUCCESSFUL, sender="Toshko", receiver="Sasho", amount=9),
)


class TransactionNotFoundError(ValueError):
    """Raised when a lookup or a non-empty query yields no transaction."""


class TransactionsRepository(Protocol):
    def add(self, transaction: Transaction) -> bool:
        """Store a transaction unless an equal one is already present."""

    def contains(self, item: Transaction | int) -> bool:
        """Return whether an equal transaction, or a transaction with this id, is stored."""

    def get_count(self) -> int:
        """Return the number of stored transactions."""

    def change_transaction_status(self, transaction_id: int, new_status: TransactionStatus) -> None:
        """Replace the status of a stored transaction."""

    def get_by_id(self, transaction_id: int) -> Transaction:
        """Return the transaction stored under this id."""

    def remove_transaction_by_id(self, transaction_id: int) -> None:
        """Delete the transaction stored under this id."""

    def get_by_transaction_status(self, status: TransactionStatus) -> list[Transaction]:
        """Return transactions with this status, amount descending."""

    def get_all_senders_with_transaction_status(self, status: TransactionStatus) -> list[str]:
        """Return senders of transactions with this status, amount descending."""

    def get_all_receivers_with_transaction_status(self, status: TransactionStatus) -> list[str]:
        """Return receivers of transactions with this status, amount descending."""

    def get_all_in_amount_range(self, lo: float, hi: float) -> list[Transaction]:
        """Return transactions with lo < amount < hi in store order."""

    def get_by_receiver_and_amount_range(self, receiver: str, lo: float, hi: float) -> list[Transaction]:
        """Return a receiver's transactions with lo < amount < hi, amount descending."""

    def get_all_ordered_by_amount_descending_then_by_id(self) -> list[Transaction]:
        """Return every transaction, amount descending then id ascending."""

    def get_by_receiver_ordered_by_amount_then_by_id(self, receiver: str) -> list[Transaction]:
        """Return a receiver's transactions, amount descending then id ascending."""

    def get_by_sender_ordered_by_amount_descending(self, sender: str) -> list[Transaction]:
        """Return a sender's transactions, amount descending."""

    def get_by_transaction_status_and_maximum_amount(
        self, status: TransactionStatus, max_amount: float
    ) -> list[Transaction]:
        """Return transactions with this status and amount < max_amount in store order."""

    def get_by_sender_and_minimum_amount_descending(self, sender: str, min_amount: float) -> list[Transaction]:
        """Return a sender's transactions with amount > min_amount, amount descending."""


def _amount_descending(rows: Iterable[Transaction]) -> list[Transaction]:
    # sorted() is stable, so equal amounts keep store order
    return sorted(rows, key=lambda row: row.amount, reverse=True)


def _amount_descending_then_id(rows: Iterable[Transaction]) -> list[Transaction]:
    return sorted(rows, key=lambda row: (-row.amount, row.id))


def _require_rows(rows: list[Transaction], query: str, **filters: object) -> list[Transaction]:
    if not rows:
        logger.info("transactions_query_empty query=%s filters=%s", query, filters)
        raise TransactionNotFoundError(f"No transactions found for {query}")
    return rows


class InMemoryTransactionsRepository:
    """In-memory ledger keyed by transaction id, kept in insertion order.

    Mutations run under a lock so overlapping requests from a threadpool
    apply one at a time; queries work on a snapshot taken under the same lock.
    """

    def __init__(self, seed: Iterable[Transaction] = ()) -> None:
        self._transactions: dict[int, Transaction] = {}
        self._lock = threading.RLock()
        for transaction in seed:
            self.add(transaction)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(self._snapshot())

    def __len__(self) -> int:
        return self.get_count()

    def __contains__(self, item: object) -> bool:
        if isinstance(item, (Transaction, int)) and not isinstance(item, bool):
            return self.contains(item)
        return False

    def _snapshot(self) -> list[Transaction]:
        with self._lock:
            return list(self._transactions.values())

    def _get_or_raise(self, transaction_id: int) -> Transaction:
        transaction = self._transactions.get(transaction_id)
        if transaction is None:
            logger.info("transaction_not_found transaction_id=%s", transaction_id)
            raise TransactionNotFoundError(f"Transaction {transaction_id} not found")
        return transaction

    def add(self, transaction: Transaction) -> bool:
        with self._lock:
            current = self._transactions.get(transaction.id)
            if current == transaction:
                logger.info("transaction_duplicate_skipped transaction_id=%s", transaction.id)
                return False

            if current is not None:
                logger.info("transaction_replaced transaction_id=%s", transaction.id)
            else:
                logger.info(
                    "transaction_added transaction_id=%s status=%s amount=%s",
                    transaction.id,
                    transaction.status.value,
                    transaction.amount,
                )
            self._transactions[transaction.id] = transaction
            return True

    def contains(self, item: Transaction | int) -> bool:
        if isinstance(item, bool):
            return False
        with self._lock:
            if isinstance(item, Transaction):
                # equal transactions share an id, so the id slot is the only candidate
                return self._transactions.get(item.id) == item
            return item in self._transactions

    def get_count(self) -> int:
        with self._lock:
            return len(self._transactions)

    def change_transaction_status(self, transaction_id: int, new_status: TransactionStatus) -> None:
        with self._lock:
            transaction = self._get_or_raise(transaction_id)
            self._transactions[transaction_id] = transaction.with_status(new_status)
        logger.info(
            "transaction_status_changed transaction_id=%s old_status=%s new_status=%s",
            transaction_id,
            transaction.status.value,
            new_status.value,
        )

    def get_by_id(self, transaction_id: int) -> Transaction:
        with self._lock:
            return self._get_or_raise(transaction_id)

    def remove_transaction_by_id(self, transaction_id: int) -> None:
        with self._lock:
            self._get_or_raise(transaction_id)
            del self._transactions[transaction_id]
        logger.info("transaction_removed transaction_id=%s", transaction_id)

    def get_by_transaction_status(self, status: TransactionStatus) -> list[Transaction]:
        rows = [row for row in self._snapshot() if row.status == status]
        return _require_rows(_amount_descending(rows), "status", status=status.value)

    def get_all_senders_with_transaction_status(self, status: TransactionStatus) -> list[str]:
        return [row.sender for row in self.get_by_transaction_status(status)]

    def get_all_receivers_with_transaction_status(self, status: TransactionStatus) -> list[str]:
        return [row.receiver for row in self.get_by_transaction_status(status)]

    def get_all_in_amount_range(self, lo: float, hi: float) -> list[Transaction]:
        return [row for row in self._snapshot() if lo < row.amount < hi]

    def get_by_receiver_and_amount_range(self, receiver: str, lo: float, hi: float) -> list[Transaction]:
        rows = [
            row
            for row in self._snapshot()
            if row.receiver == receiver and lo < row.amount < hi
        ]
        return _require_rows(
            _amount_descending(rows),
            "receiver and amount range",
            receiver=receiver,
            lo=lo,
            hi=hi,
        )

    def get_all_ordered_by_amount_descending_then_by_id(self) -> list[Transaction]:
        return _amount_descending_then_id(self._snapshot())

    def get_by_receiver_ordered_by_amount_then_by_id(self, receiver: str) -> list[Transaction]:
        rows = [row for row in self._snapshot() if row.receiver == receiver]
        return _require_rows(_amount_descending_then_id(rows), "receiver", receiver=receiver)

    def get_by_sender_ordered_by_amount_descending(self, sender: str) -> list[Transaction]:
        rows = [row for row in self._snapshot() if row.sender == sender]
        return _require_rows(_amount_descending(rows), "sender", sender=sender)

    def get_by_transaction_status_and_maximum_amount(
        self, status: TransactionStatus, max_amount: float
    ) -> list[Transaction]:
        return [
            row
            for row in self._snapshot()
            if row.status == status and row.amount < max_amount
        ]

    def get_by_sender_and_minimum_amount_descending(self, sender: str, min_amount: float) -> list[Transaction]:
        rows = [
            row
            for row in self._snapshot()
            if row.sender == sender and row.amount > min_amount
        ]
        return _require_rows(
            _amount_descending(rows),
            "sender and minimum amount",
            sender=sender,
            min_amount=min_amount,
        )
