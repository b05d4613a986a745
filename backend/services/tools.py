"""Backend tool service for the transaction ledger.

Repository errors are normalized into ``ToolError`` payloads here so callers
receive either a result model or an error, never a partial result.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import ValidationError

from backend.repositories.transactions_repository import (
    TransactionNotFoundError,
    TransactionsRepository,
)
from shared.models import (
    AmountRange,
    NamesResult,
    ToolError,
    ToolErrorCode,
    Transaction,
    TransactionAddResult,
    TransactionContainsResult,
    TransactionCountResult,
    TransactionListResult,
    TransactionStatus,
    TransactionStatusUpdateRequest,
)


def _not_found(exc: TransactionNotFoundError, **details: object) -> ToolError:
    return ToolError(code=ToolErrorCode.NOT_FOUND, message=str(exc), details=details or None)


@dataclass(slots=True)
class BackendToolService:
    transactions_repository: TransactionsRepository

    def transactions_add(
        self, payload: Transaction | dict[str, object]
    ) -> TransactionAddResult | ToolError:
        try:
            transaction = (
                payload if isinstance(payload, Transaction) else Transaction.model_validate(payload)
            )
        except ValidationError as exc:
            return ToolError(
                code=ToolErrorCode.VALIDATION_ERROR,
                message="Invalid payload for transactions_add",
                details={"validation_errors": exc.errors(include_url=False)},
            )

        added = self.transactions_repository.add(transaction)
        return TransactionAddResult(added=added, count=self.transactions_repository.get_count())

    def transactions_contains(self, transaction_id: int) -> TransactionContainsResult:
        return TransactionContainsResult(
            transaction_id=transaction_id,
            contains=self.transactions_repository.contains(transaction_id),
        )

    def transactions_count(self) -> TransactionCountResult:
        return TransactionCountResult(count=self.transactions_repository.get_count())

    def transactions_get(self, transaction_id: int) -> Transaction | ToolError:
        try:
            return self.transactions_repository.get_by_id(transaction_id)
        except TransactionNotFoundError as exc:
            return _not_found(exc, transaction_id=transaction_id)

    def transactions_remove(self, transaction_id: int) -> TransactionCountResult | ToolError:
        try:
            self.transactions_repository.remove_transaction_by_id(transaction_id)
        except TransactionNotFoundError as exc:
            return _not_found(exc, transaction_id=transaction_id)
        return TransactionCountResult(count=self.transactions_repository.get_count())

    def transactions_set_status(
        self, request: TransactionStatusUpdateRequest
    ) -> Transaction | ToolError:
        try:
            self.transactions_repository.change_transaction_status(
                request.transaction_id, request.status
            )
            return self.transactions_repository.get_by_id(request.transaction_id)
        except TransactionNotFoundError as exc:
            return _not_found(exc, transaction_id=request.transaction_id)

    def transactions_by_status(
        self, status: TransactionStatus
    ) -> TransactionListResult | ToolError:
        try:
            items = self.transactions_repository.get_by_transaction_status(status)
        except TransactionNotFoundError as exc:
            return _not_found(exc, status=status.value)
        return TransactionListResult(items=items)

    def transactions_senders_by_status(self, status: TransactionStatus) -> NamesResult | ToolError:
        try:
            items = self.transactions_repository.get_all_senders_with_transaction_status(status)
        except TransactionNotFoundError as exc:
            return _not_found(exc, status=status.value)
        return NamesResult(items=items)

    def transactions_receivers_by_status(self, status: TransactionStatus) -> NamesResult | ToolError:
        try:
            items = self.transactions_repository.get_all_receivers_with_transaction_status(status)
        except TransactionNotFoundError as exc:
            return _not_found(exc, status=status.value)
        return NamesResult(items=items)

    def transactions_in_amount_range(self, request: AmountRange) -> TransactionListResult:
        items = self.transactions_repository.get_all_in_amount_range(
            request.min_amount, request.max_amount
        )
        return TransactionListResult(items=items)

    def transactions_by_receiver_in_amount_range(
        self, receiver: str, request: AmountRange
    ) -> TransactionListResult | ToolError:
        try:
            items = self.transactions_repository.get_by_receiver_and_amount_range(
                receiver, request.min_amount, request.max_amount
            )
        except TransactionNotFoundError as exc:
            return _not_found(
                exc,
                receiver=receiver,
                min_amount=request.min_amount,
                max_amount=request.max_amount,
            )
        return TransactionListResult(items=items)

    def transactions_ordered(self) -> TransactionListResult:
        return TransactionListResult(
            items=self.transactions_repository.get_all_ordered_by_amount_descending_then_by_id()
        )

    def transactions_by_receiver(self, receiver: str) -> TransactionListResult | ToolError:
        try:
            items = self.transactions_repository.get_by_receiver_ordered_by_amount_then_by_id(receiver)
        except TransactionNotFoundError as exc:
            return _not_found(exc, receiver=receiver)
        return TransactionListResult(items=items)

    def transactions_by_sender(self, sender: str) -> TransactionListResult | ToolError:
        try:
            items = self.transactions_repository.get_by_sender_ordered_by_amount_descending(sender)
        except TransactionNotFoundError as exc:
            return _not_found(exc, sender=sender)
        return TransactionListResult(items=items)

    def transactions_by_status_below(
        self, status: TransactionStatus, max_amount: float
    ) -> TransactionListResult:
        items = self.transactions_repository.get_by_transaction_status_and_maximum_amount(
            status, max_amount
        )
        return TransactionListResult(items=items)

    def transactions_by_sender_above(
        self, sender: str, min_amount: float
    ) -> TransactionListResult | ToolError:
        try:
            items = self.transactions_repository.get_by_sender_and_minimum_amount_descending(
                sender, min_amount
            )
        except TransactionNotFoundError as exc:
            return _not_found(exc, sender=sender, min_amount=min_amount)
        return TransactionListResult(items=items)
