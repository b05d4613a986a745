"""Pydantic contracts shared across the ledger backend and its API."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ToolErrorCode(str, Enum):
    """Stable error codes for tool contracts across layers."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"


class TransactionStatus(str, Enum):
    """Lifecycle status of a transfer attempt."""

    SUCCESSFUL = "SUCCESSFUL"
    FAILED = "FAILED"
    UNAUTHORIZED = "UNAUTHORIZED"
    ABORTED = "ABORTED"


class Transaction(BaseModel):
    """Immutable ledger entry.

    ``sender`` and ``receiver`` travel as ``from`` and ``to`` on the wire; both
    spellings are accepted on input.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    id: int
    status: TransactionStatus
    sender: str = Field(alias="from")
    receiver: str = Field(alias="to")
    amount: float = Field(ge=0)

    def with_status(self, status: TransactionStatus) -> Transaction:
        return self.model_copy(update={"status": status})


class TransactionStatusUpdateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    transaction_id: int
    status: TransactionStatus


class AmountRange(BaseModel):
    """Open interval: both bounds are excluded."""

    model_config = ConfigDict(extra="forbid")

    min_amount: float
    max_amount: float


class StatusChangeBody(BaseModel):
    model_config = ConfigDict(extra="forbid")

    status: TransactionStatus


class TransactionListResult(BaseModel):
    model_config = ConfigDict(extra="forbid")

    items: list[Transaction]


class NamesResult(BaseModel):
    model_config = ConfigDict(extra="forbid")

    items: list[str]


class TransactionAddResult(BaseModel):
    model_config = ConfigDict(extra="forbid")

    added: bool
    count: int


class TransactionCountResult(BaseModel):
    model_config = ConfigDict(extra="forbid")

    count: int


class TransactionContainsResult(BaseModel):
    model_config = ConfigDict(extra="forbid")

    transaction_id: int
    contains: bool


class ToolError(BaseModel):
    model_config = ConfigDict(extra="forbid")

    code: ToolErrorCode
    message: str
    details: dict[str, object] | None = None
