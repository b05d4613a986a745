"""Composition root for backend services."""

from __future__ import annotations

import logging

from backend.repositories.transactions_repository import (
    DEMO_TRANSACTIONS,
    InMemoryTransactionsRepository,
)
from backend.services.tools import BackendToolService
from shared import config


logger = logging.getLogger(__name__)


def build_transactions_repository() -> InMemoryTransactionsRepository:
    """Build the in-memory ledger, seeded with demo transactions when enabled."""

    if config.seed_demo_transactions():
        logger.info("transactions_repository_seeded count=%s", len(DEMO_TRANSACTIONS))
        return InMemoryTransactionsRepository(seed=DEMO_TRANSACTIONS)
    return InMemoryTransactionsRepository()


def build_backend_tool_service() -> BackendToolService:
    return BackendToolService(transactions_repository=build_transactions_repository())
