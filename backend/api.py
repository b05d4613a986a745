"""FastAPI entrypoint for ledger HTTP endpoints."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any

from fastapi import Body, FastAPI, HTTPException, Query, Response
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.requests import Request
from fastapi.responses import JSONResponse

from backend.factory import build_backend_tool_service
from backend.services.tools import BackendToolService
from shared import config as _config
from shared.models import (
    AmountRange,
    StatusChangeBody,
    ToolError,
    ToolErrorCode,
    TransactionAddResult,
    TransactionStatus,
    TransactionStatusUpdateRequest,
)


logger = logging.getLogger(__name__)


_TOOL_ERROR_STATUS_CODES = {
    ToolErrorCode.NOT_FOUND: 404,
    ToolErrorCode.VALIDATION_ERROR: 400,
}


@lru_cache(maxsize=1)
def get_tool_service() -> BackendToolService:
    """Create and cache the backend tool service once per process."""

    return build_backend_tool_service()


def _to_response(result: Any) -> Any:
    if isinstance(result, ToolError):
        raise HTTPException(
            status_code=_TOOL_ERROR_STATUS_CODES.get(result.code, 400),
            detail=jsonable_encoder(result),
        )
    return jsonable_encoder(result)


app = FastAPI(title="Transaction Ledger API")

ALLOW_ORIGINS = _config.cors_allow_origins()


@app.middleware("http")
async def log_http_requests(request: Request, call_next):
    """Log incoming requests, HTTP status codes and unexpected errors."""

    logger.info("http_request_received method=%s path=%s", request.method, request.url.path)
    try:
        response = await call_next(request)
    except Exception:
        logger.exception(
            "http_request_failed method=%s path=%s",
            request.method,
            request.url.path,
        )
        raise

    logger.info(
        "http_response_sent method=%s path=%s status_code=%s",
        request.method,
        request.url.path,
        response.status_code,
    )
    return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(Exception)
async def handle_unexpected_exception(request: Request, exc: Exception) -> JSONResponse:
    """Return a JSON 500 response for unhandled exceptions."""

    logger.exception(
        "unhandled_exception method=%s path=%s exception_type=%s message=%s",
        request.method,
        request.url.path,
        type(exc).__name__,
        str(exc),
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


@app.get("/health")
def health() -> dict[str, str]:
    """Healthcheck endpoint."""

    return {"status": "ok"}


@app.get("/transactions")
def list_transactions() -> Any:
    """Return every transaction, amount descending then id ascending."""

    return _to_response(get_tool_service().transactions_ordered())


@app.post("/transactions", status_code=201)
def add_transaction(response: Response, payload: dict[str, Any] = Body(...)) -> Any:
    """Add a transaction; a duplicate of a stored one answers 200 with added=false."""

    result = get_tool_service().transactions_add(payload)
    if isinstance(result, TransactionAddResult) and not result.added:
        response.status_code = 200
    return _to_response(result)


@app.get("/transactions/count")
def count_transactions() -> Any:
    return _to_response(get_tool_service().transactions_count())


@app.get("/transactions/amount-range")
def list_transactions_in_amount_range(
    min_amount: float = Query(...),
    max_amount: float = Query(...),
) -> Any:
    """Return transactions strictly between both bounds; empty when none match."""

    request = AmountRange(min_amount=min_amount, max_amount=max_amount)
    return _to_response(get_tool_service().transactions_in_amount_range(request))


@app.get("/transactions/status/{status}")
def list_transactions_by_status(status: TransactionStatus) -> Any:
    return _to_response(get_tool_service().transactions_by_status(status))


@app.get("/transactions/status/{status}/senders")
def list_senders_by_status(status: TransactionStatus) -> Any:
    return _to_response(get_tool_service().transactions_senders_by_status(status))


@app.get("/transactions/status/{status}/receivers")
def list_receivers_by_status(status: TransactionStatus) -> Any:
    return _to_response(get_tool_service().transactions_receivers_by_status(status))


@app.get("/transactions/status/{status}/below")
def list_transactions_by_status_below(
    status: TransactionStatus,
    max_amount: float = Query(...),
) -> Any:
    return _to_response(get_tool_service().transactions_by_status_below(status, max_amount))


@app.get("/transactions/receivers/{receiver}")
def list_transactions_by_receiver(receiver: str) -> Any:
    return _to_response(get_tool_service().transactions_by_receiver(receiver))


@app.get("/transactions/receivers/{receiver}/amount-range")
def list_transactions_by_receiver_in_amount_range(
    receiver: str,
    min_amount: float = Query(...),
    max_amount: float = Query(...),
) -> Any:
    request = AmountRange(min_amount=min_amount, max_amount=max_amount)
    return _to_response(
        get_tool_service().transactions_by_receiver_in_amount_range(receiver, request)
    )


@app.get("/transactions/senders/{sender}")
def list_transactions_by_sender(sender: str) -> Any:
    return _to_response(get_tool_service().transactions_by_sender(sender))


@app.get("/transactions/senders/{sender}/above")
def list_transactions_by_sender_above(
    sender: str,
    min_amount: float = Query(...),
) -> Any:
    return _to_response(get_tool_service().transactions_by_sender_above(sender, min_amount))


@app.get("/transactions/{transaction_id}")
def get_transaction(transaction_id: int) -> Any:
    return _to_response(get_tool_service().transactions_get(transaction_id))


@app.delete("/transactions/{transaction_id}")
def remove_transaction(transaction_id: int) -> Any:
    return _to_response(get_tool_service().transactions_remove(transaction_id))


@app.patch("/transactions/{transaction_id}/status")
def change_transaction_status(transaction_id: int, body: StatusChangeBody) -> Any:
    request = TransactionStatusUpdateRequest(transaction_id=transaction_id, status=body.status)
    return _to_response(get_tool_service().transactions_set_status(request))


@app.get("/transactions/{transaction_id}/exists")
def transaction_exists(transaction_id: int) -> Any:
    return _to_response(get_tool_service().transactions_contains(transaction_id))
