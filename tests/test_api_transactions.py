"""Tests for ledger endpoints exposed by backend.api."""

from fastapi.testclient import TestClient

import backend.api as backend_api
from backend.api import app
from tests.fakes import build_tool_service


client = TestClient(app)


def _use_service(monkeypatch, count: int | None = None):
    service = build_tool_service(count)
    monkeypatch.setattr(backend_api, "get_tool_service", lambda: service)
    return service


def _ids(payload: dict) -> list[int]:
    return [item["id"] for item in payload["items"]]


def test_health() -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_list_transactions_ordered(monkeypatch) -> None:
    _use_service(monkeypatch)

    response = client.get("/transactions")

    assert response.status_code == 200
    assert _ids(response.json()) == [5, 3, 0, 2, 4, 1, 6]


def test_get_transaction_uses_wire_field_names(monkeypatch) -> None:
    _use_service(monkeypatch)

    response = client.get("/transactions/0")

    assert response.status_code == 200
    assert response.json() == {
        "id": 0,
        "status": "SUCCESSFUL",
        "from": "Pesho",
        "to": "Sasho",
        "amount": 11.2,
    }


def test_get_transaction_maps_not_found_to_404(monkeypatch) -> None:
    _use_service(monkeypatch)

    response = client.get("/transactions/199")

    assert response.status_code == 404
    assert response.json()["detail"]["code"] == "NOT_FOUND"


def test_add_transaction_and_duplicate(monkeypatch) -> None:
    _use_service(monkeypatch, count=0)
    payload = {"id": 10, "status": "FAILED", "from": "Ivan", "to": "Pesho", "amount": 5}

    first = client.post("/transactions", json=payload)
    second = client.post("/transactions", json=payload)

    assert first.status_code == 201
    assert first.json() == {"added": True, "count": 1}
    assert second.status_code == 200
    assert second.json() == {"added": False, "count": 1}
    assert client.get("/transactions/count").json() == {"count": 1}


def test_add_transaction_invalid_payload_returns_400(monkeypatch) -> None:
    _use_service(monkeypatch, count=0)

    response = client.post("/transactions", json={"id": 10, "status": "FAILED"})

    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "VALIDATION_ERROR"


def test_remove_transaction(monkeypatch) -> None:
    _use_service(monkeypatch)

    removed = client.delete("/transactions/1")
    missing = client.delete("/transactions/200")

    assert removed.status_code == 200
    assert removed.json() == {"count": 6}
    assert missing.status_code == 404
    assert client.get("/transactions/1/exists").json() == {"transaction_id": 1, "contains": False}


def test_change_transaction_status(monkeypatch) -> None:
    _use_service(monkeypatch)

    response = client.patch("/transactions/0/status", json={"status": "FAILED"})
    missing = client.patch("/transactions/100/status", json={"status": "FAILED"})

    assert response.status_code == 200
    assert response.json()["status"] == "FAILED"
    assert missing.status_code == 404


def test_list_by_status_and_names(monkeypatch) -> None:
    _use_service(monkeypatch, count=3)

    by_status = client.get("/transactions/status/SUCCESSFUL")
    senders = client.get("/transactions/status/SUCCESSFUL/senders")
    receivers = client.get("/transactions/status/SUCCESSFUL/receivers")
    aborted = client.get("/transactions/status/ABORTED")

    assert _ids(by_status.json()) == [0, 1]
    assert senders.json() == {"items": ["Pesho", "Pesho"]}
    assert receivers.json() == {"items": ["Sasho", "Toshko"]}
    assert aborted.status_code == 404


def test_unknown_status_is_rejected(monkeypatch) -> None:
    _use_service(monkeypatch)

    response = client.get("/transactions/status/PENDING")

    assert response.status_code == 422


def test_amount_range_returns_empty_list_instead_of_404(monkeypatch) -> None:
    _use_service(monkeypatch, count=3)

    in_range = client.get("/transactions/amount-range", params={"min_amount": 10, "max_amount": 12})
    empty = client.get("/transactions/amount-range", params={"min_amount": 1000, "max_amount": 1100})

    assert _ids(in_range.json()) == [0, 2]
    assert empty.status_code == 200
    assert empty.json() == {"items": []}


def test_status_below_maximum(monkeypatch) -> None:
    _use_service(monkeypatch)

    response = client.get("/transactions/status/SUCCESSFUL/below", params={"max_amount": 11})
    empty = client.get("/transactions/status/ABORTED/below", params={"max_amount": 11})

    assert _ids(response.json()) == [1, 4, 6]
    assert empty.json() == {"items": []}


def test_receiver_routes(monkeypatch) -> None:
    _use_service(monkeypatch)

    ordered = client.get("/transactions/receivers/Sasho")
    in_range = client.get(
        "/transactions/receivers/Sasho/amount-range", params={"min_amount": 10, "max_amount": 13}
    )
    unknown = client.get("/transactions/receivers/Ivan")

    assert _ids(ordered.json()) == [5, 3, 0, 6]
    assert _ids(in_range.json()) == [3, 0]
    assert unknown.status_code == 404


def test_sender_routes(monkeypatch) -> None:
    _use_service(monkeypatch)

    ordered = client.get("/transactions/senders/Pesho")
    above = client.get("/transactions/senders/Pesho/above", params={"min_amount": 10})
    none_above = client.get("/transactions/senders/Ivan/above", params={"min_amount": 1000})

    assert _ids(ordered.json()) == [5, 0, 1]
    assert _ids(above.json()) == [5, 0]
    assert none_above.status_code == 404
