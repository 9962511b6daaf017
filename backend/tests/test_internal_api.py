import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.security import LOCALHOST_ONLY_MESSAGE
from app.services.invoice_service import invoice_service


def test_create_invoice_from_loopback(client, invoice_payload):
    response = client.post("/api/internal/invoices", json=invoice_payload())

    assert response.status_code == 201
    data = response.json()
    assert data["invoice_id"] > 0
    assert len(data["lines"]) == 2


def test_create_invoice_from_ipv6_loopback(session_factory, invoice_payload, client):
    # ``client`` installs the database override; reuse it from ::1
    ipv6_client = TestClient(app, client=("::1", 50000))

    response = ipv6_client.post("/api/internal/invoices", json=invoice_payload())

    assert response.status_code == 201


def test_remote_caller_is_forbidden_and_handler_not_run(remote_client, invoice_payload, monkeypatch):
    calls = []
    monkeypatch.setattr(invoice_service, "create_invoice", lambda *args: calls.append(args))

    response = remote_client.post("/api/internal/invoices", json=invoice_payload())

    assert response.status_code == 403
    assert response.json()["detail"] == LOCALHOST_ONLY_MESSAGE
    assert calls == []


@pytest.mark.parametrize(
    "method, path",
    [("patch", "/api/internal/invoices/1"), ("delete", "/api/internal/invoices/1")],
)
def test_every_internal_route_is_guarded(remote_client, method, path):
    kwargs = {"json": {"odometer": 1}} if method == "patch" else {}

    response = getattr(remote_client, method)(path, **kwargs)

    assert response.status_code == 403


def test_unnamed_test_client_host_is_forbidden(session_factory, invoice_payload, client):
    # Starlette's default client host is "testclient", which is not an IP address
    response = TestClient(app).post("/api/internal/invoices", json=invoice_payload())

    assert response.status_code == 403


def test_duplicate_invoice_number_returns_409(client, invoice_payload):
    assert client.post("/api/internal/invoices", json=invoice_payload()).status_code == 201

    response = client.post("/api/internal/invoices", json=invoice_payload(vehicle_id="VAN-7"))

    assert response.status_code == 409
    assert "Constraint violation" in response.json()["detail"]


def test_duplicate_line_numbers_return_409(client, invoice_payload):
    line = {
        "line_number": 1,
        "description": "Wiper blade",
        "unit_cost": "9.99",
        "quantity": "2",
        "total_line_cost": "19.98",
    }

    response = client.post("/api/internal/invoices", json=invoice_payload(lines=[line, dict(line)]))

    assert response.status_code == 409


@pytest.mark.parametrize(
    "field, value",
    [("total_cost", "-0.01"), ("confidence_score", "100.01"), ("odometer", -1)],
)
def test_invalid_header_payload_is_rejected_early(client, invoice_payload, field, value):
    payload = invoice_payload()
    payload[field] = value

    response = client.post("/api/internal/invoices", json=payload)

    assert response.status_code == 422


@pytest.mark.parametrize(
    "field, value",
    [("quantity", "0"), ("line_number", 0), ("unit_cost", "-1"), ("confidence_score", "100.01")],
)
def test_invalid_line_payload_is_rejected_early(client, invoice_payload, field, value):
    payload = invoice_payload()
    payload["lines"][0][field] = value

    response = client.post("/api/internal/invoices", json=payload)

    assert response.status_code == 422


def test_update_invoice(client, invoice_payload):
    created = client.post("/api/internal/invoices", json=invoice_payload()).json()

    response = client.patch(
        f"/api/internal/invoices/{created['invoice_id']}",
        json={"odometer": 50000, "vehicle_id": "TRK-043"},
    )

    assert response.status_code == 200
    assert response.json()["odometer"] == 50000
    assert response.json()["vehicle_id"] == "TRK-043"
    assert response.json()["invoice_number"] == "INV-1001"


def test_update_missing_invoice_returns_404(client):
    response = client.patch("/api/internal/invoices/31", json={"odometer": 5})

    assert response.status_code == 404


def test_delete_invoice_removes_lines(client, invoice_payload, session_factory):
    from app.models import InvoiceLine

    created = client.post("/api/internal/invoices", json=invoice_payload()).json()

    response = client.delete(f"/api/internal/invoices/{created['invoice_id']}")
    assert response.status_code == 200
    assert client.delete(f"/api/internal/invoices/{created['invoice_id']}").status_code == 404

    session = session_factory()
    try:
        remaining = session.query(InvoiceLine).filter(InvoiceLine.invoice_id == created["invoice_id"]).count()
    finally:
        session.close()
    assert remaining == 0
