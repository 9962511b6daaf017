import os
import sys
from datetime import datetime
from decimal import Decimal
from pathlib import Path

import pytest
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Ensure backend/ on sys.path and keep the app off any real database
_BACKEND_DIR = Path(__file__).resolve().parent.parent
if str(_BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(_BACKEND_DIR))
os.environ["DATABASE_URL"] = "sqlite://"

from app.database import Base, build_engine, get_db  # noqa: E402
import app.models  # noqa: E402,F401


@pytest.fixture()
def engine():
    test_engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


def _make_client(session_factory, host):
    from fastapi.testclient import TestClient
    from app.main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app, client=(host, 50000))


@pytest.fixture()
def client(session_factory):
    """Client connecting from the IPv4 loopback address."""
    test_client = _make_client(session_factory, "127.0.0.1")
    yield test_client
    test_client.app.dependency_overrides.clear()


@pytest.fixture()
def remote_client(session_factory):
    """Client connecting from a public address."""
    test_client = _make_client(session_factory, "203.0.113.25")
    yield test_client
    test_client.app.dependency_overrides.clear()


def _invoice_payload(invoice_number="INV-1001", vehicle_id="TRK-042", invoice_date="2025-08-14T09:30:00", lines=None):
    if lines is None:
        lines = [
            {
                "line_number": 1,
                "description": "Brake pads - front",
                "unit_cost": "45.50",
                "quantity": "2",
                "total_line_cost": "91.00",
                "part_number": "BP-2231",
                "category": "Parts",
                "confidence_score": "97.50",
            },
            {
                "line_number": 2,
                "description": "Brake service labor",
                "unit_cost": "59.00",
                "quantity": "1",
                "total_line_cost": "59.00",
                "category": "Labor",
            },
        ]
    return {
        "vehicle_id": vehicle_id,
        "odometer": 48210,
        "invoice_number": invoice_number,
        "invoice_date": invoice_date,
        "total_cost": "150.00",
        "total_parts_cost": "91.00",
        "total_labor_cost": "59.00",
        "confidence_score": "92.25",
        "lines": lines,
    }


@pytest.fixture()
def make_header():
    """Build an unsaved InvoiceHeader with valid defaults."""
    from app.models import InvoiceHeader

    def _make(**overrides):
        fields = dict(
            vehicle_id="TRK-042",
            invoice_number="INV-1001",
            invoice_date=datetime(2025, 8, 14, 9, 30),
            total_cost=Decimal("150.00"),
            total_parts_cost=Decimal("91.00"),
            total_labor_cost=Decimal("59.00"),
        )
        fields.update(overrides)
        return InvoiceHeader(**fields)

    return _make


@pytest.fixture()
def make_line():
    """Build an unsaved InvoiceLine with valid defaults."""
    from app.models import InvoiceLine

    def _make(**overrides):
        fields = dict(
            line_number=1,
            description="Oil filter",
            unit_cost=Decimal("12.00"),
            quantity=Decimal("1"),
            total_line_cost=Decimal("12.00"),
        )
        fields.update(overrides)
        return InvoiceLine(**fields)

    return _make


@pytest.fixture()
def invoice_payload():
    """JSON body for the internal create endpoint."""
    return _invoice_payload
