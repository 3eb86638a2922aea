"""Pytest configuration and fixtures."""

import os

# Configure before the application modules read their settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.pop("REDIS_URL", None)

from datetime import date  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from nailsalon.database import Base, SessionLocal, engine  # noqa: E402
from nailsalon.main import app  # noqa: E402

# 2030-01-07 is a Monday, 2030-01-06 the Sunday before it
MONDAY = date(2030, 1, 7)
SUNDAY = date(2030, 1, 6)

WEEKDAY_HOURS = {
    day: {"start": "09:00", "end": "17:00", "isWorking": True}
    for day in ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday")
}
WEEKDAY_HOURS["sunday"] = {"start": "09:00", "end": "17:00", "isWorking": False}


@pytest.fixture(autouse=True)
def database():
    """Fresh schema for every test."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def make_service(client):
    def _make(name="Gel Polish", duration=60, price=30.0, **extra):
        response = client.post(
            "/api/services",
            json={"name": name, "duration": duration, "price": price, **extra},
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture
def make_customer(client):
    counter = iter(range(1000))

    def _make(name="Maria", phone=None, **extra):
        phone = phone or f"69000{next(counter):05d}"
        response = client.post("/api/customers", json={"name": name, "phone": phone, **extra})
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture
def make_employee(client):
    def _make(name="Sofia", working_hours=WEEKDAY_HOURS, specialties=None, **extra):
        payload = {"name": name, "workingHours": working_hours, **extra}
        if specialties is not None:
            payload["specialties"] = specialties
        response = client.post("/api/employees", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture
def book(client):
    def _book(customer, employee, services, start, **extra):
        payload = {
            "customerId": customer["id"],
            "employeeId": employee["id"] if employee else None,
            "serviceIds": [s["id"] for s in services],
            "date": start,
            **extra,
        }
        return client.post("/api/appointments", json=payload)

    return _book
