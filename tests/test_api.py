"""
Tests for the booking gateway HTTP routes.
"""

from __future__ import annotations

from datetime import datetime, timezone

import httpx
from fastapi.testclient import TestClient

from catchup.application.use_cases.resilient_store import ResilientBookingStore
from catchup.infrastructure.remote.bookings_api import RemoteBookingStore
from catchup.infrastructure.store.local_booking_store import LocalBookingStore
from catchup.infrastructure.store.memory_storage import MemoryLocalStorage
from catchup.main import app
from catchup.wiring.dependencies import get_booking_store

FIXED_NOW = datetime(2024, 3, 1, 10, 30, tzinfo=timezone.utc)


def _api_down(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused", request=request)


def _client(handler=_api_down) -> TestClient:
    store = ResilientBookingStore(
        remote=RemoteBookingStore(
            base_url="http://bookings.test",
            client=httpx.Client(transport=httpx.MockTransport(handler)),
        ),
        local=LocalBookingStore(storage=MemoryLocalStorage(), clock=lambda: FIXED_NOW),
        clock=lambda: FIXED_NOW,
    )
    app.dependency_overrides[get_booking_store] = lambda: store
    return TestClient(app)


BOOKING = {
    "clientName": "Ana Lopez",
    "clientPhone": "+1 555 0100",
    "serviceName": "Haircut",
    "servicePrice": 45,
    "date": "2024-03-05",
    "time": "2:00 PM",
    "professionalId": "pro-1",
}


def teardown_function():
    app.dependency_overrides.clear()


def test_health():
    client = TestClient(app)
    assert client.get("/health").json() == {"status": "ok"}


def test_create_offline_booking_is_marked_pending_sync():
    client = _client()

    response = client.post("/api/v1/bookings", json=BOOKING)

    assert response.status_code == 201
    data = response.json()
    assert data["id"].startswith("local-")
    assert data["status"] == "pending"
    assert data["source"] == "local"
    assert data["pendingSync"] is True
    assert data["servicePrice"] == 45

    listed = client.get("/api/v1/bookings").json()
    assert [b["id"] for b in listed] == [data["id"]]


def test_create_rejects_missing_required_fields():
    client = _client()
    response = client.post("/api/v1/bookings", json={"clientName": "Ana"})
    assert response.status_code == 422


def test_list_by_professional():
    client = _client()
    client.post("/api/v1/bookings", json={**BOOKING, "externalId": "a"})
    client.post("/api/v1/bookings", json={**BOOKING, "externalId": "b", "professionalId": "pro-2"})

    response = client.get("/api/v1/bookings/professional/pro-2")

    assert response.status_code == 200
    assert [b["externalId"] for b in response.json()] == ["b"]


def test_update_and_delete_round_through_local_fallback():
    client = _client()
    created = client.post("/api/v1/bookings", json=BOOKING).json()

    patched = client.patch(f"/api/v1/bookings/{created['id']}", json={"status": "accepted"})
    assert patched.status_code == 200
    assert patched.json()["status"] == "accepted"
    assert patched.json()["createdAt"] == created["createdAt"]

    assert client.patch("/api/v1/bookings/missing", json={"status": "accepted"}).status_code == 404
    assert client.patch(f"/api/v1/bookings/{created['id']}", json={"status": "maybe"}).status_code == 422

    assert client.delete(f"/api/v1/bookings/{created['id']}").status_code == 204
    assert client.delete(f"/api/v1/bookings/{created['id']}").status_code == 404


def test_remote_booking_is_not_pending_sync():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            201,
            json={**BOOKING, "id": 99, "externalId": "ext-x", "status": "pending", "createdAt": "2024-03-01T10:30:00Z"},
        )

    client = _client(handler)
    data = client.post("/api/v1/bookings", json=BOOKING).json()
    assert data["id"] == "99"
    assert data["source"] == "remote"
    assert data["pendingSync"] is False


def test_clear_local_bookings():
    client = _client()
    client.post("/api/v1/bookings", json=BOOKING)

    assert client.delete("/api/v1/local-bookings").status_code == 204
    assert client.get("/api/v1/bookings").json() == []


def test_booking_with_id_local_can_be_deleted():
    """A record whose id is literally "local" goes through the ordinary delete route."""
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(f"{request.method} {request.url.path}")
        return httpx.Response(204)

    client = _client(handler)
    assert client.delete("/api/v1/bookings/local").status_code == 204
    assert seen == ["DELETE /api/bookings/local"]


def test_format_time_route():
    client = TestClient(app)

    data = client.get("/api/v1/times/format", params={"time": "13:05", "preference": "12"}).json()
    assert data == {"time": "13:05", "formatted": "1:05 PM", "recognized": True}

    data = client.get("/api/v1/times/format", params={"time": "lunch", "preference": "24"}).json()
    assert data == {"time": "lunch", "formatted": "lunch", "recognized": False}


def test_time_options_route():
    client = TestClient(app)

    data = client.get(
        "/api/v1/times/options",
        params={"preference": "24", "start_hour": 9, "end_hour": 10, "interval_minutes": 30},
    ).json()
    assert data == {"preference": "24", "options": ["09:00", "09:30", "10:00"]}

    bad = client.get("/api/v1/times/options", params={"start_hour": 12, "end_hour": 9})
    assert bad.status_code == 422


def test_validate_time_route():
    client = TestClient(app)

    data = client.get("/api/v1/times/validate", params={"time": "9:00 am", "preference": "12"}).json()
    assert data == {"time": "9:00 am", "preference": "12", "valid": True, "input_type": "text"}

    data = client.get("/api/v1/times/validate", params={"time": "9:00", "preference": "24"}).json()
    assert data["valid"] is False
    assert data["input_type"] == "time"
