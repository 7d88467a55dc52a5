from __future__ import annotations

import logging
from enum import Enum
from typing import Any

import httpx

from catchup.application.exceptions import RemoteContractError, RemoteStoreError
from catchup.application.ports.booking_store import BookingStorePort
from catchup.core.config import settings
from catchup.domain.entities.booking_request import (
    WIRE_KEYS,
    BookingDraft,
    BookingRequest,
    RecordSource,
    draft_payload,
)


class RemoteBookingStore(BookingStorePort):
    """Client for the upstream bookings REST API.

    Every failure (transport error, timeout, non-2xx status, payload of the
    wrong shape) is raised as RemoteStoreError so callers can fall back.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._base_url = (base_url or settings.BOOKINGS_API_BASE_URL).rstrip("/")
        self._client = client or httpx.Client(
            timeout=timeout if timeout is not None else settings.BOOKINGS_API_TIMEOUT_SECONDS
        )
        self._logger = logging.getLogger(__name__)

    def _request(self, method: str, path: str, payload: dict[str, Any] | None = None) -> httpx.Response:
        url = f"{self._base_url}{path}"
        try:
            response = self._client.request(method, url, json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise RemoteStoreError(
                f"{method} {path} returned {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise RemoteStoreError(f"{method} {path} failed: {type(e).__name__}: {e}") from e
        return response

    def _json(self, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise RemoteContractError(f"Bookings API returned invalid JSON: {e}") from e

    def _to_record(self, data: Any) -> BookingRequest:
        try:
            return BookingRequest.from_payload(data, source=RecordSource.remote)
        except ValueError as e:
            raise RemoteContractError(str(e)) from e

    def list_bookings(self) -> list[BookingRequest]:
        data = self._json(self._request("GET", "/api/bookings"))
        if not isinstance(data, list):
            raise RemoteContractError(f"Expected a list of bookings, got {type(data).__name__}")
        return [self._to_record(item) for item in data]

    def create_booking(self, draft: BookingDraft, external_id: str, created_at: str) -> BookingRequest:
        payload = draft_payload(draft, external_id=external_id, created_at=created_at)
        record = self._to_record(self._json(self._request("POST", "/api/bookings", payload)))
        self._logger.info(
            "Booking saved remotely",
            extra={"booking_id": record.id, "external_id": external_id, "source": RecordSource.remote.value},
        )
        return record

    def update_booking(self, booking_id: str, changes: dict[str, Any]) -> BookingRequest | None:
        payload = _wire_changes(changes)
        return self._to_record(self._json(self._request("PATCH", f"/api/bookings/{booking_id}", payload)))

    def delete_booking(self, booking_id: str) -> bool:
        response = self._request("DELETE", f"/api/bookings/{booking_id}")
        # 204 carries no body; a JSON body may report {"success": false}
        if response.content:
            try:
                body = response.json()
            except ValueError:
                return True
            if isinstance(body, dict) and body.get("success") is False:
                raise RemoteContractError(f"Bookings API refused to delete {booking_id}")
        return True

    def close(self) -> None:
        self._client.close()


def _wire_changes(changes: dict[str, Any]) -> dict[str, Any]:
    payload: dict[str, Any] = {}
    for key, value in changes.items():
        wire_key = WIRE_KEYS.get(key, key)
        payload[wire_key] = value.value if isinstance(value, Enum) else value
    return payload
