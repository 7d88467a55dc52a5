from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Callable

import httpx

from catchup.application.exceptions import BookingSaveError, LocalStorageError, RemoteStoreError
from catchup.application.ports.booking_store import BookingStorePort, LocalBookingStorePort
from catchup.domain.entities.booking_request import BookingDraft, BookingRequest, normalize_changes

# Failures of the remote tier that mean "use the local copy instead"
REMOTE_FAILURES = (RemoteStoreError, httpx.HTTPError)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ResilientBookingStore:
    """Booking CRUD that prefers the remote API and falls back to local storage.

    The two tiers are alternatives, never merged: the remote result is used
    whenever the remote call succeeds, the local collection only when it fails.
    Returned records carry `source` so callers can tell a server copy from one
    still pending sync.
    """

    def __init__(
        self,
        remote: BookingStorePort,
        local: LocalBookingStorePort,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._remote = remote
        self._local = local
        self._clock = clock or _utc_now
        self._logger = logging.getLogger(__name__)

    def _fallback(self, operation: str, error: Exception, **context: Any) -> None:
        self._logger.warning(
            "Bookings API unavailable, using local storage",
            extra={"operation": operation, "error": str(error), **context},
        )

    def _local_bookings(self) -> list[BookingRequest]:
        try:
            return self._local.list_bookings()
        except LocalStorageError as e:
            self._logger.error("Failed to read local bookings", extra={"error": str(e)})
            return []

    def get_all(self) -> list[BookingRequest]:
        try:
            return self._remote.list_bookings()
        except REMOTE_FAILURES as e:
            self._fallback("get_all", e)
        return self._local_bookings()

    def get_by_professional(self, professional_id: str) -> list[BookingRequest]:
        return [booking for booking in self.get_all() if booking.professional_id == professional_id]

    def add(self, draft: BookingDraft) -> BookingRequest:
        now = self._clock()
        external_id = draft.external_id or f"ext-{int(now.timestamp() * 1000)}-{uuid.uuid4().hex[:6]}"
        created_at = now.isoformat()

        try:
            return self._remote.create_booking(draft, external_id=external_id, created_at=created_at)
        except REMOTE_FAILURES as e:
            self._fallback("add", e, external_id=external_id)

        try:
            return self._local.create_booking(draft, external_id=external_id, created_at=created_at)
        except LocalStorageError as e:
            self._logger.error(
                "Failed to save booking",
                extra={"operation": "add", "external_id": external_id, "error": str(e)},
            )
            raise BookingSaveError("Failed to save booking request") from e

    def update(self, booking_id: str, changes: dict[str, Any]) -> BookingRequest | None:
        try:
            changes = normalize_changes(changes)
        except ValueError as e:
            self._logger.warning(
                "Rejected booking update",
                extra={"operation": "update", "booking_id": booking_id, "error": str(e)},
            )
            return None

        try:
            return self._remote.update_booking(booking_id, changes)
        except REMOTE_FAILURES as e:
            self._fallback("update", e, booking_id=booking_id)

        try:
            updated = self._local.update_booking(booking_id, changes)
        except LocalStorageError as e:
            self._logger.error(
                "Failed to update booking",
                extra={"operation": "update", "booking_id": booking_id, "error": str(e)},
            )
            return None
        if updated is None:
            self._logger.info("No local booking to update", extra={"booking_id": booking_id})
        return updated

    def remove(self, booking_id: str) -> bool:
        try:
            return self._remote.delete_booking(booking_id)
        except REMOTE_FAILURES as e:
            self._fallback("remove", e, booking_id=booking_id)

        try:
            return self._local.delete_booking(booking_id)
        except LocalStorageError as e:
            self._logger.error(
                "Failed to delete booking",
                extra={"operation": "remove", "booking_id": booking_id, "error": str(e)},
            )
            return False

    def clear_all(self) -> None:
        """Erase the local collection. The remote API is not touched."""
        try:
            self._local.clear()
        except LocalStorageError as e:
            self._logger.error("Failed to clear local bookings", extra={"operation": "clear_all", "error": str(e)})
            return
        self._logger.info("Local bookings cleared")
