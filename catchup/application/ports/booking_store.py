from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from catchup.domain.entities.booking_request import BookingDraft, BookingRequest


class BookingStorePort(ABC):
    """One tier of booking persistence (the upstream API or the local fallback)."""

    @abstractmethod
    def list_bookings(self) -> list[BookingRequest]:
        raise NotImplementedError

    @abstractmethod
    def create_booking(self, draft: BookingDraft, external_id: str, created_at: str) -> BookingRequest:
        """Persist a new booking. Returns the stored record with its id assigned."""
        raise NotImplementedError

    @abstractmethod
    def update_booking(self, booking_id: str, changes: dict[str, Any]) -> BookingRequest | None:
        """Apply partial changes. Returns None if no booking has this id."""
        raise NotImplementedError

    @abstractmethod
    def delete_booking(self, booking_id: str) -> bool:
        """Delete a booking. Returns True if it existed."""
        raise NotImplementedError


class LocalBookingStorePort(BookingStorePort):
    """The on-device tier, which can also be wiped."""

    @abstractmethod
    def clear(self) -> None:
        raise NotImplementedError
