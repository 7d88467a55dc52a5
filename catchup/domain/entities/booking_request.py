from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any


class BookingStatus(str, Enum):
    pending = "pending"
    accepted = "accepted"
    declined = "declined"
    rescheduled = "rescheduled"


class RecordSource(str, Enum):
    remote = "remote"
    local = "local"


# dataclass field name -> wire key (upstream API and local blob)
WIRE_KEYS: dict[str, str] = {
    "id": "id",
    "external_id": "externalId",
    "client_name": "clientName",
    "client_phone": "clientPhone",
    "service_name": "serviceName",
    "service_price": "servicePrice",
    "date": "date",
    "time": "time",
    "status": "status",
    "professional_id": "professionalId",
    "created_at": "createdAt",
    "notes": "notes",
    "updated_at": "updatedAt",
}

# Set once at creation, a merge never touches these
IMMUTABLE_FIELDS = frozenset({"id", "external_id", "created_at"})


@dataclass(frozen=True)
class BookingDraft:
    """A booking request as submitted by a caller, before an id is assigned."""

    client_name: str
    client_phone: str
    date: str
    time: str
    professional_id: str
    service_name: str | None = None
    service_price: str | int | float | None = None
    notes: str | None = None
    status: BookingStatus = BookingStatus.pending
    external_id: str | None = None

    def __post_init__(self) -> None:
        # Raises ValueError for a status outside BookingStatus
        object.__setattr__(self, "status", BookingStatus(self.status))


@dataclass(frozen=True)
class BookingRequest:
    id: str
    external_id: str
    client_name: str
    client_phone: str
    date: str
    time: str
    status: BookingStatus
    professional_id: str
    created_at: str
    service_name: str | None = None
    service_price: str | int | float | None = None
    notes: str | None = None
    updated_at: str | None = None
    # Where this copy came from; "local" means it has not reached the server
    source: RecordSource = field(default=RecordSource.remote, compare=False)

    @property
    def pending_sync(self) -> bool:
        return self.source == RecordSource.local

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the camelCase dict used on the wire and in local storage."""
        payload: dict[str, Any] = {}
        for name, key in WIRE_KEYS.items():
            value = getattr(self, name)
            if isinstance(value, Enum):
                value = value.value
            payload[key] = value
        return payload

    @classmethod
    def from_payload(cls, data: Any, source: RecordSource = RecordSource.remote) -> BookingRequest:
        """Build a record from a wire dict. Raises ValueError if the payload is malformed."""
        if not isinstance(data, dict):
            raise ValueError(f"Booking payload must be an object, got {type(data).__name__}")

        raw_id = data.get("id")
        if raw_id is None or str(raw_id) == "":
            raise ValueError("Booking payload has no id")

        try:
            status = BookingStatus(data.get("status") or BookingStatus.pending.value)
        except ValueError:
            raise ValueError(f"Unknown booking status: {data.get('status')!r}")

        return cls(
            id=str(raw_id),
            external_id=str(data.get("externalId") or ""),
            client_name=str(data.get("clientName") or ""),
            client_phone=str(data.get("clientPhone") or ""),
            date=str(data.get("date") or ""),
            time=str(data.get("time") or ""),
            status=status,
            professional_id=str(data.get("professionalId") or ""),
            created_at=str(data.get("createdAt") or ""),
            service_name=data.get("serviceName"),
            service_price=data.get("servicePrice"),
            notes=data.get("notes"),
            updated_at=data.get("updatedAt"),
            source=source,
        )

    def merged(self, changes: dict[str, Any]) -> BookingRequest:
        """Return a copy with `changes` applied.

        Keys may be dataclass field names or wire keys. Unknown keys and
        immutable fields are ignored.
        """
        return replace(self, **normalize_changes(changes))


def draft_payload(draft: BookingDraft, external_id: str, created_at: str) -> dict[str, Any]:
    """Wire payload for a create call; the server assigns the id."""
    return {
        "externalId": external_id,
        "clientName": draft.client_name,
        "clientPhone": draft.client_phone,
        "serviceName": draft.service_name,
        "servicePrice": draft.service_price,
        "date": draft.date,
        "time": draft.time,
        "status": draft.status.value,
        "professionalId": draft.professional_id,
        "createdAt": created_at,
        "notes": draft.notes,
    }


def normalize_changes(changes: dict[str, Any]) -> dict[str, Any]:
    """Map partial-update keys to field names and coerce `status`.

    Unknown keys and immutable fields are dropped. Raises ValueError for a
    status outside BookingStatus.
    """
    by_wire_key = {key: name for name, key in WIRE_KEYS.items()}
    normalized: dict[str, Any] = {}
    for key, value in changes.items():
        name = key if key in WIRE_KEYS else by_wire_key.get(key)
        if name is None or name in IMMUTABLE_FIELDS:
            continue
        if name == "status":
            value = BookingStatus(value)
        normalized[name] = value
    return normalized
