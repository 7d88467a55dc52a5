from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable

from catchup.application.ports.booking_store import LocalBookingStorePort
from catchup.application.ports.local_storage import LocalStoragePort
from catchup.domain.entities.booking_request import (
    BookingDraft,
    BookingRequest,
    RecordSource,
)

SCHEMA_VERSION = 1


@dataclass
class _Collection:
    records: list[BookingRequest]
    revision: int
    schema_version: int


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _is_count(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def epoch_ms(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


class LocalBookingStore(LocalBookingStorePort):
    """The whole booking collection as one JSON blob under a single storage key.

    Every mutation reads the full collection, applies the change and writes the
    full collection back. Writers in this process are serialized by a lock;
    writers in other processes are last-write-wins, which the `revision`
    counter makes visible.
    """

    def __init__(
        self,
        storage: LocalStoragePort,
        key: str = "app_booking_requests",
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._storage = storage
        self._key = key
        self._clock = clock or _utc_now
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    @property
    def revision(self) -> int:
        return self._load().revision

    def _load(self) -> _Collection:
        raw = self._storage.get_item(self._key)
        if not raw:
            return _Collection(records=[], revision=0, schema_version=SCHEMA_VERSION)

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            self._logger.error("Local booking collection is corrupted, reading as empty", extra={"error": str(e)})
            return _Collection(records=[], revision=0, schema_version=SCHEMA_VERSION)

        # Legacy clients stored a bare array with no envelope
        if isinstance(data, list):
            items, revision, schema_version = data, 0, 0
        elif isinstance(data, dict):
            items = data.get("records", [])
            revision = data.get("revision", 0)
            schema_version = data.get("schemaVersion", SCHEMA_VERSION)
            if not (isinstance(items, list) and _is_count(revision) and _is_count(schema_version)):
                self._logger.error("Local booking envelope has invalid fields, reading as empty")
                return _Collection(records=[], revision=0, schema_version=SCHEMA_VERSION)
        else:
            self._logger.error("Local booking collection has unexpected shape, reading as empty")
            return _Collection(records=[], revision=0, schema_version=SCHEMA_VERSION)

        records: list[BookingRequest] = []
        for item in items:
            try:
                records.append(BookingRequest.from_payload(item, source=RecordSource.local))
            except ValueError as e:
                self._logger.warning("Skipping malformed local booking", extra={"error": str(e)})
        return _Collection(records=records, revision=revision, schema_version=schema_version)

    def _save(self, collection: _Collection) -> None:
        """Write the whole collection back. Raises LocalStorageError on failure."""
        blob = {
            "schemaVersion": SCHEMA_VERSION,
            "revision": collection.revision + 1,
            "records": [record.to_payload() for record in collection.records],
        }
        self._storage.set_item(self._key, json.dumps(blob, ensure_ascii=False))
        collection.revision += 1
        collection.schema_version = SCHEMA_VERSION

    def _next_id(self, records: list[BookingRequest]) -> str:
        taken = {record.id for record in records}
        stamp = epoch_ms(self._clock())
        while f"local-{stamp}" in taken:
            stamp += 1
        return f"local-{stamp}"

    def list_bookings(self) -> list[BookingRequest]:
        return list(self._load().records)

    def create_booking(self, draft: BookingDraft, external_id: str, created_at: str) -> BookingRequest:
        with self._lock:
            collection = self._load()

            if external_id:
                for record in collection.records:
                    if record.external_id == external_id:
                        self._logger.info(
                            "Local booking already stored for submission",
                            extra={"booking_id": record.id, "external_id": external_id},
                        )
                        return record

            record = BookingRequest(
                id=self._next_id(collection.records),
                external_id=external_id,
                client_name=draft.client_name,
                client_phone=draft.client_phone,
                date=draft.date,
                time=draft.time,
                status=draft.status,
                professional_id=draft.professional_id,
                created_at=created_at,
                service_name=draft.service_name,
                service_price=draft.service_price,
                notes=draft.notes,
                source=RecordSource.local,
            )
            collection.records.append(record)
            self._save(collection)

        self._logger.info(
            "Booking saved locally",
            extra={"booking_id": record.id, "external_id": external_id, "source": RecordSource.local.value},
        )
        return record

    def update_booking(self, booking_id: str, changes: dict[str, Any]) -> BookingRequest | None:
        with self._lock:
            collection = self._load()
            for index, record in enumerate(collection.records):
                if record.id != booking_id:
                    continue
                stamped = dict(changes)
                if "updated_at" not in stamped and "updatedAt" not in stamped:
                    stamped["updated_at"] = self._clock().isoformat()
                updated = record.merged(stamped)
                collection.records[index] = updated
                self._save(collection)
                return updated
        return None

    def delete_booking(self, booking_id: str) -> bool:
        with self._lock:
            collection = self._load()
            remaining = [record for record in collection.records if record.id != booking_id]
            if len(remaining) == len(collection.records):
                return False
            collection.records = remaining
            self._save(collection)
        return True

    def clear(self) -> None:
        with self._lock:
            self._storage.remove_item(self._key)
