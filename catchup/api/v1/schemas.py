from pydantic import BaseModel, ConfigDict, Field
from typing import Any

from catchup.application.utils.time_format import TimeFormat
from catchup.domain.entities.booking_request import BookingRequest, BookingStatus, RecordSource

NULLABLE_UPDATE_FIELDS = frozenset({"service_name", "service_price", "notes"})


class BookingCreateSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    client_name: str = Field(alias="clientName", min_length=1)
    client_phone: str = Field(alias="clientPhone", min_length=1)
    date: str
    time: str
    professional_id: str = Field(alias="professionalId", min_length=1)
    service_name: str | None = Field(default=None, alias="serviceName")
    service_price: str | int | float | None = Field(default=None, alias="servicePrice")
    notes: str | None = None
    status: BookingStatus = BookingStatus.pending
    external_id: str | None = Field(default=None, alias="externalId")


class BookingUpdateSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    client_name: str | None = Field(default=None, alias="clientName")
    client_phone: str | None = Field(default=None, alias="clientPhone")
    date: str | None = None
    time: str | None = None
    professional_id: str | None = Field(default=None, alias="professionalId")
    service_name: str | None = Field(default=None, alias="serviceName")
    service_price: str | int | float | None = Field(default=None, alias="servicePrice")
    notes: str | None = None
    status: BookingStatus | None = None

    def changes(self) -> dict[str, Any]:
        # Only the optional descriptive fields may be cleared with an explicit null
        return {
            key: value
            for key, value in self.model_dump(exclude_unset=True).items()
            if value is not None or key in NULLABLE_UPDATE_FIELDS
        }


class BookingResponseSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    external_id: str = Field(alias="externalId")
    client_name: str = Field(alias="clientName")
    client_phone: str = Field(alias="clientPhone")
    service_name: str | None = Field(default=None, alias="serviceName")
    service_price: str | int | float | None = Field(default=None, alias="servicePrice")
    date: str
    time: str
    status: BookingStatus
    professional_id: str = Field(alias="professionalId")
    created_at: str = Field(alias="createdAt")
    notes: str | None = None
    updated_at: str | None = Field(default=None, alias="updatedAt")
    source: RecordSource
    pending_sync: bool = Field(alias="pendingSync")

    @classmethod
    def from_booking(cls, booking: BookingRequest) -> "BookingResponseSchema":
        return cls(
            id=booking.id,
            external_id=booking.external_id,
            client_name=booking.client_name,
            client_phone=booking.client_phone,
            service_name=booking.service_name,
            service_price=booking.service_price,
            date=booking.date,
            time=booking.time,
            status=booking.status,
            professional_id=booking.professional_id,
            created_at=booking.created_at,
            notes=booking.notes,
            updated_at=booking.updated_at,
            source=booking.source,
            pending_sync=booking.pending_sync,
        )


class FormattedTimeSchema(BaseModel):
    time: str
    formatted: str
    recognized: bool


class TimeOptionsSchema(BaseModel):
    preference: TimeFormat
    options: list[str]


class TimeValidationSchema(BaseModel):
    time: str
    preference: TimeFormat
    valid: bool
    input_type: str
