from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response

from catchup.api.v1.schemas import BookingCreateSchema, BookingResponseSchema, BookingUpdateSchema
from catchup.application.exceptions import BookingSaveError
from catchup.application.use_cases.resilient_store import ResilientBookingStore
from catchup.core.config import settings
from catchup.domain.entities.booking_request import BookingDraft
from catchup.wiring.dependencies import get_booking_store

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/bookings", response_model=list[BookingResponseSchema])
def list_bookings(store: ResilientBookingStore = Depends(get_booking_store)):
    return [BookingResponseSchema.from_booking(b) for b in store.get_all()]


@router.get("/bookings/professional/{professional_id}", response_model=list[BookingResponseSchema])
def list_professional_bookings(
    professional_id: str,
    store: ResilientBookingStore = Depends(get_booking_store),
):
    return [BookingResponseSchema.from_booking(b) for b in store.get_by_professional(professional_id)]


@router.post("/bookings", response_model=BookingResponseSchema, status_code=201)
def create_booking(
    req: BookingCreateSchema,
    store: ResilientBookingStore = Depends(get_booking_store),
):
    draft = BookingDraft(**req.model_dump())
    try:
        booking = store.add(draft)
    except BookingSaveError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return BookingResponseSchema.from_booking(booking)


@router.delete("/local-bookings", status_code=204)
def clear_local_bookings(store: ResilientBookingStore = Depends(get_booking_store)) -> Response:
    if settings.ENV.lower() not in {"dev", "local", "test"}:
        raise HTTPException(status_code=403, detail="Clearing local bookings is only allowed in dev")
    store.clear_all()
    return Response(status_code=204)


@router.patch("/bookings/{booking_id}", response_model=BookingResponseSchema)
def update_booking(
    booking_id: str,
    req: BookingUpdateSchema,
    store: ResilientBookingStore = Depends(get_booking_store),
):
    booking = store.update(booking_id, req.changes())
    if booking is None:
        raise HTTPException(status_code=404, detail="Booking request not found")
    return BookingResponseSchema.from_booking(booking)


@router.delete("/bookings/{booking_id}", status_code=204)
def delete_booking(booking_id: str, store: ResilientBookingStore = Depends(get_booking_store)) -> Response:
    if not store.remove(booking_id):
        raise HTTPException(status_code=404, detail="Booking request not found")
    return Response(status_code=204)
