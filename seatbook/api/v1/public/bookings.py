from typing import Union
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session, selectinload

from seatbook.api.deps import get_booking_engine
from seatbook.core.exceptions import NotFoundError
from seatbook.db.session import get_db
from seatbook.models.booking import Booking
from seatbook.schemas.booking import (
    BookingCreate,
    BookingCreateResponse,
    BookingDetail,
    Booking as BookingSchema,
)
from seatbook.schemas.common import ErrorResponse, SeatsUnavailableError, TicketNumbersTakenError
from seatbook.schemas.seat import Seat as SeatSchema
from seatbook.services.booking_engine import BookingEngine

router = APIRouter(prefix="/bookings", tags=["Bookings"])


# ---------------------------------------------------------------------------
# POST /bookings: book one or more seats
# ---------------------------------------------------------------------------


@router.post(
    "/",
    response_model=BookingCreateResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": SeatsUnavailableError},
        409: {"model": Union[SeatsUnavailableError, TicketNumbersTakenError]},
    },
)
def create_booking(
    data: BookingCreate,
    engine: BookingEngine = Depends(get_booking_engine),
):
    """
    Book seats of one event for a customer, recorded by a seller.

    - `ticket_numbers[i]` is stored on `seat_ids[i]`.
    - Ticket numbers must be unique across all events, except "Freikarte"
      (any case/spacing), which may repeat.
    - All seats are booked or none: if any seat is taken, nothing is saved
      and the response is 409. Refresh the seat map and choose again.
    """
    result = engine.book_seats(
        event_id=data.event_id,
        seat_ids=data.seat_ids,
        customer_first_name=data.customer_first_name,
        customer_last_name=data.customer_last_name,
        seller_first_name=data.seller_first_name,
        seller_last_name=data.seller_last_name,
        ticket_numbers=data.ticket_numbers,
    )
    return BookingCreateResponse(
        booking=BookingSchema.model_validate(result.booking),
        seats=[SeatSchema.model_validate(s) for s in result.seats],
    )


# ---------------------------------------------------------------------------
# GET /bookings/{id}
# ---------------------------------------------------------------------------


@router.get("/{booking_id}", response_model=BookingDetail)
def get_booking(booking_id: UUID, db: Session = Depends(get_db)):
    booking = (
        db.query(Booking)
        .options(selectinload(Booking.seats))
        .filter(Booking.id == booking_id)
        .first()
    )
    if not booking:
        raise NotFoundError("Booking not found")
    return booking
