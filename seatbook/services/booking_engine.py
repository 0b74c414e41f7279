"""
Seat booking.

A booking claims one or more seats of a single event in one transaction. The
seats are re-read inside the transaction, but what actually prevents double
booking is the guarded UPDATE in `SeatStore.mark_booked`: a seat only flips to
BOOKED if it is still AVAILABLE when the write happens. If any seat of the
request loses that race the whole transaction is rolled back, so a booking is
either complete or absent. Ticket numbers are backed the same way: the
unique `ticket_key` column rejects a number another booking committed after
the read-time check.

Nothing here retries. Callers get a typed `BookingError` and decide whether to
refresh the seat map and try again.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, List, Sequence
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from seatbook.core.exceptions import (
    BookingError,
    ConflictError,
    InternalError,
    InvalidRequestError,
    NotFoundError,
)
from seatbook.models.booking import Booking
from seatbook.models.event import Event
from seatbook.models.seat import Seat, SeatStatus
from seatbook.services.seat_store import SeatStore
from seatbook.utils.tickets import find_duplicates, unique_ticket_numbers

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BookingRequest:
    event_id: UUID
    seat_ids: List[UUID]
    customer_first_name: str
    customer_last_name: str
    seller_first_name: str
    seller_last_name: str
    ticket_numbers: List[str]

    @property
    def booked_by(self) -> str:
        return f"{self.customer_first_name} {self.customer_last_name}"


@dataclass
class BookingResult:
    booking: Booking
    seats: List[Seat]


def _as_uuid(value: Any, field: str) -> UUID:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        raise InvalidRequestError(f"{field} must be a valid id, got {value!r}") from None


def _required_name(value: Any, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidRequestError(
            "Missing required fields: customer and seller names are required"
            f" ({field} is empty)"
        )
    return value.strip()


def validate_booking_request(
    event_id: Any,
    seat_ids: Any,
    customer_first_name: Any,
    customer_last_name: Any,
    seller_first_name: Any,
    seller_last_name: Any,
    ticket_numbers: Any,
) -> BookingRequest:
    """
    Shape checks that need no I/O. Raises InvalidRequestError on the first
    problem found, including duplicate ticket numbers within the request.
    """
    if event_id is None or (isinstance(event_id, str) and not event_id.strip()):
        raise InvalidRequestError("Missing required field: event_id")
    event_uuid = _as_uuid(event_id, "event_id")

    if not isinstance(seat_ids, (list, tuple)) or len(seat_ids) == 0:
        raise InvalidRequestError("Missing required field: seat_ids must be a non-empty array")
    seat_uuids = [_as_uuid(s, "seat_ids") for s in seat_ids]
    if len(set(seat_uuids)) != len(seat_uuids):
        raise InvalidRequestError("seat_ids must not contain the same seat twice")

    names = [
        _required_name(customer_first_name, "customer_first_name"),
        _required_name(customer_last_name, "customer_last_name"),
        _required_name(seller_first_name, "seller_first_name"),
        _required_name(seller_last_name, "seller_last_name"),
    ]

    if not isinstance(ticket_numbers, (list, tuple)) or len(ticket_numbers) == 0:
        raise InvalidRequestError("Missing required field: ticket_numbers must be a non-empty array")
    if any(not isinstance(t, str) or not t.strip() for t in ticket_numbers):
        raise InvalidRequestError("ticket_numbers must not contain empty values")
    if len(ticket_numbers) != len(seat_uuids):
        raise InvalidRequestError(
            f"ticket_numbers has {len(ticket_numbers)} entries but {len(seat_uuids)} seats were requested"
        )
    tickets = [t.strip() for t in ticket_numbers]

    duplicates = find_duplicates(tickets)
    if duplicates:
        raise InvalidRequestError(
            f"Duplicate ticket numbers in request: {', '.join(duplicates)}",
            ticket_numbers=duplicates,
        )

    return BookingRequest(
        event_id=event_uuid,
        seat_ids=seat_uuids,
        customer_first_name=names[0],
        customer_last_name=names[1],
        seller_first_name=names[2],
        seller_last_name=names[3],
        ticket_numbers=tickets,
    )


class BookingEngine:
    def __init__(self, db: Session):
        self.db = db
        self.seats = SeatStore(db)

    def list_seats(self, event_id: UUID) -> List[Seat]:
        """Current seats of an event, ordered by row then number."""
        if self.db.get(Event, event_id) is None:
            raise NotFoundError("Event not found")
        return self.seats.list_for_event(event_id)

    def book_seats(
        self,
        event_id: Any,
        seat_ids: Sequence[Any],
        customer_first_name: str,
        customer_last_name: str,
        seller_first_name: str,
        seller_last_name: str,
        ticket_numbers: Sequence[str],
    ) -> BookingResult:
        request = validate_booking_request(
            event_id,
            seat_ids,
            customer_first_name,
            customer_last_name,
            seller_first_name,
            seller_last_name,
            ticket_numbers,
        )

        try:
            booking = self._claim(request)
            self.db.commit()
        except BookingError as exc:
            self.db.rollback()
            logger.info("Booking rejected for event %s: %s", request.event_id, exc.message)
            raise
        except IntegrityError as exc:
            # The unique ticket key caught a ticket number committed by
            # another booking after our check
            self.db.rollback()
            taken = self.seats.find_ticket_numbers(unique_ticket_numbers(request.ticket_numbers))
            if not taken:
                logger.exception("Error creating booking for event %s", request.event_id)
                raise InternalError("Failed to create booking") from exc
            logger.info(
                "Booking rejected for event %s: ticket numbers taken concurrently: %s",
                request.event_id, ", ".join(taken),
            )
            raise ConflictError(
                f"Ticket numbers already in use: {', '.join(taken)}",
                ticket_numbers=taken,
            ) from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception(
                "Error creating booking for event %s (seats=%s)",
                request.event_id,
                [str(s) for s in request.seat_ids],
            )
            raise InternalError("Failed to create booking") from exc

        self.db.refresh(booking)
        by_id = {s.id: s for s in self.seats.get_for_event(request.event_id, request.seat_ids)}
        seats = [by_id[seat_id] for seat_id in request.seat_ids]
        logger.info(
            "Booking %s created for event %s: %d seat(s) for %s",
            booking.id, request.event_id, len(seats), request.booked_by,
        )
        return BookingResult(booking=booking, seats=seats)

    def _claim(self, request: BookingRequest) -> Booking:
        seats = self.seats.get_for_event(request.event_id, request.seat_ids)
        if len(seats) < len(request.seat_ids):
            found = {s.id for s in seats}
            missing = [str(s) for s in request.seat_ids if s not in found]
            raise NotFoundError("Some seats were not found", seat_ids=missing)

        unavailable = [s for s in seats if s.status != SeatStatus.AVAILABLE]
        if unavailable:
            raise ConflictError(
                "Some seats are no longer available: "
                + ", ".join(s.label for s in unavailable),
                seat_ids=[str(s.id) for s in unavailable],
            )

        taken = self.seats.find_ticket_numbers(unique_ticket_numbers(request.ticket_numbers))
        if taken:
            raise ConflictError(
                f"Ticket numbers already in use: {', '.join(taken)}",
                ticket_numbers=taken,
            )

        booking = Booking(
            event_id=request.event_id,
            customer_first_name=request.customer_first_name,
            customer_last_name=request.customer_last_name,
            seller_first_name=request.seller_first_name,
            seller_last_name=request.seller_last_name,
        )
        self.db.add(booking)
        self.db.flush()  # get booking.id

        now = datetime.now(timezone.utc)
        for seat_id, ticket_number in zip(request.seat_ids, request.ticket_numbers):
            claimed = self.seats.mark_booked(
                seat_id,
                request.event_id,
                booking_id=booking.id,
                booked_by=request.booked_by,
                booked_at=now,
                ticket_number=ticket_number,
            )
            if not claimed:
                # Another transaction booked it between our read and this write
                raise ConflictError(
                    "Some seats are no longer available",
                    seat_ids=[str(seat_id)],
                )

        return booking
