from uuid import UUID
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session, selectinload

from seatbook.db.session import get_db
from seatbook.models.booking import Booking
from seatbook.schemas.booking import BookingDetail
from seatbook.schemas.common import DeletedResponse
from seatbook.schemas.event import Event as EventSchema, EventCreate, EventUpdate
from seatbook.services import events as event_directory

router = APIRouter(prefix="/admin/events", tags=["Admin - Events"])


# ---------------------------------------------------------------------------
# Event CRUD
# ---------------------------------------------------------------------------


@router.post("/", response_model=EventSchema, status_code=status.HTTP_201_CREATED)
def create_event(data: EventCreate, db: Session = Depends(get_db)):
    """
    Create an event. The seat grid is generated from the layout fields and
    stored together with the event; `total_seats` is computed, not supplied.
    """
    return event_directory.create_event(db, data)


@router.patch("/{event_id}", response_model=EventSchema)
def update_event(event_id: UUID, data: EventUpdate, db: Session = Depends(get_db)):
    """
    Update event fields. Changing the layout rebuilds the seats and is
    rejected with 409 once any booking exists.
    """
    return event_directory.update_event(db, event_id, data)


@router.delete("/{event_id}", response_model=DeletedResponse, status_code=status.HTTP_200_OK)
def delete_event(event_id: UUID, db: Session = Depends(get_db)):
    event_directory.delete_event(db, event_id)
    return DeletedResponse(id=str(event_id), deleted=True)


# ---------------------------------------------------------------------------
# Bookings of an event (admin overview)
# ---------------------------------------------------------------------------


@router.get("/{event_id}/bookings", response_model=List[BookingDetail])
def list_event_bookings(event_id: UUID, db: Session = Depends(get_db)):
    """All bookings of an event, newest first, each with its seats."""
    event_directory.get_event(db, event_id)
    return (
        db.query(Booking)
        .options(selectinload(Booking.seats))
        .filter(Booking.event_id == event_id)
        .order_by(Booking.created_at.desc())
        .all()
    )
