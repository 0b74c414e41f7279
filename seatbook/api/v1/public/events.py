from uuid import UUID
from typing import Dict, List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from seatbook.api.deps import get_booking_engine
from seatbook.db.session import get_db
from seatbook.models.event import Event
from seatbook.models.seat import Seat, SeatSection, SeatStatus
from seatbook.schemas.event import Event as EventSchema, EventDetail, EventListItem
from seatbook.schemas.seat import Seat as SeatSchema, SeatMapRow
from seatbook.services import events as event_directory
from seatbook.services.booking_engine import BookingEngine

router = APIRouter(prefix="/events", tags=["Events"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _build_seat_map(event: Event, seats: List[Seat], aisles: Dict[str, int]) -> List[SeatMapRow]:
    """Group ordered seats into rows per section, with the aisle each row should draw."""
    rows: Dict[tuple, SeatMapRow] = {}
    for section in SeatSection:
        for seat in seats:
            if seat.section != section:
                continue
            key = (section, seat.row)
            if key not in rows:
                if section == SeatSection.RANG:
                    aisle = event.back_aisle_after_seat
                elif section in (SeatSection.MAIN, SeatSection.PARKETT):
                    aisle = aisles.get(seat.row, 0)
                else:
                    aisle = 0
                rows[key] = SeatMapRow(section=section, label=seat.row, aisle_after_seat=aisle, seats=[])
            rows[key].seats.append(SeatSchema.model_validate(seat))
    return list(rows.values())


# ---------------------------------------------------------------------------
# GET /events: all events by date, with seat counts
# ---------------------------------------------------------------------------


@router.get("/", response_model=List[EventListItem])
def list_events(db: Session = Depends(get_db)):
    items = []
    for event, counts in event_directory.list_events(db):
        item = EventListItem.model_validate(event)
        item.booked_seats = counts[SeatStatus.BOOKED]
        item.available_seats = counts[SeatStatus.AVAILABLE]
        items.append(item)
    return items


# ---------------------------------------------------------------------------
# GET /events/{id}: event with its seat map
# ---------------------------------------------------------------------------


@router.get("/{event_id}", response_model=EventDetail)
def get_event(event_id: UUID, db: Session = Depends(get_db)):
    """
    Event detail with every seat, ordered by row then number.
    Clients poll this to refresh seat status.
    """
    event = event_directory.get_event(db, event_id)
    seats = event_directory.list_event_seats(db, event_id)
    aisles = event_directory.row_aisles(event)

    return EventDetail(
        **EventSchema.model_validate(event).model_dump(),
        seats=[SeatSchema.model_validate(s) for s in seats],
        row_aisles=aisles,
        seat_map=_build_seat_map(event, seats, aisles),
    )


# ---------------------------------------------------------------------------
# GET /events/{id}/seats
# ---------------------------------------------------------------------------


@router.get("/{event_id}/seats", response_model=List[SeatSchema])
def list_seats(event_id: UUID, engine: BookingEngine = Depends(get_booking_engine)):
    return engine.list_seats(event_id)
