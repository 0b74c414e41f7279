import logging
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from seatbook.core.exceptions import (
    BookingError,
    ConflictError,
    InternalError,
    InvalidRequestError,
    NotFoundError,
)
from seatbook.models.booking import Booking
from seatbook.models.event import Event, LayoutType
from seatbook.models.seat import Seat, SeatStatus
from seatbook.schemas.event import EventCreate, EventUpdate
from seatbook.services.layout import (
    FlexibleLayout,
    GeneratedLayout,
    LayoutConfig,
    LegacyLayout,
    RowGroup,
    generate_layout,
)
from seatbook.services.seat_store import SeatStore

logger = logging.getLogger(__name__)

LAYOUT_FIELDS = (
    "layout_type",
    "left_rows",
    "left_cols",
    "right_rows",
    "right_cols",
    "row_groups",
    "back_rows",
    "back_cols",
    "back_aisle_after_seat",
)

# Fields a PATCH may clear by sending null; for the rest null means "leave as is"
NULLABLE_FIELDS = ("description", "image_url", "row_groups")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _row_group(value: Any) -> RowGroup:
    if isinstance(value, dict):
        return RowGroup(
            row_count=value.get("row_count", 0),
            seats_per_row=value.get("seats_per_row", 0),
            aisle_after_seat=value.get("aisle_after_seat", 0) or 0,
        )
    return RowGroup(
        row_count=value.row_count,
        seats_per_row=value.seats_per_row,
        aisle_after_seat=value.aisle_after_seat or 0,
    )


def layout_config(source: Any) -> LayoutConfig:
    """Build the generator input from an Event row or an EventCreate payload."""
    if source.layout_type == LayoutType.FLEXIBLE:
        if not source.row_groups:
            raise InvalidRequestError("row_groups is required for a FLEXIBLE layout")
        return FlexibleLayout(
            row_groups=[_row_group(g) for g in source.row_groups],
            back_rows=source.back_rows or 0,
            back_cols=source.back_cols or 0,
            back_aisle_after_seat=source.back_aisle_after_seat or 0,
        )
    return LegacyLayout(
        left_rows=source.left_rows or 0,
        left_cols=source.left_cols or 0,
        right_rows=source.right_rows or 0,
        right_cols=source.right_cols or 0,
        back_rows=source.back_rows or 0,
        back_cols=source.back_cols or 0,
        back_aisle_after_seat=source.back_aisle_after_seat or 0,
    )


def _generate(source: Any) -> GeneratedLayout:
    try:
        generated = generate_layout(layout_config(source))
    except ValueError as exc:
        raise InvalidRequestError(str(exc)) from exc
    if generated.total_seats <= 0:
        raise InvalidRequestError("Layout must contain at least one seat")
    return generated


def _dump_row_groups(row_groups) -> Optional[List[Dict[str, int]]]:
    if row_groups is None:
        return None
    return [
        {
            "row_count": g.row_count,
            "seats_per_row": g.seats_per_row,
            "aisle_after_seat": g.aisle_after_seat,
        }
        for g in (_row_group(g) for g in row_groups)
    ]


# ---------------------------------------------------------------------------
# Event directory
# ---------------------------------------------------------------------------


def create_event(db: Session, data: EventCreate) -> Event:
    """Create an event and its whole seat grid in one transaction."""
    generated = _generate(data)

    event = Event(
        **data.model_dump(exclude={"row_groups"}),
        row_groups=_dump_row_groups(data.row_groups),
        total_seats=generated.total_seats,
    )
    try:
        db.add(event)
        db.flush()  # get event.id
        SeatStore(db).add_layout(event.id, generated.seats)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Error creating event %r", data.title)
        raise InternalError("Failed to create event") from exc

    db.refresh(event)
    logger.info(
        "Created event %s (%s) with %d seats", event.id, event.title, event.total_seats
    )
    return event


def get_event(db: Session, event_id: UUID) -> Event:
    event = db.query(Event).filter(Event.id == event_id).first()
    if not event:
        raise NotFoundError("Event not found")
    return event


def list_events(db: Session) -> List[Tuple[Event, Dict[SeatStatus, int]]]:
    """All events by date, each with its seat counts per status."""
    events = db.query(Event).order_by(Event.date.asc()).all()

    counts: Dict[UUID, Dict[SeatStatus, int]] = {
        e.id: {status: 0 for status in SeatStatus} for e in events
    }
    rows = (
        db.query(Seat.event_id, Seat.status, func.count(Seat.id))
        .group_by(Seat.event_id, Seat.status)
        .all()
    )
    for event_id, status, count in rows:
        if event_id in counts:
            counts[event_id][status] = count

    return [(e, counts[e.id]) for e in events]


def list_event_seats(db: Session, event_id: UUID) -> List[Seat]:
    get_event(db, event_id)
    return SeatStore(db).list_for_event(event_id)


def row_aisles(event: Event) -> Dict[str, int]:
    """MAIN row label -> aisle position, as the seat map should draw it."""
    if event.layout_type != LayoutType.FLEXIBLE or not event.row_groups:
        return {}
    return generate_layout(layout_config(event)).row_aisles


def update_event(db: Session, event_id: UUID, data: EventUpdate) -> Event:
    """
    Apply a partial update.

    Metadata changes never touch seats. A change to any layout field rebuilds
    the seat grid from scratch, which is only allowed while nothing has been
    booked for the event.
    """
    event = get_event(db, event_id)
    changes = {
        field: value
        for field, value in data.model_dump(exclude_unset=True).items()
        if value is not None or field in NULLABLE_FIELDS
    }
    if "row_groups" in changes:
        changes["row_groups"] = _dump_row_groups(data.row_groups)

    layout_changed = any(
        field in changes and changes[field] != getattr(event, field)
        for field in LAYOUT_FIELDS
    )

    try:
        for field, value in changes.items():
            setattr(event, field, value)

        if layout_changed:
            has_bookings = (
                db.query(Booking.id).filter(Booking.event_id == event_id).first() is not None
            )
            if has_bookings:
                raise ConflictError(
                    "Seat layout cannot be changed after seats have been booked"
                )

            generated = _generate(event)
            store = SeatStore(db)
            existing = store.count_for_event(event_id)
            removed = store.clear_event(event_id)
            if removed != existing:
                # A booking committed after the check above
                raise ConflictError(
                    "Seat layout cannot be changed after seats have been booked"
                )
            store.add_layout(event_id, generated.seats)
            event.total_seats = generated.total_seats
            logger.info(
                "Regenerated seats for event %s: %d removed, %d created",
                event_id, removed, generated.total_seats,
            )

        db.commit()
    except BookingError:
        db.rollback()
        raise
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Error updating event %s", event_id)
        raise InternalError("Failed to update event") from exc

    db.refresh(event)
    return event


def delete_event(db: Session, event_id: UUID) -> None:
    """Delete an event; its seats and bookings go with it."""
    event = get_event(db, event_id)
    try:
        db.delete(event)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Error deleting event %s", event_id)
        raise InternalError("Failed to delete event") from exc
    logger.info("Deleted event %s", event_id)
