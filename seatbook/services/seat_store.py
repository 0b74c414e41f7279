from datetime import datetime
from typing import Iterable, List, Sequence
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from seatbook.models.seat import Seat, SeatStatus
from seatbook.services.layout import SeatSpec
from seatbook.utils.tickets import is_free_ticket


class SeatStore:
    """
    Seat persistence for one session (and therefore one transaction).

    Status changes go through `mark_booked`, which only writes if the seat is
    still AVAILABLE at the moment of the UPDATE.
    """

    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def _seat_order():
        # length first so that Z sorts before AA
        return (func.length(Seat.row), Seat.row, Seat.number, Seat.section)

    def list_for_event(self, event_id: UUID) -> List[Seat]:
        return (
            self.db.query(Seat)
            .filter(Seat.event_id == event_id)
            .order_by(*self._seat_order())
            .all()
        )

    def get_for_event(self, event_id: UUID, seat_ids: Sequence[UUID]) -> List[Seat]:
        """Seats with the given ids that belong to `event_id`; missing ids are simply absent."""
        if not seat_ids:
            return []
        return (
            self.db.query(Seat)
            .filter(Seat.event_id == event_id, Seat.id.in_(list(seat_ids)))
            .all()
        )

    def find_ticket_numbers(self, ticket_numbers: Iterable[str]) -> List[str]:
        """Which of `ticket_numbers` are already on some seat, across all events."""
        wanted = list(dict.fromkeys(ticket_numbers))
        if not wanted:
            return []
        rows = (
            self.db.query(Seat.ticket_key)
            .filter(Seat.ticket_key.in_(wanted))
            .distinct()
            .all()
        )
        taken = {r.ticket_key for r in rows}
        return [t for t in wanted if t in taken]

    def mark_booked(
        self,
        seat_id: UUID,
        event_id: UUID,
        *,
        booking_id: UUID,
        booked_by: str,
        booked_at: datetime,
        ticket_number: str,
    ) -> bool:
        """
        AVAILABLE -> BOOKED for one seat, guarded by the current status.

        Returns False when no row matched, i.e. somebody else claimed the seat
        after it was read. That is for the caller to act on, not an error here.
        """
        matched = (
            self.db.query(Seat)
            .filter(
                Seat.id == seat_id,
                Seat.event_id == event_id,
                Seat.status == SeatStatus.AVAILABLE,
            )
            .update(
                {
                    "status": SeatStatus.BOOKED,
                    "booking_id": booking_id,
                    "booked_by": booked_by,
                    "booked_at": booked_at,
                    "ticket_number": ticket_number,
                    "ticket_key": None if is_free_ticket(ticket_number) else ticket_number,
                },
                # plain UPDATE so rowcount is the number of matched rows
                synchronize_session=False,
            )
        )
        return matched == 1

    def add_layout(self, event_id: UUID, specs: Iterable[SeatSpec]) -> int:
        seats = [
            Seat(
                event_id=event_id,
                row=spec.row,
                number=spec.number,
                section=spec.section,
                status=spec.status,
            )
            for spec in specs
        ]
        self.db.add_all(seats)
        return len(seats)

    def count_for_event(self, event_id: UUID) -> int:
        return self.db.query(Seat).filter(Seat.event_id == event_id).count()

    def clear_event(self, event_id: UUID) -> int:
        """
        Delete the event's seats that are still AVAILABLE.

        Returns the number deleted. Booked seats are never removed here; a
        caller that expected to clear the whole grid compares the result with
        `count_for_event`.
        """
        return (
            self.db.query(Seat)
            .filter(Seat.event_id == event_id, Seat.status == SeatStatus.AVAILABLE)
            .delete(synchronize_session="fetch")
        )
