from typing import Optional, List
from pydantic import BaseModel, UUID4
from datetime import datetime

from seatbook.models.seat import SeatSection, SeatStatus


class Seat(BaseModel):
    id: UUID4
    event_id: UUID4
    row: str
    number: int
    section: SeatSection
    status: SeatStatus
    booking_id: Optional[UUID4] = None
    booked_by: Optional[str] = None
    booked_at: Optional[datetime] = None
    ticket_number: Optional[str] = None

    class Config:
        from_attributes = True


# --- Seat map (grouped for rendering) ---

class SeatMapRow(BaseModel):
    section: SeatSection
    label: str
    aisle_after_seat: int = 0
    seats: List[Seat]
