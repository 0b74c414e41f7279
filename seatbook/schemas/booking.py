from typing import Optional, List
from pydantic import BaseModel, UUID4
from datetime import datetime

from seatbook.schemas.seat import Seat


# Booking: Create (POST /bookings)
# Fields are optional here: the booking engine rejects missing or blank ones
# with a readable message instead of a schema error.
class BookingCreate(BaseModel):
    event_id: Optional[UUID4] = None
    seat_ids: List[UUID4] = []
    customer_first_name: Optional[str] = None
    customer_last_name: Optional[str] = None
    seller_first_name: Optional[str] = None
    seller_last_name: Optional[str] = None
    ticket_numbers: List[str] = []


class Booking(BaseModel):
    id: UUID4
    event_id: UUID4
    customer_first_name: str
    customer_last_name: str
    seller_first_name: str
    seller_last_name: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# POST /bookings response
class BookingCreateResponse(BaseModel):
    booking: Booking
    seats: List[Seat]


# GET /bookings/{id}
class BookingDetail(Booking):
    seats: List[Seat] = []
