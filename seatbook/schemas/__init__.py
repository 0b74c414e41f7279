from seatbook.schemas.common import ErrorResponse, SeatsUnavailableError, TicketNumbersTakenError, DeletedResponse
from seatbook.schemas.seat import Seat, SeatMapRow
from seatbook.schemas.event import (
    RowGroup, EventCreate, EventUpdate, Event, EventListItem, EventDetail,
)
from seatbook.schemas.booking import (
    Booking, BookingCreate, BookingCreateResponse, BookingDetail,
)
