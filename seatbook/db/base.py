from seatbook.db.session import Base
from seatbook.models.event import Event, LayoutType
from seatbook.models.seat import Seat, SeatSection, SeatStatus
from seatbook.models.booking import Booking
