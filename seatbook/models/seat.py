import uuid
import enum
from sqlalchemy import Column, String, Integer, ForeignKey, DateTime, UniqueConstraint, Uuid, Enum as SAEnum
from sqlalchemy.orm import relationship
from seatbook.db.session import Base


class SeatSection(str, enum.Enum):
    MAIN = "MAIN"
    PARKETT = "PARKETT"  # main-floor variant kept for older seat maps
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    RANG = "RANG"  # upper tier


class SeatStatus(str, enum.Enum):
    AVAILABLE = "AVAILABLE"
    RESERVED = "RESERVED"  # no transition leads here yet
    BOOKED = "BOOKED"


class Seat(Base):
    __tablename__ = "seats"
    __table_args__ = (
        UniqueConstraint("event_id", "row", "section", "number", name="uq_seat_position"),
        # Free tickets store NULL here, and NULLs never collide
        UniqueConstraint("ticket_key", name="uq_seat_ticket_key"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    event_id = Column(Uuid, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    row = Column(String(5), nullable=False)
    number = Column(Integer, nullable=False)
    section = Column(SAEnum(SeatSection, native_enum=False), nullable=False, default=SeatSection.MAIN)
    status = Column(SAEnum(SeatStatus, native_enum=False), nullable=False, default=SeatStatus.AVAILABLE, index=True)

    # Set together, and only while status == BOOKED
    booking_id = Column(Uuid, ForeignKey("bookings.id", ondelete="SET NULL"), nullable=True, index=True)
    booked_by = Column(String(255), nullable=True)
    booked_at = Column(DateTime(timezone=True), nullable=True)
    ticket_number = Column(String(100), nullable=True, index=True)
    # ticket_number unless it is a free ticket; enforces store-wide uniqueness
    ticket_key = Column(String(100), nullable=True)

    event = relationship("Event", back_populates="seats")
    booking = relationship("Booking", back_populates="seats")

    @property
    def label(self) -> str:
        return f"{self.section.value} {self.row}{self.number}"
