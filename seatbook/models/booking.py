import uuid
from sqlalchemy import Column, String, DateTime, func, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from seatbook.db.session import Base
from seatbook.models.seat import Seat


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    event_id = Column(Uuid, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    customer_first_name = Column(String(100), nullable=False)
    customer_last_name = Column(String(100), nullable=False)
    seller_first_name = Column(String(100), nullable=False)
    seller_last_name = Column(String(100), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    event = relationship("Event", back_populates="bookings")
    # length first so that row Z sorts before AA
    seats = relationship(
        "Seat", back_populates="booking", order_by=[func.length(Seat.row), Seat.row, Seat.number]
    )
