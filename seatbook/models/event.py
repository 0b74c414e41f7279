import uuid
import enum
from sqlalchemy import Column, String, DateTime, func, Text, Integer, JSON, Uuid, Enum as SAEnum
from sqlalchemy.orm import relationship
from seatbook.db.session import Base


class LayoutType(str, enum.Enum):
    LEGACY = "LEGACY"      # side-by-side LEFT/RIGHT blocks
    FLEXIBLE = "FLEXIBLE"  # one MAIN block built from row groups


class Event(Base):
    __tablename__ = "events"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    venue = Column(String(255), nullable=False)
    date = Column(DateTime(timezone=True), nullable=False, index=True)
    image_url = Column(Text, nullable=True)
    total_seats = Column(Integer, nullable=False, default=0)  # cached at generation time

    # Layout configuration
    layout_type = Column(SAEnum(LayoutType, native_enum=False), nullable=False, default=LayoutType.LEGACY)
    left_rows = Column(Integer, nullable=False, default=0)
    left_cols = Column(Integer, nullable=False, default=0)
    right_rows = Column(Integer, nullable=False, default=0)
    right_cols = Column(Integer, nullable=False, default=0)
    row_groups = Column(JSON, nullable=True)  # [{row_count, seats_per_row, aisle_after_seat}, ...]
    back_rows = Column(Integer, nullable=False, default=0)
    back_cols = Column(Integer, nullable=False, default=0)
    back_aisle_after_seat = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)

    # Relationships
    seats = relationship("Seat", back_populates="event", cascade="all, delete-orphan", passive_deletes=True)
    bookings = relationship("Booking", back_populates="event", cascade="all, delete-orphan", passive_deletes=True)
