from fastapi import Depends
from sqlalchemy.orm import Session

from seatbook.db.session import get_db
from seatbook.services.booking_engine import BookingEngine


def get_booking_engine(db: Session = Depends(get_db)) -> BookingEngine:
    return BookingEngine(db)
