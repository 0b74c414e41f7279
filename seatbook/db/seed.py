import logging
from datetime import datetime

from seatbook.core.config import configure_logging, settings
from seatbook.db.session import Database
from seatbook.models.event import Event
from seatbook.schemas.event import EventCreate
from seatbook.services.events import create_event

logger = logging.getLogger(__name__)

SAMPLE_EVENTS = [
    EventCreate(
        title="Summer Music Festival",
        description="Join us for an amazing evening of live music featuring local and international artists.",
        venue="Central Park Amphitheater",
        date=datetime(2026, 7, 15, 19, 0),
        left_rows=6, left_cols=10, right_rows=6, right_cols=10,
    ),
    EventCreate(
        title="Comedy Night Special",
        description="Laugh out loud with our lineup of top comedians.",
        venue="Downtown Comedy Club",
        date=datetime(2026, 3, 20, 20, 0),
        left_rows=5, left_cols=9, right_rows=5, right_cols=9,
    ),
    EventCreate(
        title="Classical Orchestra Performance",
        description="Experience the beauty of classical music performed by the City Symphony Orchestra.",
        venue="Grand Concert Hall",
        date=datetime(2026, 4, 10, 18, 30),
        left_rows=6, left_cols=12, right_rows=7, right_cols=13,
    ),
]


def seed(database: Database) -> int:
    """Replace all events with the sample set. Returns the number of seats created."""
    database.create_all()
    db = database.session()
    try:
        # Seats and bookings cascade with their event
        for event in db.query(Event).all():
            db.delete(event)
        db.commit()

        total = 0
        for data in SAMPLE_EVENTS:
            event = create_event(db, data)
            logger.info("Created event: %s (%d seats)", event.title, event.total_seats)
            total += event.total_seats
        return total
    finally:
        db.close()


if __name__ == "__main__":
    configure_logging(settings.LOG_LEVEL)
    database = Database(settings.DATABASE_URL)
    try:
        seats = seed(database)
        logger.info("Seeding completed: %d seats", seats)
    finally:
        database.dispose()
