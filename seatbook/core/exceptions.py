from typing import List, Optional


class BookingError(Exception):
    """
    Base for every failure the seat/booking core reports to callers.

    `kind` is the stable machine-readable tag (validation, not_found,
    conflict, internal); `message` is safe to show to a user.
    """

    kind = "internal"
    status_code = 500

    def __init__(
        self,
        message: str,
        *,
        seat_ids: Optional[List[str]] = None,
        ticket_numbers: Optional[List[str]] = None,
    ):
        self.message = message
        self.seat_ids = seat_ids or []
        self.ticket_numbers = ticket_numbers or []
        super().__init__(message)


class InvalidRequestError(BookingError):
    """Malformed or missing request fields. Raised before any transaction opens."""

    kind = "validation"
    status_code = 400


class NotFoundError(BookingError):
    kind = "not_found"
    status_code = 404


class ConflictError(BookingError):
    """Seat no longer available, ticket number taken, or a race lost at write time."""

    kind = "conflict"
    status_code = 409


class InternalError(BookingError):
    kind = "internal"
    status_code = 500
