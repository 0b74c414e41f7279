from typing import List
from pydantic import BaseModel


# Error responses
class ErrorResponse(BaseModel):
    error: str  # validation | not_found | conflict | internal
    message: str


class SeatsUnavailableError(ErrorResponse):
    seat_ids: List[str] = []


class TicketNumbersTakenError(ErrorResponse):
    ticket_numbers: List[str] = []


class DeletedResponse(BaseModel):
    id: str
    deleted: bool
