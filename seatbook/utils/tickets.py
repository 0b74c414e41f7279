import re
from typing import Iterable, List

from seatbook.core.config import settings


def normalize_ticket(value: str) -> str:
    """Lowercase and drop all whitespace: ' Frei Karte ' -> 'freikarte'."""
    return re.sub(r"\s+", "", value).lower()


def is_free_ticket(value: str) -> bool:
    """True for any spelling of the free-ticket sentinel; those may repeat."""
    return normalize_ticket(value) == normalize_ticket(settings.FREE_TICKET_SENTINEL)


def unique_ticket_numbers(ticket_numbers: Iterable[str]) -> List[str]:
    """Ticket numbers subject to global uniqueness, in input order."""
    return [t for t in ticket_numbers if not is_free_ticket(t)]


def find_duplicates(ticket_numbers: Iterable[str]) -> List[str]:
    """Non-sentinel values appearing more than once (exact match), first-seen order."""
    seen = set()
    duplicates: List[str] = []
    for ticket in unique_ticket_numbers(ticket_numbers):
        if ticket in seen and ticket not in duplicates:
            duplicates.append(ticket)
        seen.add(ticket)
    return duplicates
