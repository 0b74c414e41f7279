from typing import Annotated, Dict, Optional, List
from pydantic import BaseModel, Field, UUID4, model_validator
from datetime import datetime

from seatbook.models.event import LayoutType
from seatbook.schemas.seat import Seat, SeatMapRow

Count = Annotated[int, Field(ge=0)]


class RowGroup(BaseModel):
    row_count: Count
    seats_per_row: Count
    aisle_after_seat: Count = 0  # 0 = no aisle


# Event: base fields
class EventBase(BaseModel):
    title: Annotated[str, Field(min_length=1, max_length=255)]
    description: Optional[str] = None
    venue: Annotated[str, Field(min_length=1, max_length=255)]
    date: datetime
    image_url: Optional[str] = None


class EventCreate(EventBase):
    layout_type: LayoutType = LayoutType.LEGACY
    left_rows: Count = 0
    left_cols: Count = 0
    right_rows: Count = 0
    right_cols: Count = 0
    row_groups: Optional[List[RowGroup]] = None
    back_rows: Count = 0
    back_cols: Count = 0
    back_aisle_after_seat: Count = 0

    @model_validator(mode="after")
    def check_layout(self):
        if self.layout_type == LayoutType.FLEXIBLE and not self.row_groups:
            raise ValueError("row_groups is required for a FLEXIBLE layout")
        if self.layout_type == LayoutType.LEGACY and self.row_groups:
            raise ValueError("row_groups is only valid for a FLEXIBLE layout")
        return self


class EventUpdate(BaseModel):
    title: Optional[Annotated[str, Field(min_length=1, max_length=255)]] = None
    description: Optional[str] = None
    venue: Optional[Annotated[str, Field(min_length=1, max_length=255)]] = None
    date: Optional[datetime] = None
    image_url: Optional[str] = None

    # Any of these changes the seat grid (see services.events.update_event)
    layout_type: Optional[LayoutType] = None
    left_rows: Optional[Count] = None
    left_cols: Optional[Count] = None
    right_rows: Optional[Count] = None
    right_cols: Optional[Count] = None
    row_groups: Optional[List[RowGroup]] = None
    back_rows: Optional[Count] = None
    back_cols: Optional[Count] = None
    back_aisle_after_seat: Optional[Count] = None


class Event(EventBase):
    id: UUID4
    total_seats: int
    layout_type: LayoutType
    left_rows: int
    left_cols: int
    right_rows: int
    right_cols: int
    row_groups: Optional[List[RowGroup]] = None
    back_rows: int
    back_cols: int
    back_aisle_after_seat: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# Event list item (GET /events, includes seat counts)
class EventListItem(Event):
    booked_seats: int = 0
    available_seats: int = 0


# Event detail (GET /events/{id}): seats ordered by row then number
class EventDetail(Event):
    seats: List[Seat] = []
    row_aisles: Dict[str, int] = {}
    seat_map: List[SeatMapRow] = []
