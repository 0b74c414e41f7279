from fastapi import APIRouter

# Public: events, seat maps
from seatbook.api.v1.public.events import router as events_router

# Public: bookings
from seatbook.api.v1.public.bookings import router as bookings_router

# Admin
from seatbook.api.v1.admin.events import router as admin_events_router

api_router = APIRouter()

# --- Public: events & seats ---
api_router.include_router(events_router)

# --- Public: bookings ---
api_router.include_router(bookings_router)

# --- Admin ---
api_router.include_router(admin_events_router)
