from venue_platform.schemas.user import UserCreate, UserResponse, UserLogin, Token, AuthResponse
from venue_platform.schemas.venue import VenueCreate, VenueResponse, VenueListResponse
from venue_platform.schemas.appointment import (
    AppointmentCreate,
    AppointmentUpdate,
    AppointmentStatusUpdate,
    AppointmentResponse,
    AppointmentListResponse,
    AvailabilityResponse,
)

__all__ = [
    "UserCreate", "UserResponse", "UserLogin", "Token", "AuthResponse",
    "VenueCreate", "VenueResponse", "VenueListResponse",
    "AppointmentCreate", "AppointmentUpdate", "AppointmentStatusUpdate",
    "AppointmentResponse", "AppointmentListResponse", "AvailabilityResponse",
]
