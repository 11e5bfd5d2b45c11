"""Domain models package."""

from lessonbook.models.booking import Booking
from lessonbook.models.booking_schemas import BookingCreate, BookingRead, MessageResponse
from lessonbook.models.class_session import ClassSession
from lessonbook.models.class_session_schemas import (
    ClassSessionRead,
    EligibilityRead,
    EligibilitySessionRead,
    EligibilityUserRead,
)
from lessonbook.models.enums import BookingStatus
from lessonbook.models.profile import Profile

__all__ = [
    "Booking",
    "BookingCreate",
    "BookingRead",
    "BookingStatus",
    "ClassSession",
    "ClassSessionRead",
    "EligibilityRead",
    "EligibilitySessionRead",
    "EligibilityUserRead",
    "MessageResponse",
    "Profile",
]
