"""SQLAlchemy-backed stores."""

from lessonbook.repositories.booking_repository import BookingRepository
from lessonbook.repositories.class_session_repository import SessionRepository
from lessonbook.repositories.profile_repository import ProfileRepository

__all__ = [
    "BookingRepository",
    "ProfileRepository",
    "SessionRepository",
]
