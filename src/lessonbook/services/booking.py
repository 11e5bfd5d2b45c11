"""Booking create / cancel / list use cases."""

from datetime import datetime
from typing import Callable
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from lessonbook.core.errors import (
    BookingNotAllowedError,
    ConflictError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
)
from lessonbook.core.logging import get_logger
from lessonbook.models import Booking, BookingStatus
from lessonbook.repositories import BookingRepository, ProfileRepository, SessionRepository
from lessonbook.services.eligibility import BookingEligibilityEvaluator
from lessonbook.utils.datetime import now_utc

logger = get_logger(__name__)


class BookingService:
    """Creates and cancels bookings on top of the eligibility rules.

    Changes are flushed, not committed; the caller owns the transaction
    (``get_db`` commits at the end of the request).
    """

    def __init__(self, db: AsyncSession, clock: Callable[[], datetime] = now_utc):
        self.db = db
        self.clock = clock
        self.sessions = SessionRepository(db)
        self.bookings = BookingRepository(db)
        self.profiles = ProfileRepository(db)
        self.evaluator = BookingEligibilityEvaluator(
            self.sessions, self.bookings, self.profiles, clock=clock
        )

    async def create_booking(self, user_id: UUID, session_id: UUID) -> Booking:
        """Book a seat.

        The eligibility check only advises; the seat itself is taken with a
        conditional UPDATE so the last seat can't be sold twice.
        """
        eligibility = await self.evaluator.evaluate(session_id, user_id)
        if not eligibility.can_book:
            logger.info(
                "booking.rejected",
                session_id=str(session_id),
                user_id=str(user_id),
                violated_rules=list(eligibility.violated_rules),
            )
            raise BookingNotAllowedError(
                list(eligibility.reasons),
                details={"session_id": str(session_id)},
            )

        if not await self.sessions.reserve_spot(session_id):
            raise ConflictError("Session is full", details={"session_id": str(session_id)})

        booking = Booking(
            user_id=user_id,
            session_id=session_id,
            status=BookingStatus.ACTIVE.value,
            created_at=self.clock(),
        )
        try:
            booking = await self.bookings.add(booking)
        except IntegrityError as exc:
            raise ConflictError(
                "Already booked this session",
                details={"session_id": str(session_id)},
            ) from exc

        logger.info(
            "booking.created",
            booking_id=str(booking.id),
            session_id=str(session_id),
            user_id=str(user_id),
        )
        return booking

    async def cancel_booking(self, user_id: UUID, booking_id: UUID) -> Booking:
        booking = await self.bookings.get_by_id(booking_id)
        if booking is None:
            raise NotFoundError("Booking", str(booking_id))
        if booking.user_id != user_id:
            raise ForbiddenError("You can only cancel your own bookings")
        if booking.status != BookingStatus.ACTIVE:
            raise InvalidStateError(
                "Booking is already cancelled",
                details={"booking_id": str(booking_id), "status": str(booking.status)},
            )

        booking.status = BookingStatus.CANCELLED.value
        booking.cancelled_at = self.clock()
        await self.db.flush()

        if not await self.sessions.release_spot(booking.session_id):
            logger.warning(
                "booking.release_spot_skipped",
                booking_id=str(booking_id),
                session_id=str(booking.session_id),
                message="Participant counter already at zero",
            )

        logger.info(
            "booking.cancelled",
            booking_id=str(booking_id),
            session_id=str(booking.session_id),
            user_id=str(user_id),
        )
        return booking

    async def list_my_bookings(self, user_id: UUID) -> list[Booking]:
        return await self.bookings.list_for_user(user_id)
