"""Data access for bookings."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lessonbook.models import Booking, BookingStatus, ClassSession


class BookingRepository:
    """Async repository for Booking rows."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, booking_id: UUID) -> Booking | None:
        return await self.db.get(Booking, booking_id)

    async def list_active_for_user(self, user_id: UUID) -> list[Booking]:
        stmt = (
            select(Booking)
            .where(Booking.user_id == user_id)
            .where(Booking.status == BookingStatus.ACTIVE.value)
            .order_by(Booking.created_at.asc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def list_for_user(self, user_id: UUID) -> list[Booking]:
        """All of a user's bookings (any status), ordered by session start."""
        stmt = (
            select(Booking)
            .join(ClassSession, Booking.session_id == ClassSession.id)
            .where(Booking.user_id == user_id)
            .order_by(ClassSession.scheduled_at.asc(), Booking.created_at.asc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def add(self, booking: Booking) -> Booking:
        self.db.add(booking)
        await self.db.flush()
        await self.db.refresh(booking)
        # Async sessions can't lazy-load, so load the session up front
        await self.db.refresh(booking, attribute_names=["session"])
        return booking
