"""Data access for class sessions, including write-time seat accounting."""

from datetime import datetime, timedelta
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from lessonbook.models import ClassSession


class SessionRepository:
    """Async repository for ClassSession rows."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, session_id: UUID) -> ClassSession | None:
        return await self.db.get(ClassSession, session_id)

    async def list_upcoming(self, now: datetime, limit: int = 50) -> list[ClassSession]:
        """Active sessions that have not ended yet, soonest first.

        Sessions still in progress are looked up in a window as wide as the
        longest duration and end-filtered in Python, since interval
        arithmetic on a column differs per backend. Sessions that have not
        started are limited in SQL.
        """
        active = ClassSession.is_active.is_(True)

        longest = await self.db.scalar(select(func.max(ClassSession.duration)).where(active))
        if longest is None:
            return []

        started_stmt = (
            select(ClassSession)
            .where(active)
            .where(ClassSession.scheduled_at <= now)
            .where(ClassSession.scheduled_at > now - timedelta(minutes=longest))
            .order_by(ClassSession.scheduled_at.asc())
        )
        started = await self.db.scalars(started_stmt)
        in_progress = [s for s in started.all() if s.ends_at > now][:limit]

        remaining = limit - len(in_progress)
        if remaining <= 0:
            return in_progress

        upcoming_stmt = (
            select(ClassSession)
            .where(active)
            .where(ClassSession.scheduled_at > now)
            .order_by(ClassSession.scheduled_at.asc())
            .limit(remaining)
        )
        upcoming = await self.db.scalars(upcoming_stmt)
        return in_progress + list(upcoming.all())

    async def reserve_spot(self, session_id: UUID) -> bool:
        """Take one seat if any is left. Returns False when the session is full.

        The capacity check happens inside the UPDATE so two concurrent
        bookings for the last seat cannot both succeed.
        """
        stmt = (
            update(ClassSession)
            .where(ClassSession.id == session_id)
            .where(ClassSession.current_participants < ClassSession.max_participants)
            .values(current_participants=ClassSession.current_participants + 1)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        reserved = result.rowcount == 1
        if reserved:
            await self._refresh_cached(session_id)
        return reserved

    async def release_spot(self, session_id: UUID) -> bool:
        """Give one seat back. Never drives the counter below zero."""
        stmt = (
            update(ClassSession)
            .where(ClassSession.id == session_id)
            .where(ClassSession.current_participants > 0)
            .values(current_participants=ClassSession.current_participants - 1)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        released = result.rowcount == 1
        if released:
            await self._refresh_cached(session_id)
        return released

    async def _refresh_cached(self, session_id: UUID) -> None:
        # Bulk UPDATE bypasses the identity map
        cached = await self.db.get(ClassSession, session_id)
        if cached is not None:
            await self.db.refresh(cached)
