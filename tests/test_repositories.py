"""Tests for the SQLAlchemy stores."""

import uuid
from datetime import timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from lessonbook.models import BookingStatus
from lessonbook.repositories import BookingRepository, ProfileRepository, SessionRepository
from lessonbook.utils.datetime import now_utc
from tests.factories import BookingFactory, ClassSessionFactory, ProfileFactory


class TestSessionRepository:
    async def test_get_by_id(self, db_session: AsyncSession):
        created = await ClassSessionFactory.create(db_session, title="Grammar Workshop")

        found = await SessionRepository(db_session).get_by_id(created.id)

        assert found is not None
        assert found.title == "Grammar Workshop"

    async def test_get_by_id_missing_returns_none(self, db_session: AsyncSession):
        assert await SessionRepository(db_session).get_by_id(uuid.uuid4()) is None

    async def test_list_upcoming_skips_ended_and_inactive(self, db_session: AsyncSession):
        now = now_utc()
        later = await ClassSessionFactory.create(
            db_session, title="Later", scheduled_at=now + timedelta(days=3)
        )
        soon = await ClassSessionFactory.create(
            db_session, title="Soon", scheduled_at=now + timedelta(hours=2)
        )
        running = await ClassSessionFactory.create(
            db_session, title="Running", scheduled_at=now - timedelta(minutes=10), duration=60
        )
        await ClassSessionFactory.create(
            db_session, title="Ended", scheduled_at=now - timedelta(hours=3), duration=60
        )
        await ClassSessionFactory.create(
            db_session, title="Inactive", scheduled_at=now + timedelta(days=1), is_active=False
        )

        upcoming = await SessionRepository(db_session).list_upcoming(now)

        assert [s.id for s in upcoming] == [running.id, soon.id, later.id]

    async def test_list_upcoming_respects_limit(self, db_session: AsyncSession):
        now = now_utc()
        for day in range(1, 5):
            await ClassSessionFactory.create(db_session, scheduled_at=now + timedelta(days=day))

        upcoming = await SessionRepository(db_session).list_upcoming(now, limit=2)

        assert len(upcoming) == 2

    async def test_list_upcoming_keeps_long_sessions_still_running(
        self, db_session: AsyncSession
    ):
        now = now_utc()
        retreat = await ClassSessionFactory.create(
            db_session,
            title="Weekend Immersion",
            scheduled_at=now - timedelta(hours=30),
            duration=48 * 60,
        )
        await ClassSessionFactory.create(
            db_session, title="Yesterday", scheduled_at=now - timedelta(hours=26), duration=60
        )
        tomorrow = await ClassSessionFactory.create(
            db_session, scheduled_at=now + timedelta(days=1)
        )

        upcoming = await SessionRepository(db_session).list_upcoming(now)

        assert [s.id for s in upcoming] == [retreat.id, tomorrow.id]

    async def test_list_upcoming_limit_counts_running_sessions_first(
        self, db_session: AsyncSession
    ):
        now = now_utc()
        running = await ClassSessionFactory.create(
            db_session, scheduled_at=now - timedelta(minutes=15), duration=90
        )
        first_upcoming = await ClassSessionFactory.create(
            db_session, scheduled_at=now + timedelta(days=1)
        )
        await ClassSessionFactory.create(db_session, scheduled_at=now + timedelta(days=2))

        repo = SessionRepository(db_session)

        assert [s.id for s in await repo.list_upcoming(now, limit=1)] == [running.id]
        assert [s.id for s in await repo.list_upcoming(now, limit=2)] == [
            running.id,
            first_upcoming.id,
        ]

    async def test_list_upcoming_empty_catalogue(self, db_session: AsyncSession):
        assert await SessionRepository(db_session).list_upcoming(now_utc()) == []

    async def test_reserve_spot_until_full(self, db_session: AsyncSession):
        session = await ClassSessionFactory.create(
            db_session, max_participants=2, current_participants=0
        )
        repo = SessionRepository(db_session)

        assert await repo.reserve_spot(session.id) is True
        assert await repo.reserve_spot(session.id) is True
        assert await repo.reserve_spot(session.id) is False

        refreshed = await repo.get_by_id(session.id)
        assert refreshed.current_participants == 2
        assert refreshed.spots_available == 0

    async def test_release_spot_never_goes_negative(self, db_session: AsyncSession):
        session = await ClassSessionFactory.create(db_session, current_participants=1)
        repo = SessionRepository(db_session)

        assert await repo.release_spot(session.id) is True
        assert await repo.release_spot(session.id) is False

        refreshed = await repo.get_by_id(session.id)
        assert refreshed.current_participants == 0


class TestBookingRepository:
    async def test_list_active_for_user_filters_status_and_user(self, db_session: AsyncSession):
        user_id = uuid.uuid4()
        active = await BookingFactory.create(db_session, user_id=user_id)
        await BookingFactory.create(db_session, user_id=user_id, status=BookingStatus.CANCELLED)
        await BookingFactory.create(db_session, user_id=uuid.uuid4())

        bookings = await BookingRepository(db_session).list_active_for_user(user_id)

        assert [b.id for b in bookings] == [active.id]

    async def test_list_for_user_orders_by_session_start(self, db_session: AsyncSession):
        user_id = uuid.uuid4()
        now = now_utc()
        late = await ClassSessionFactory.create(db_session, scheduled_at=now + timedelta(days=5))
        early = await ClassSessionFactory.create(db_session, scheduled_at=now + timedelta(days=2))
        late_booking = await BookingFactory.create(db_session, user_id=user_id, session_id=late.id)
        early_booking = await BookingFactory.create(
            db_session, user_id=user_id, session_id=early.id, status=BookingStatus.CANCELLED
        )

        bookings = await BookingRepository(db_session).list_for_user(user_id)

        assert [b.id for b in bookings] == [early_booking.id, late_booking.id]

    async def test_add_loads_session(self, db_session: AsyncSession):
        user_id = uuid.uuid4()
        session = await ClassSessionFactory.create(db_session, title="Pronunciation Clinic")

        booking = await BookingRepository(db_session).add(
            BookingFactory.build(user_id, session.id)
        )

        assert booking.session.title == "Pronunciation Clinic"
        assert booking.is_active


class TestProfileRepository:
    async def test_get_by_user_id(self, db_session: AsyncSession):
        profile = await ProfileFactory.create(db_session, points=75)

        found = await ProfileRepository(db_session).get_by_user_id(profile.user_id)

        assert found is not None
        assert found.points == 75

    async def test_missing_profile_returns_none(self, db_session: AsyncSession):
        assert await ProfileRepository(db_session).get_by_user_id(uuid.uuid4()) is None
