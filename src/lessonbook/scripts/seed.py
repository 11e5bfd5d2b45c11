"""Seed script for LessonBook demo data."""

import asyncio
import random
from datetime import datetime, time, timedelta
from uuid import uuid4

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lessonbook.core.db import AsyncSessionLocal
from lessonbook.models import ClassSession, Profile
from lessonbook.utils.datetime import now_utc

SESSION_TEMPLATES = [
    {"title": "Conversation Club", "duration": 60, "max_participants": 8, "points_required": 0},
    {"title": "Grammar Workshop", "duration": 90, "max_participants": 12, "points_required": 0},
    {"title": "Pronunciation Clinic", "duration": 45, "max_participants": 4, "points_required": 20},
    {"title": "Business Writing", "duration": 60, "max_participants": 6, "points_required": 50},
]

SESSION_HOURS = [time(9, 0), time(14, 0), time(18, 30)]

DEMO_LEARNERS = [
    ("Ana", 0),
    ("Bruno", 30),
    ("Chloé", 120),
]


async def seed_profiles(db: AsyncSession) -> list[Profile]:
    """Create demo learner profiles with varied point balances."""
    result = await db.execute(select(Profile).limit(1))
    if result.scalar_one_or_none():
        print("ℹ️  Profiles already exist, skipping...")
        result = await db.execute(select(Profile))
        return list(result.scalars().all())

    profiles = []
    for display_name, points in DEMO_LEARNERS:
        profile = Profile(
            id=uuid4(),
            user_id=uuid4(),
            display_name=display_name,
            points=points,
        )
        profiles.append(profile)
        db.add(profile)

    await db.flush()
    print(f"✅ Created {len(profiles)} learner profiles")
    return profiles


def _slot(day: datetime, at: time) -> datetime:
    return day.replace(hour=at.hour, minute=at.minute, second=0, microsecond=0)


async def seed_sessions(db: AsyncSession, days: int = 14) -> list[ClassSession]:
    """Create sessions for the coming two weeks (one or two per day)."""
    result = await db.execute(select(ClassSession).limit(1))
    if result.scalar_one_or_none():
        print("ℹ️  Sessions already exist, skipping...")
        return []

    today = now_utc()
    sessions = []
    for offset in range(1, days + 1):
        day = today + timedelta(days=offset)
        for at in random.sample(SESSION_HOURS, k=random.randint(1, 2)):
            template = random.choice(SESSION_TEMPLATES)
            session = ClassSession(
                id=uuid4(),
                title=template["title"],
                scheduled_at=_slot(day, at),
                duration=template["duration"],
                max_participants=template["max_participants"],
                current_participants=random.randint(0, template["max_participants"]),
                points_required=template["points_required"],
                is_active=random.random() > 0.1,
            )
            sessions.append(session)
            db.add(session)

    await db.flush()
    print(f"✅ Created {len(sessions)} class sessions")
    return sessions


async def main():
    """Run seed script."""
    print("🌱 Starting LessonBook seed script...\n")

    async with AsyncSessionLocal() as db:
        profiles = await seed_profiles(db)
        sessions = await seed_sessions(db)
        await db.commit()

    print("\n🎉 Seed complete!")
    print(f"   👤 Profiles: {len(profiles)}")
    print(f"   📅 Sessions: {len(sessions)}")
    for profile in profiles:
        print(f"      {profile.display_name}: user_id={profile.user_id}")


def run() -> None:
    """Console entrypoint."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
