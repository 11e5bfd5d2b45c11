# File: src/lessonbook/models/profile.py
"""Learner profile holding the points balance."""

import uuid
from datetime import datetime

from sqlalchemy import CheckConstraint, Integer, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from lessonbook.core.db import Base
from lessonbook.utils.datetime import now_utc


class Profile(Base):
    """Per-user profile. New accounts may not have one yet."""

    __tablename__ = "profiles"
    __table_args__ = (CheckConstraint("points >= 0", name="ck_profiles_points_non_negative"),)

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        nullable=False,
        unique=True,
        index=True,
    )

    display_name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        default="",
    )

    points: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )

    created_at: Mapped[datetime] = mapped_column(
        nullable=False,
        default=now_utc,
    )

    def __repr__(self) -> str:
        return f"<Profile(user_id={self.user_id}, points={self.points})>"
