# File: src/lessonbook/models/class_session.py
"""ClassSession model for bookable live lessons."""

import uuid
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lessonbook.core.db import Base
from lessonbook.utils.datetime import now_utc

if TYPE_CHECKING:
    from lessonbook.models.booking import Booking


class ClassSession(Base):
    """A scheduled live lesson with a fixed number of seats."""

    __tablename__ = "class_sessions"
    __table_args__ = (
        CheckConstraint("duration > 0", name="ck_class_sessions_duration_positive"),
        CheckConstraint("max_participants > 0", name="ck_class_sessions_max_positive"),
        CheckConstraint(
            "current_participants >= 0", name="ck_class_sessions_current_non_negative"
        ),
        CheckConstraint(
            "current_participants <= max_participants",
            name="ck_class_sessions_within_capacity",
        ),
        CheckConstraint("points_required >= 0", name="ck_class_sessions_points_non_negative"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    # Naive UTC
    scheduled_at: Mapped[datetime] = mapped_column(
        nullable=False,
        index=True,
    )

    # Minutes
    duration: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=60,
    )

    max_participants: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )

    current_participants: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )

    points_required: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )

    is_active: Mapped[bool] = mapped_column(
        default=True,
        nullable=False,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        nullable=False,
        default=now_utc,
    )

    bookings: Mapped[list["Booking"]] = relationship(
        "Booking",
        back_populates="session",
    )

    @property
    def ends_at(self) -> datetime:
        """Scheduled start plus duration."""
        return self.scheduled_at + timedelta(minutes=self.duration)

    @property
    def is_full(self) -> bool:
        return self.current_participants >= self.max_participants

    @property
    def spots_available(self) -> int:
        """Remaining seats, clamped at zero if the counters disagree."""
        return max(0, self.max_participants - self.current_participants)

    def __repr__(self) -> str:
        return (
            f"<ClassSession(title={self.title}, scheduled_at={self.scheduled_at}, "
            f"{self.current_participants}/{self.max_participants})>"
        )
