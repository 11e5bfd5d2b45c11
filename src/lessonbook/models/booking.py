# File: src/lessonbook/models/booking.py
"""Booking model linking a user to a class session."""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, String, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lessonbook.core.db import Base
from lessonbook.models.enums import BookingStatus
from lessonbook.utils.datetime import now_utc

if TYPE_CHECKING:
    from lessonbook.models.class_session import ClassSession


class Booking(Base):
    """A user's seat in a class session."""

    __tablename__ = "bookings"
    __table_args__ = (
        # One ACTIVE booking per (user, session); cancelled rows don't count
        Index(
            "uq_bookings_one_active_per_user_session",
            "user_id",
            "session_id",
            unique=True,
            postgresql_where=text("status = 'ACTIVE'"),
            sqlite_where=text("status = 'ACTIVE'"),
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        nullable=False,
        index=True,
    )

    session_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("class_sessions.id"),
        nullable=False,
        index=True,
    )

    session: Mapped["ClassSession"] = relationship(
        "ClassSession",
        back_populates="bookings",
        lazy="selectin",
    )

    status: Mapped[BookingStatus] = mapped_column(
        String(20),
        nullable=False,
        default=BookingStatus.ACTIVE.value,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        nullable=False,
        default=now_utc,
    )

    cancelled_at: Mapped[datetime | None] = mapped_column(
        nullable=True,
    )

    @property
    def is_active(self) -> bool:
        return self.status == BookingStatus.ACTIVE

    def __repr__(self) -> str:
        return f"<Booking(user_id={self.user_id}, session_id={self.session_id}, status={self.status})>"
