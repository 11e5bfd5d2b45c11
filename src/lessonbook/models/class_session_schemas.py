# File: src/lessonbook/models/class_session_schemas.py
"""Pydantic schemas for ClassSession and eligibility API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ClassSessionRead(BaseModel):
    """Schema for reading a class session."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    description: str | None = None
    scheduled_at: datetime
    duration: int = Field(..., description="Duration in minutes")
    max_participants: int
    current_participants: int
    spots_available: int
    points_required: int
    is_active: bool


class EligibilitySessionRead(BaseModel):
    """Session fields echoed in an eligibility answer."""

    id: UUID
    title: str
    points_required: int
    spots_available: int = Field(..., ge=0)


class EligibilityUserRead(BaseModel):
    """User fields echoed in an eligibility answer."""

    points: int
    active_bookings: int


class EligibilityRead(BaseModel):
    """Whether the current user may book a session, and why not."""

    can_book: bool
    reasons: list[str] = Field(default_factory=list)
    session: EligibilitySessionRead
    user: EligibilityUserRead
