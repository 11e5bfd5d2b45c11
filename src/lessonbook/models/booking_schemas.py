# File: src/lessonbook/models/booking_schemas.py
"""Pydantic schemas for Booking API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from lessonbook.models.class_session_schemas import ClassSessionRead
from lessonbook.models.enums import BookingStatus


class BookingCreate(BaseModel):
    """Schema for booking a seat in a session."""

    session_id: UUID


class BookingRead(BaseModel):
    """Schema for reading a booking with its session."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    session_id: UUID
    status: BookingStatus
    created_at: datetime
    cancelled_at: datetime | None = None
    session: ClassSessionRead


class MessageResponse(BaseModel):
    message: str
