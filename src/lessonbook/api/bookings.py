"""Booking endpoints (create, list mine, cancel)."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from lessonbook.api.auth import get_current_user_id
from lessonbook.api.dependencies import get_booking_service
from lessonbook.models import BookingCreate, BookingRead, MessageResponse
from lessonbook.services.booking import BookingService

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.post("", response_model=BookingRead, status_code=status.HTTP_201_CREATED)
async def create_booking(
    payload: BookingCreate,
    user_id: UUID = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
):
    """Book a seat. 409 with the eligibility reasons when not allowed."""
    return await service.create_booking(user_id, payload.session_id)


@router.get("/my-bookings", response_model=list[BookingRead])
async def get_my_bookings(
    user_id: UUID = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
):
    return await service.list_my_bookings(user_id)


@router.delete("/{booking_id}", response_model=MessageResponse)
async def cancel_booking(
    booking_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
):
    await service.cancel_booking(user_id, booking_id)
    return MessageResponse(message="Booking cancelled successfully")
