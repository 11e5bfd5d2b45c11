"""Class session read endpoints (list, get, eligibility)."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from lessonbook.api.auth import get_current_user_id
from lessonbook.api.dependencies import get_booking_service
from lessonbook.core.errors import NotFoundError
from lessonbook.models import ClassSessionRead, EligibilityRead
from lessonbook.services.booking import BookingService

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.get("", response_model=list[ClassSessionRead])
async def list_upcoming_sessions(
    limit: int = Query(50, ge=1, le=200),
    user_id: UUID = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
):
    """Active sessions that haven't ended, soonest first."""
    return await service.sessions.list_upcoming(service.clock(), limit=limit)


@router.get("/{session_id}", response_model=ClassSessionRead)
async def get_session(
    session_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
):
    session = await service.sessions.get_by_id(session_id)
    if session is None:
        raise NotFoundError("ClassSession", str(session_id))
    return session


@router.get("/{session_id}/eligibility", response_model=EligibilityRead)
async def check_eligibility(
    session_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
):
    """Can the current user book this session? Lists every blocking reason."""
    result = await service.evaluator.evaluate(session_id, user_id)
    return EligibilityRead.model_validate(result.to_payload())
