"""FastAPI providers for services."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from lessonbook.core.db import get_db
from lessonbook.services.booking import BookingService


async def get_booking_service(db: AsyncSession = Depends(get_db)) -> BookingService:
    return BookingService(db)
