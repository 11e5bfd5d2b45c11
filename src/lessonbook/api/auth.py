"""Current-user dependency.

Login lives in the platform's auth service; it stores the user id in the
signed session cookie, which is all this service reads.
"""

from uuid import UUID

from fastapi import HTTPException, status
from starlette.requests import Request

from lessonbook.core.logging import get_logger

logger = get_logger(__name__)


async def get_current_user_id(request: Request) -> UUID:
    """Dependency returning the authenticated user's id from the session."""
    raw_user_id = request.session.get("user_id")

    if not raw_user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    try:
        return UUID(str(raw_user_id))
    except (ValueError, TypeError):
        logger.warning("auth.invalid_session_user", user_id=str(raw_user_id))
        request.session.clear()
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
