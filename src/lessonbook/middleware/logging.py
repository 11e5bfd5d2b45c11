"""Request logging and ID injection middleware."""

import time
import uuid

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from lessonbook.core.logging import get_logger, reset_request_id, set_request_id

logger = get_logger(__name__)


class RequestIDMiddleware:
    """
    Inject unique request ID into context.

    Every request gets a UUID. If X-Request-ID header exists, use it.
    The id is bound into the structlog context for the lifetime of the
    request, so every event logged while serving it carries the id. It is
    also echoed back as a response header.
    """

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = dict(scope.get("headers", []))
        request_id = headers.get(b"x-request-id", str(uuid.uuid4()).encode()).decode()
        token = set_request_id(request_id)
        started = time.perf_counter()

        async def send_with_request_id(message: Message) -> None:
            if message["type"] == "http.response.start":
                response_headers = list(message.get("headers", []))
                response_headers.append((b"x-request-id", request_id.encode()))
                message["headers"] = response_headers

                logger.info(
                    "request.complete",
                    status_code=message.get("status"),
                    duration_ms=int((time.perf_counter() - started) * 1000),
                )

            await send(message)

        try:
            logger.info("request.start", method=scope["method"], path=scope["path"])
            await self.app(scope, receive, send_with_request_id)
        finally:
            reset_request_id(token)
