"""Sentry context middleware to capture request context in error reports."""

import uuid

import sentry_sdk
from starlette.types import ASGIApp, Receive, Scope, Send

from lessonbook.core.logging import NO_REQUEST_ID, get_request_id


class SentryContextMiddleware:
    """
    Middleware to inject structured context into Sentry error reports.

    Captures:
    - request_id: Unique request identifier
    - user_id: Authenticated user ID from the signed session (if available)

    Must be added before SessionMiddleware so it runs after it and can
    read scope["session"].
    """

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = None
        for name, value in scope.get("headers", []):
            if name.lower() == b"x-request-id":
                request_id = value.decode("latin1")
                break
        if not request_id:
            request_id = get_request_id()
        if not request_id or request_id == NO_REQUEST_ID:
            request_id = str(uuid.uuid4())

        session = scope.get("session") or {}
        user_id = session.get("user_id")

        sentry_sdk.set_tag("request_id", request_id)
        if user_id:
            sentry_sdk.set_user({"id": user_id})
            sentry_sdk.set_tag("user_id", user_id)

        sentry_sdk.set_context(
            "request",
            {
                "method": scope.get("method"),
                "path": scope.get("path"),
                "request_id": request_id,
            },
        )

        await self.app(scope, receive, send)
