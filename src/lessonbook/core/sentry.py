"""Sentry error tracking configuration and initialization."""

import os

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from sentry_sdk.utils import BadDsn

from lessonbook.core.logging import get_logger

logger = get_logger(__name__)

_sentry_initialized = False


def init_sentry() -> None:
    """
    Initialize Sentry SDK for error tracking.

    Only initializes if SENTRY_DSN is set and looks like a URL, so local
    development and CI run without Sentry. Safe to call more than once.

    Configuration:
    - No performance tracing
    - No PII, and no SQLAlchemy integration (keeps queries out of payloads)
    - Logging integration disabled to avoid duplication with structlog
    """
    global _sentry_initialized

    if _sentry_initialized:
        return

    sentry_dsn = os.getenv("SENTRY_DSN")
    if not sentry_dsn:
        logger.info("sentry.disabled", message="Sentry DSN not found, error tracking disabled")
        return

    sentry_dsn_stripped = sentry_dsn.strip()
    if not sentry_dsn_stripped.startswith(("https://", "http://")):
        logger.info(
            "sentry.disabled",
            message="Sentry DSN appears to be invalid or placeholder, error tracking disabled",
            dsn_preview=sentry_dsn_stripped[:20] + "..." if len(sentry_dsn_stripped) > 20 else sentry_dsn_stripped,
        )
        return

    environment = os.getenv("ENVIRONMENT", "development")

    try:
        sentry_sdk.init(
            dsn=sentry_dsn_stripped,
            environment=environment,
            traces_sample_rate=0.0,
            send_default_pii=False,
            integrations=[
                FastApiIntegration(transaction_style="endpoint"),
                LoggingIntegration(level=None, event_level=None),
            ],
            before_send=_filter_sensitive_data,
        )
    except BadDsn as exc:
        logger.warning(
            "sentry.init_failed",
            message="Failed to initialize Sentry due to invalid DSN, error tracking disabled",
            error=str(exc),
        )
        return

    _sentry_initialized = True
    logger.info(
        "sentry.initialized", message="Sentry error tracking enabled", environment=environment
    )


def _filter_sensitive_data(event: dict, hint: dict) -> dict:
    """Drop SQL-bearing extras and breadcrumbs from Sentry events."""
    environment = os.getenv("ENVIRONMENT", "development").lower()
    if environment in {"test", "testing"}:
        return event

    extra = event.get("extra")
    if isinstance(extra, dict):
        event["extra"] = {
            key: value
            for key, value in extra.items()
            if "sql" not in str(key).lower() and "sql" not in str(value).lower()
        }

    breadcrumbs = event.get("breadcrumbs")
    if isinstance(breadcrumbs, dict):
        # SDK 2.x wraps breadcrumbs as {"values": [...]}
        values = breadcrumbs.get("values")
        if isinstance(values, list):
            breadcrumbs["values"] = [b for b in values if not _mentions_sql(b)]
    elif isinstance(breadcrumbs, list):
        event["breadcrumbs"] = [b for b in breadcrumbs if not _mentions_sql(b)]

    return event


def _mentions_sql(breadcrumb) -> bool:
    message = breadcrumb.get("message", "") if isinstance(breadcrumb, dict) else breadcrumb
    category = breadcrumb.get("category", "") if isinstance(breadcrumb, dict) else ""
    return "sql" in str(message).lower() or "sql" in str(category).lower()
