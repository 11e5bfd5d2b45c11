"""Structured logging: JSON events with the request id merged from context."""

import contextvars
import logging
import logging.config
import os

import structlog

NO_REQUEST_ID = "no-request-id"

request_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "request_id", default=NO_REQUEST_ID
)

# Shared by structlog events and stdlib records (uvicorn, sqlalchemy)
_SHARED_PROCESSORS = [
    structlog.contextvars.merge_contextvars,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.add_log_level,
]


def get_request_id() -> str:
    return request_id_var.get()


def set_request_id(request_id: str) -> contextvars.Token:
    """Make ``request_id`` current for this context and every log event in it.

    Returns the token to hand back to :func:`reset_request_id` once the
    request is done.
    """
    structlog.contextvars.bind_contextvars(request_id=request_id)
    return request_id_var.set(request_id)


def reset_request_id(token: contextvars.Token) -> None:
    request_id_var.reset(token)
    structlog.contextvars.unbind_contextvars("request_id")


def configure_logging() -> None:
    """Configure structlog and route stdlib logging through the same pipeline."""
    level = os.getenv("LOG_LEVEL", "INFO").upper()

    structlog.configure(
        processors=[
            *_SHARED_PROCESSORS,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "foreign_pre_chain": _SHARED_PROCESSORS,
                    "processors": [
                        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                        structlog.processors.JSONRenderer(),
                    ],
                },
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "formatter": "json",
                    "stream": "ext://sys.stdout",
                },
            },
            "loggers": {
                "": {"handlers": ["default"], "level": level},
            },
        }
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Module logger. Context (request id) is merged per event, not at import."""
    return structlog.get_logger(name)
