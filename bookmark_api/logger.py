"""Structured logging for the Bookmark API.

structlog renders through the stdlib logging tree, so uvicorn and
SQLAlchemy records share one format: console output in debug mode, one
JSON object per line otherwise. Request-scoped fields (``request_id``,
``user_id``) arrive through ``structlog.contextvars``.

Credentials must never reach a log line. ``redact_secrets`` masks any
event field named like one, as a backstop for callers.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.stdlib import BoundLogger
from structlog.types import EventDict, Processor, WrappedLogger

from bookmark_api.config import settings

REDACTED = "[REDACTED]"
SENSITIVE_KEYS = frozenset(
    {
        "password",
        "hashed_password",
        "access_token",
        "token",
        "authorization",
        "secret_key",
    }
)


def redact_secrets(_: WrappedLogger, __: str, event_dict: EventDict) -> EventDict:
    """Mask values of credential-bearing keys."""
    for key in event_dict.keys() & SENSITIVE_KEYS:
        event_dict[key] = REDACTED
    return event_dict


def _build_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        redact_secrets,
        structlog.processors.add_log_level,
        structlog.processors.format_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]


def _select_renderer() -> Processor:
    if settings.debug:
        return structlog.dev.ConsoleRenderer()
    return structlog.processors.JSONRenderer()


def configure_logging() -> None:
    """Route structlog and stdlib records through one stdout handler."""

    processors = _build_processors()
    renderer = _select_renderer()

    structlog.configure(
        processors=processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=processors,
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    logging.basicConfig(
        handlers=[handler],
        level=getattr(logging, settings.effective_log_level, logging.INFO),
    )


def get_logger(name: str | None = None) -> BoundLogger:
    """Get a structured logger."""
    return structlog.get_logger(name)


def log_exception(
    logger: BoundLogger,
    exc: BaseException,
    context: str,
    *,
    level: str = "error",
    include_traceback: bool = True,
    **extra: Any,
) -> None:
    """Log an exception with its type and module.

    Expected failures skip the traceback; a duplicate email is not even an
    error, so it goes out at info level:

        except IntegrityError as exc:
            log_exception(logger, exc, "Signup rejected: email taken",
                          level="info", include_traceback=False)

    ``str(exc)`` is logged as ``error``. The application engine is created
    with ``hide_parameters`` outside debug mode, so SQLAlchemy errors carry
    the statement but not the bound values.
    """
    log_method = getattr(logger, level, logger.error)

    log_kwargs: dict[str, Any] = {
        "error": str(exc),
        "error_type": type(exc).__name__,
        "error_module": type(exc).__module__,
        **extra,
    }

    if include_traceback:
        log_method(context, exc_info=exc, **log_kwargs)
    else:
        log_method(context, **log_kwargs)
