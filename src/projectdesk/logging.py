"""
structlog setup shared by the API, the CLI and the resolvers.

Every event carries the request id and, once the caller is resolved, the
caller's user and tenant ids.
"""

import logging
import sys
import uuid
from contextvars import ContextVar
from typing import Any

import structlog

from .config import settings

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)
_caller_user_id: ContextVar[int | None] = ContextVar("caller_user_id", default=None)
_caller_tenant_id: ContextVar[int | None] = ContextVar("caller_tenant_id", default=None)


def add_request_context(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """structlog processor injecting the per-request context variables."""
    _ = logger, method_name

    for key, var in (
        ("request_id", _request_id),
        ("user_id", _caller_user_id),
        ("tenant_id", _caller_tenant_id),
    ):
        value = var.get()
        # explicit keyword arguments of the event win
        if value is not None:
            event_dict.setdefault(key, value)
    return event_dict


def configure_logging(debug: bool = False) -> None:
    """Configure structlog on top of the stdlib root logger.

    Debug mode renders colored console lines; otherwise one JSON object per
    event is written at ``settings.log_level``.
    """
    level = logging.DEBUG if debug else logging.getLevelName(settings.log_level.upper())

    logging.basicConfig(level=level, stream=sys.stdout, format="%(message)s", force=True)

    renderer: Any = (
        structlog.dev.ConsoleRenderer(colors=True)
        if debug
        else structlog.processors.JSONRenderer()
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            add_request_context,
            structlog.processors.TimeStamper(fmt="ISO", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    return structlog.get_logger(name)


def set_request_context(request_id: str | None = None) -> str:
    """Start the logging context of a request and return its id."""
    request_id = request_id or uuid.uuid4().hex[:16]
    _request_id.set(request_id)
    _caller_user_id.set(None)
    _caller_tenant_id.set(None)
    return request_id


def bind_caller(user_id: int | None, tenant_id: int | None) -> None:
    """Attach the resolved caller to the remaining log lines of this request."""
    _caller_user_id.set(user_id)
    _caller_tenant_id.set(tenant_id)


def clear_request_context() -> None:
    _request_id.set(None)
    _caller_user_id.set(None)
    _caller_tenant_id.set(None)
