"""Structured (JSON) logging for the field service API.

Every request gets a ``request_id`` (taken from ``X-Request-ID`` or
generated) bound to structlog's contextvars. The tenant and the user are not
read from headers: the auth dependency resolves them from the bearer token
and stores them in ``request.state``, which the middleware reads once the
endpoint has run.
"""

from __future__ import annotations

import logging
import sys
import time
from typing import Any, Dict, Optional
from uuid import uuid4

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response


REQUEST_ID_HEADER = "X-Request-ID"
TRACE_ID_HEADER = "X-Trace-ID"

# atributos de request.state preenchidos pela autenticação
IDENTITY_FIELDS = ("tenant_id", "user_id")


def configure_logging(service_name: str, level: int = logging.INFO) -> structlog.stdlib.BoundLogger:
    """Configure stdlib logging and structlog so every record is a JSON line.

    Safe to call more than once; ``logging.basicConfig`` is a no-op when the
    root logger already has handlers (pytest's caplog, uvicorn).
    """

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    return structlog.get_logger().bind(service=service_name)


def request_identity(request: Request) -> Dict[str, Optional[Any]]:
    """Tenant e usuário autenticados da requisição, ou None antes do login."""
    return {field: getattr(request.state, field, None) for field in IDENTITY_FIELDS}


class RequestContextLogMiddleware(BaseHTTPMiddleware):
    """Log one ``request_completed``/``request_failed`` line per request."""

    def __init__(self, app, *, logger: Optional[structlog.stdlib.BoundLogger] = None) -> None:
        super().__init__(app)
        self._logger = logger or structlog.get_logger()

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            trace_id=request.headers.get(TRACE_ID_HEADER) or request_id,
            path=request.url.path,
            method=request.method,
        )
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            self._logger.exception("request_failed", **request_identity(request))
            raise
        else:
            # a dependency de auth roda em outra task, então o tenant chega via request.state
            self._logger.info(
                "request_completed",
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
                **request_identity(request),
            )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            structlog.contextvars.clear_contextvars()
