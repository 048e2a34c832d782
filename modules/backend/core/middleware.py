"""
Request Logging Middleware.

Tags every request with a correlation id, binds it into the structlog
context and writes one access log record per request. Enabled by the
``api_request_logging`` feature flag.
"""

import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from modules.backend.core.logging import get_logger
from modules.backend.core.utils import utc_now

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
RESPONSE_TIME_HEADER = "X-Response-Time"


def _elapsed_ms(start) -> int:
    return int((utc_now() - start).total_seconds() * 1000)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Correlates logs and responses for one request.

    The id comes from the caller's X-Request-ID header when present and
    is generated otherwise. It is stored on ``request.state.request_id``
    (read by the exception handlers) and echoed back on the response
    together with the elapsed time.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        started = utc_now()

        request.state.request_id = request_id
        request.state.start_time = started

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "Request failed",
                extra={
                    "duration_ms": _elapsed_ms(started),
                    "error_type": type(exc).__name__,
                },
            )
            raise
        else:
            duration_ms = _elapsed_ms(started)
            response.headers[REQUEST_ID_HEADER] = request_id
            response.headers[RESPONSE_TIME_HEADER] = f"{duration_ms}ms"
            logger.info(
                "Request handled",
                extra={
                    "status_code": response.status_code,
                    "duration_ms": duration_ms,
                    "client_host": request.client.host if request.client else None,
                },
            )
            return response
        finally:
            structlog.contextvars.clear_contextvars()
