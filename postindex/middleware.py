"""Per-request headers and request-ID log correlation."""

import logging
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}

# Set for the duration of a request, read by RequestIDLogFilter
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDLogFilter(logging.Filter):
    """Stamp log records with the current request ID as ``record.request_id``.

    Records logged outside a request get ``"-"``.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or "-"
        return True


def install_request_id_logging(*logger_names: str) -> RequestIDLogFilter:
    """Attach one shared ``RequestIDLogFilter`` to each named logger."""
    log_filter = RequestIDLogFilter()
    for name in logger_names:
        logger = logging.getLogger(name)
        if not any(isinstance(f, RequestIDLogFilter) for f in logger.filters):
            logger.addFilter(log_filter)
    return log_filter


class ServiceHeadersMiddleware(BaseHTTPMiddleware):
    """Bind a request ID and add the service's response headers.

    The caller's ``X-Request-ID`` is reused when present, otherwise a UUID4
    is generated. It is echoed on the response next to the security headers.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        token = request_id_var.set(rid)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers[REQUEST_ID_HEADER] = rid
        response.headers.update(SECURITY_HEADERS)
        return response
