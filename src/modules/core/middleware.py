import uuid
from contextvars import ContextVar
from typing import Callable

import structlog
from django.http import HttpRequest, HttpResponse

correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")

logger = structlog.get_logger()

REQUEST_ID_HEADERS = ("HTTP_X_REQUEST_ID", "HTTP_X_CORRELATION_ID")


class CorrelationIdMiddleware:
    """Middleware that extracts or generates a correlation ID for each request.

    Reads ``X-Request-ID`` (or ``X-Correlation-ID``) from the incoming
    request, falling back to a new UUID4.  The ID is bound into structlog's
    context vars so every log line emitted while handling the request,
    including the service-layer workflow logs, carries it.  It is echoed
    back in the ``X-Request-ID`` response header.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        cid = self._incoming_id(request) or str(uuid.uuid4())
        correlation_id_var.set(cid)

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(correlation_id=cid)

        logger.info(
            "request_started",
            method=request.method,
            path=request.get_full_path(),
        )

        response = self.get_response(request)

        logger.info(
            "request_finished",
            method=request.method,
            path=request.get_full_path(),
            status_code=response.status_code,
        )

        response["X-Request-ID"] = cid
        return response

    @staticmethod
    def _incoming_id(request: HttpRequest) -> str:
        for header in REQUEST_ID_HEADERS:
            value = request.META.get(header, "").strip()
            if value:
                return value
        return ""
