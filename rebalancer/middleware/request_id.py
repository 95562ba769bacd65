"""
Request ID middleware.

Every log line emitted while serving a request carries the same
``request_id``; the id is echoed back in the ``X-Request-ID`` header.
"""

import re
import time
import uuid
from collections.abc import Callable

from django.http import HttpRequest, HttpResponse

import structlog

logger = structlog.get_logger(__name__)

HEADER = "X-Request-ID"

# Ids from upstream proxies are trusted only if they look like ids.
_VALID_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


class RequestIDMiddleware:
    """
    Binds ``request_id`` (and ``user_id`` once known) to structlog contextvars.

    An incoming X-Request-ID header is reused when it is well formed,
    otherwise a new UUID4 is generated. A ``request_finished`` event is
    logged with status and duration.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        incoming = request.headers.get(HEADER, "")
        request_id = incoming if _VALID_ID.match(incoming) else str(uuid.uuid4())
        request.id = request_id  # type: ignore

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        user = getattr(request, "user", None)
        if user is not None and user.is_authenticated:
            structlog.contextvars.bind_contextvars(user_id=user.pk)

        start = time.perf_counter()
        try:
            response = self.get_response(request)
            logger.debug(
                "request_finished",
                method=request.method,
                path=request.path,
                status=response.status_code,
                duration_ms=round((time.perf_counter() - start) * 1000, 1),
            )
        finally:
            structlog.contextvars.clear_contextvars()

        response[HEADER] = request_id
        return response
