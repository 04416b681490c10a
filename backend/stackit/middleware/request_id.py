"""
StackIt Backend — Request ID Middleware
========================================

What:  Tags every request with a short correlation ID.
How:   Reuses the client's X-Request-ID header when present, otherwise
       generates one; stores it in a ContextVar and echoes it back.
Who:   The access logger and the exception handlers in main.py, which put
       the ID into every error body so a user report maps to a log line.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local; concurrent requests share a thread but not this value
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

REQUEST_ID_HEADER = "X-Request-ID"


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Behavior:
        1. Take X-Request-ID from the client (the SPA may set one per action)
        2. Otherwise generate an 8-char hex ID
        3. Expose it via request_id_var and request.state.request_id
        4. Return it in the X-Request-ID response header
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or new_request_id()

        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
