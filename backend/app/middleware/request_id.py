"""
Blog Backend - Request ID Middleware
======================================

What:  Gives every request an id, exposes it to loggers, and returns it in
       the X-Request-ID response header.
How:   Reuses a client-supplied X-Request-ID, otherwise generates a short
       UUID prefix. The id lives in a ContextVar (coroutine-local) and on
       request.state.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assigns a correlation id to each request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
