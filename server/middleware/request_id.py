"""
Request ID middleware for tracing

Adds correlation IDs to all requests and binds them, together with the
caller's participant id, to the structlog context for the request.
"""

import uuid
import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Add request ID to all requests for tracing"""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        context = {"request_id": request_id}
        participant_id = request.headers.get("X-Participant-ID")
        if participant_id:
            context["participant_id"] = participant_id
        structlog.contextvars.bind_contextvars(**context)

        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            # Prevent context leaking into the next request on this worker
            structlog.contextvars.clear_contextvars()
