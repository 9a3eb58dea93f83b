"""
Request size limit middleware for FastAPI services.

Uploaded sheets are capped at 100MB; the same ceiling applies to the JSON
body carrying their rows.
"""

from __future__ import annotations

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from .config import DEFAULT_MAX_REQUEST_BYTES


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """
    Reject requests whose Content-Length exceeds the limit with HTTP 413.

    Requests without a usable Content-Length are passed through; body
    parsing and the row-count limit on the request model still apply.
    """

    def __init__(self, app, max_request_size: int = DEFAULT_MAX_REQUEST_BYTES) -> None:
        super().__init__(app)
        self.max_request_size = max_request_size

    async def dispatch(self, request: Request, call_next):
        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit():
            if int(content_length) > self.max_request_size:
                limit_mb = self.max_request_size / (1024 * 1024)
                return JSONResponse(
                    status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                    content={"detail": f"Request body too large. Maximum size: {limit_mb:.1f}MB"},
                )

        return await call_next(request)
