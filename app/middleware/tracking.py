"""
Request tracking middleware.

Runs before every request (API, static assets and unknown paths alike):
counts a visit for the request path and marks the client as online.
"""
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

FORWARDED_FOR_HEADER = "x-forwarded-for"
UNKNOWN_CLIENT = "unknown"


def client_identifier(request: Request) -> str:
    """Forwarded-for header if present, else the peer address.

    The value is kept as-is; a multi-hop header is one opaque identifier.
    """
    forwarded = request.headers.get(FORWARDED_FOR_HEADER, "").strip()
    if forwarded:
        return forwarded
    if request.client and request.client.host:
        return request.client.host
    return UNKNOWN_CLIENT


class TrackingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        analytics = request.app.state.analytics
        analytics.visits.record_visit(request.url.path)
        analytics.presence.touch(client_identifier(request))
        return await call_next(request)
