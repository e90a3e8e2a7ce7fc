"""
Allow-list CORS middleware.

Unlike Starlette's CORSMiddleware, a request from an unrecognized origin is
not rejected: the response names the first configured origin instead, so
the browser blocks it while the server still answers. Preview deployments
on ``*.vercel.app`` are always allowed. Two debug headers expose the
resolved origin and the configured list.
"""

from __future__ import annotations

import logging

from fastapi import Request
from fastapi.responses import Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

ALLOWED_ORIGIN_SUFFIX = ".vercel.app"
ALLOWED_METHODS = "POST, OPTIONS"
ALLOWED_HEADERS = "Content-Type"


def is_origin_allowed(origin: str | None, allowed_origins: list[str]) -> bool:
    if not origin:
        return False
    if origin in allowed_origins:
        return True
    return origin.endswith(ALLOWED_ORIGIN_SUFFIX)


def resolve_origin(origin: str | None, allowed_origins: list[str]) -> str:
    """Origin to echo back: the request's own if allowed, else the first configured one."""
    if is_origin_allowed(origin, allowed_origins):
        return origin
    return allowed_origins[0] if allowed_origins else ""


def cors_headers(origin: str | None, allowed_origins: list[str]) -> dict[str, str]:
    resolved = resolve_origin(origin, allowed_origins)
    return {
        "Access-Control-Allow-Origin": resolved or "*",
        "Vary": "Origin",
        "X-Debug-Origin": resolved,
        "X-Debug-Allowed": "|".join(allowed_origins),
        "Access-Control-Allow-Methods": ALLOWED_METHODS,
        "Access-Control-Allow-Headers": ALLOWED_HEADERS,
    }


class AllowListCORSMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, *, allowed_origins: list[str]) -> None:
        super().__init__(app)
        self.allowed_origins = list(allowed_origins)

    async def dispatch(self, request: Request, call_next):
        headers = cors_headers(request.headers.get("origin"), self.allowed_origins)

        # Preflight never reaches the routes
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=headers)

        response = await call_next(request)
        response.headers.update(headers)
        return response
