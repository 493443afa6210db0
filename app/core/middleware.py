"""
ProposalHub - HTTP Middleware

RequestLoggingMiddleware tags each request with an ID and an API area and
logs one line when it completes. SecurityHeadersMiddleware adds browser
hardening headers; credential routes are additionally marked uncacheable.
RequestSizeLimitMiddleware turns oversized bodies into the usual error
envelope before they reach a handler.
"""

import time
from typing import Callable, Dict, FrozenSet

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from app.core.config import settings
from app.core.logging_config import (
    logger,
    set_request_id,
    set_api_area,
    new_request_id,
    clear_request_context,
)
from app.core.responses import error_response


# Liveness and docs traffic is not logged per request
QUIET_PATHS: FrozenSet[str] = frozenset({
    "/",
    "/favicon.ico",
    "/docs",
    "/redoc",
    "/openapi.json",
    f"{settings.API_PREFIX}/health",
    f"{settings.API_PREFIX}/proposals/health",
})

API_AREAS: Dict[str, str] = {
    "auth": "auth",
    "topics": "topics",
    "proposals": "proposals",
    "health": "health",
}

SLOW_REQUEST_MS = 1000


def api_area(path: str) -> str:
    """
    Which part of the API a path belongs to.

    /api/topics/category/web -> "topics"; paths outside the API prefix -> "site";
    unknown segments under the prefix -> "other".
    """
    prefix = settings.API_PREFIX.rstrip("/")
    if not path.startswith(prefix + "/"):
        return "site"
    first_segment = path[len(prefix) + 1:].split("/", 1)[0]
    return API_AREAS.get(first_segment, "other")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Sets X-Request-ID / X-Response-Time and logs each non-quiet request"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or new_request_id()
        path = request.url.path
        area = api_area(path)
        set_request_id(request_id)
        set_api_area(area)

        quiet = path in QUIET_PATHS
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.log_error_with_context(
                exc, context=f"{request.method} {path}", duration_ms=round(elapsed_ms, 2)
            )
            raise
        else:
            elapsed_ms = (time.perf_counter() - started) * 1000
            response.headers["X-Request-ID"] = request_id
            response.headers["X-Response-Time"] = f"{elapsed_ms:.2f}ms"

            if not quiet:
                logger.log_request(
                    request.method, path, response.status_code, elapsed_ms,
                    client_ip=request.client.host if request.client else None,
                )
                if elapsed_ms > SLOW_REQUEST_MS:
                    logger.warning(
                        f"Slow {area} request: {request.method} {path} took {elapsed_ms:.0f}ms",
                        extra={"event_type": "slow_request", "duration_ms": round(elapsed_ms, 2)}
                    )
            return response
        finally:
            clear_request_context()


class SecurityHeadersMiddleware(BaseHTTPMiddleware):

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        # Register and login responses carry account details
        if api_area(request.url.path) == "auth":
            response.headers["Cache-Control"] = "no-store"

        return response


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """Rejects bodies whose declared Content-Length exceeds max_size with a 413 envelope"""

    def __init__(self, app: ASGIApp, max_size: int = 10 * 1024 * 1024):
        super().__init__(app)
        self.max_size = max_size

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        declared = request.headers.get("content-length", "")
        if declared.isdigit() and int(declared) > self.max_size:
            limit_mb = self.max_size / (1024 * 1024)
            logger.warning(
                f"Rejected {declared}-byte body on {request.method} {request.url.path}",
                extra={"event_type": "payload_too_large", "content_length": int(declared),
                       "max_size": self.max_size}
            )
            return error_response(
                f"Request body too large. Maximum size is {limit_mb:g}MB",
                413,
                error={
                    "code": "PAYLOAD_TOO_LARGE",
                    "message": "Request body too large",
                    "details": {"maxBytes": self.max_size, "receivedBytes": int(declared)},
                },
            )

        return await call_next(request)
