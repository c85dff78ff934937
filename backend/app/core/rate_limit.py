"""
Rate limiting for Kisan Marketplace Backend
In-memory sliding window, per bearer token or client IP
"""
import time
from typing import Dict, List, Tuple
from collections import defaultdict
from fastapi import Request, HTTPException, status
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from app.core.config import settings


class RateLimiter:
    """
    In-memory rate limiter using sliding window algorithm.

    For production with multiple instances, consider using Redis.
    """

    def __init__(self):
        # {identifier: [timestamp, ...]}
        self._requests: Dict[str, List[float]] = defaultdict(list)
        self._last_cleanup = time.time()
        self._cleanup_interval = 60  # seconds

    def _cleanup_old_entries(self, window_seconds: int = 60):
        """Forget identifiers with no request in the last two windows"""
        now = time.time()
        if now - self._last_cleanup < self._cleanup_interval:
            return

        cutoff = now - window_seconds * 2
        for identifier in list(self._requests.keys()):
            self._requests[identifier] = [ts for ts in self._requests[identifier] if ts > cutoff]
            if not self._requests[identifier]:
                del self._requests[identifier]

        self._last_cleanup = now

    def is_allowed(
        self,
        identifier: str,
        max_requests: int,
        window_seconds: int = 60
    ) -> Tuple[bool, int, int]:
        """
        Check if a request is allowed under the rate limit.

        Returns:
            Tuple of (is_allowed, remaining_requests, retry_after_seconds)
        """
        self._cleanup_old_entries(window_seconds)

        now = time.time()
        in_window = [ts for ts in self._requests[identifier] if ts > now - window_seconds]
        self._requests[identifier] = in_window

        if len(in_window) >= max_requests:
            retry_after = int(min(in_window) + window_seconds - now) + 1
            return False, 0, retry_after

        in_window.append(now)
        return True, max_requests - len(in_window), 0

    def reset(self):
        self._requests.clear()


# Global rate limiter instance
rate_limiter = RateLimiter()


# Requests per minute
RATE_LIMITS = {
    "authenticated": 600,
    "unauthenticated": 120,
}

# Paths that are exempt from rate limiting
EXEMPT_PATHS = {
    "/",
    "/health",
    "/docs",
    "/openapi.json",
    "/redoc",
}


def _client_ip(request: Request) -> str:
    """Get the client IP, considering proxies"""
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    if request.client:
        return request.client.host
    return "unknown"


def _identifier(request: Request) -> Tuple[str, bool]:
    """(identifier, is_authenticated) for a request"""
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        return f"jwt:{hash(auth_header)}", True
    return f"ip:{_client_ip(request)}", False


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Middleware that applies rate limiting based on authentication status.

    Headers returned:
    - X-RateLimit-Limit: Maximum requests per window
    - X-RateLimit-Remaining: Remaining requests in current window
    - Retry-After: Seconds until a request is allowed again (when limited)
    """

    async def dispatch(self, request: Request, call_next):
        if request.url.path in EXEMPT_PATHS or request.method == "OPTIONS":
            return await call_next(request)

        identifier, authenticated = _identifier(request)
        limit = RATE_LIMITS["authenticated" if authenticated else "unauthenticated"]

        is_allowed, remaining, retry_after = rate_limiter.is_allowed(identifier, max_requests=limit)
        if not is_allowed:
            # JSONResponse instead of HTTPException so the response still goes through CORS
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content={"detail": "Rate limit exceeded. Please slow down."},
                headers={
                    "X-RateLimit-Limit": str(limit),
                    "X-RateLimit-Remaining": "0",
                    "Retry-After": str(retry_after),
                }
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(limit)
        response.headers["X-RateLimit-Remaining"] = str(remaining)
        return response


async def login_rate_limit(request: Request):
    """
    Dependency limiting login attempts per client and endpoint.

    Usage:
        @router.post("/vendor/login", dependencies=[Depends(login_rate_limit)])
    """
    identifier = f"endpoint:{request.url.path}:ip:{_client_ip(request)}"
    max_requests = settings.LOGIN_RATE_LIMIT

    is_allowed, _, retry_after = rate_limiter.is_allowed(identifier, max_requests=max_requests)
    if not is_allowed:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=f"Too many login attempts. Try again in {retry_after} seconds.",
            headers={
                "X-RateLimit-Limit": str(max_requests),
                "X-RateLimit-Remaining": "0",
                "Retry-After": str(retry_after),
            }
        )
