"""Security middleware."""

from collections.abc import Callable

from fastapi import Request
from fastapi.responses import Response
from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.middleware.base import BaseHTTPMiddleware

from thinkscope.config.settings import get_settings


settings = get_settings()

# In-memory rate limiter keyed by client address
limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)


class SimpleSecurityMiddleware(BaseHTTPMiddleware):
    """Adds essential security headers to every response."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Handle request with security headers."""
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if settings.ENVIRONMENT == "production":
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        return response


# Rate limiting decorators (use on endpoints)
auth_rate_limit = limiter.limit(settings.AUTH_RATE_LIMIT)  # Login and signup attempts
