"""Rate limiting using slowapi."""

from contextvars import ContextVar

from fastapi import FastAPI, Request
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.types import ASGIApp, Receive, Scope, Send

from recipebox.config import Settings

# Limit string of the app serving the current request
_current_limit: ContextVar[str] = ContextVar("rate_limit", default="")

DEFAULT_LIMIT = "100/hour"


def get_caller_key(request: Request) -> str:
    """Rate-limit per bearer token when one is sent, else per client address."""
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer ") and len(auth_header) > 7:
        return auth_header[7:]
    return get_remote_address(request)


def hourly_limit() -> str:
    return _current_limit.get() or DEFAULT_LIMIT


# Initialize limiter; routes opt in with @limiter.limit(hourly_limit)
limiter = Limiter(key_func=get_caller_key, storage_uri="memory://")


class RateLimitSettingsMiddleware:
    """Exposes the app's configured hourly limit to `hourly_limit`."""

    def __init__(self, app: ASGIApp, limit: str):
        self.app = app
        self.limit = limit

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        token = _current_limit.set(self.limit)
        try:
            await self.app(scope, receive, send)
        finally:
            _current_limit.reset(token)


def setup_rate_limiting(app: FastAPI, settings: Settings) -> None:
    """Attach the limiter, its 429 handler and the configured limit to the app."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(RateLimitSettingsMiddleware, limit=f"{settings.rate_limit_per_hour}/hour")
