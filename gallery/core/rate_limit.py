"""Rate limiting using slowapi"""

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from .config import settings

def get_rate_limit_key(request: Request) -> str:
    """Get rate limit key from the forwarded client address"""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return f"ip:{forwarded.split(',')[0].strip()}"
    return f"ip:{get_remote_address(request)}"

limiter = Limiter(
    key_func=get_rate_limit_key,
    default_limits=[settings.RATE_LIMIT_DEFAULT],
    storage_uri=settings.RATE_LIMIT_STORAGE_URL,
    strategy="fixed-window",
    enabled=settings.RATE_LIMIT_ENABLED,
)

# Shared limits for public endpoints
public_form_limit = limiter.shared_limit(settings.RATE_LIMIT_PUBLIC_FORMS, scope="public_forms")
checkout_limit = limiter.shared_limit(settings.RATE_LIMIT_CHECKOUT, scope="checkout")
