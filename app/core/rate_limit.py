"""Rate limiting configuration."""
import os
from slowapi import Limiter
from slowapi.util import get_remote_address


def get_client_ip(request):
    """Get client IP for rate limiting, considering proxies."""
    # Check X-Forwarded-For header (from reverse proxies)
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # X-Forwarded-For can contain multiple IPs, take the first one
        return forwarded.split(",")[0].strip()

    # Fall back to direct connection IP
    return get_remote_address(request)


# Only endpoints decorated with limiter.limit are throttled; no SlowAPIMiddleware is installed
# Uses Redis if REDIS_URL is set, falls back to memory for local dev
limiter = Limiter(
    key_func=get_client_ip,
    storage_uri=os.getenv("REDIS_URL", "memory://"),
    strategy="fixed-window"
)

# Rate limit definitions for different endpoint categories
# Note: campus WiFi shares public IPs via NAT, and a whole room scans the
# same QR code within a minute or two
RATE_LIMITS = {
    "check_in": "200/minute",

    # Manager endpoints
    "manager_write": "60/minute",
}
