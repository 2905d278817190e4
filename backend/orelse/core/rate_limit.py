"""Rate limiting configuration using slowapi."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from orelse.core.config import settings

# Create limiter instance
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[f"{settings.RATE_LIMIT_PER_MINUTE}/minute"],
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    strategy="fixed-window",
    enabled=settings.RATE_LIMIT_ENABLED,
)

# Specific rate limits for different endpoint types
RATE_LIMITS = {
    "api_read": "120/minute",
    "api_write": "30/minute",
    # Voting is cheap to spam
    "vote": "60/minute",
}
