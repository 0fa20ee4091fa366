from slowapi import Limiter
from slowapi.util import get_remote_address

from geosocial.config import settings

# Default limit applies to every route through SlowAPIMiddleware
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[f"{settings.RATE_LIMIT_PER_MINUTE}/minute"],
    enabled=not settings.is_testing,
)
