import os

from slowapi import Limiter
from slowapi.util import get_remote_address

# Rate limiter for auth and AI endpoints (limit by IP)
limiter = Limiter(
    key_func=get_remote_address,
    enabled=os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true",
)
